# models.py
import re
from typing import Any

from pydantic import BaseModel

from credit_kernel.exceptions import InvalidWalletAddressError

WALLET_ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


def validate_wallet_address(wallet_address) -> str:
    if not isinstance(wallet_address, str) or not WALLET_ADDRESS_PATTERN.fullmatch(wallet_address):
        raise InvalidWalletAddressError(wallet_address)
    return wallet_address


class WalletRequest(BaseModel):
    wallet_address: Any = None
