"""
Chain data provider
Alchemy JSON-RPC and NFT API calls for a single chain, over a shared aiohttp session
"""
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

import aiohttp

from credit_kernel.chains import ChainProfile
from credit_kernel.config import settings as default_settings
from credit_kernel.exceptions import ProviderError


def parse_timestamp(value) -> Optional[datetime]:
    """ISO-8601 string to an aware UTC datetime, None if missing or malformed."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def transfer_timestamp(transfer: Dict) -> Optional[datetime]:
    metadata = transfer.get("metadata") or {}
    return parse_timestamp(metadata.get("blockTimestamp"))


def acquisition_timestamp(token: Dict) -> Optional[datetime]:
    # NFT API v3 returns {"blockTimestamp": ..., "blockNumber": ...}; older payloads a bare string
    acquired = token.get("acquiredAt")
    if isinstance(acquired, dict):
        acquired = acquired.get("blockTimestamp")
    return parse_timestamp(acquired)


class AlchemyProvider:
    """
    Provider for one chain:
    - transaction count (eth_getTransactionCount)
    - outgoing asset transfers, oldest first (alchemy_getAssetTransfers)
    - owned NFTs with acquisition data (getNFTsForOwner)
    """

    def __init__(self, session: aiohttp.ClientSession, profile: ChainProfile, api_key: str,
                 base_url: str = None):
        self.session = session
        self.profile = profile
        base = (base_url or default_settings.ALCHEMY_BASE_URL).format(network=profile.network)
        self.core_url = f"{base}/v2/{api_key}"
        self.nft_url = f"{base}/nft/v3/{api_key}"

    async def _rpc(self, method: str, params: list):
        payload = {
            "id": 1,
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
        }
        async with self.session.post(self.core_url, json=payload) as resp:
            resp.raise_for_status()
            data = await resp.json()

        if "error" in data:
            raise ProviderError(self.profile.name, method, data["error"])
        if "result" not in data:
            raise ProviderError(self.profile.name, method, "response has no result")
        return data["result"]

    async def get_transaction_count(self, address: str) -> int:
        result = await self._rpc("eth_getTransactionCount", [address, "latest"])
        return int(result, 16) if isinstance(result, str) else int(result)

    async def get_asset_transfers(
        self,
        address: str,
        categories: Sequence[str],
        max_count: int,
        order: str = "asc",
    ) -> List[Dict]:
        result = await self._rpc("alchemy_getAssetTransfers", [{
            "fromBlock": "0x0",
            "toBlock": "latest",
            "fromAddress": address,
            "category": list(categories),
            "maxCount": hex(max_count),
            "order": order,
            "withMetadata": True,
            "excludeZeroValue": False,
        }])
        return result.get("transfers", []) or []

    async def get_owned_tokens(self, address: str, page_size: int) -> List[Dict]:
        params = {
            "owner": address,
            "pageSize": str(page_size),
            "withMetadata": "false",
        }
        async with self.session.get(f"{self.nft_url}/getNFTsForOwner", params=params) as resp:
            resp.raise_for_status()
            data = await resp.json()
        return data.get("ownedNfts", []) or []
