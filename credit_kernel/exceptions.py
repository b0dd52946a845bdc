"""Exception taxonomy for the credit score kernel."""


class KernelError(Exception):
    """Base class for kernel errors."""


class InvalidWalletAddressError(KernelError, ValueError):
    """Wallet address is not a 0x-prefixed 20-byte hex string."""

    def __init__(self, wallet_address):
        self.wallet_address = wallet_address
        super().__init__(f"Invalid wallet address: {wallet_address!r}")


class ProviderError(KernelError):
    """Chain data provider answered with an error payload."""

    def __init__(self, chain: str, method: str, detail):
        self.chain = chain
        self.method = method
        self.detail = detail
        super().__init__(f"{chain}: {method} failed: {detail}")
