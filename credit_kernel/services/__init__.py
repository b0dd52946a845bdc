from credit_kernel.services.alchemy_client import (
    AlchemyProvider,
    acquisition_timestamp,
    parse_timestamp,
    transfer_timestamp,
)

__all__ = [
    "AlchemyProvider",
    "acquisition_timestamp",
    "parse_timestamp",
    "transfer_timestamp",
]
