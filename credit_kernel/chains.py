"""
Chain registry
Static per-chain profiles: provider network, weight, capabilities and the
ordered stages used to resolve a wallet's first activity on that chain.
"""
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from credit_kernel.config import Settings, settings as default_settings

TRANSFERS = "transfers"
OWNED_TOKENS = "owned_tokens"

BROAD_CATEGORIES = ("external", "erc20", "erc721", "erc1155")
INTERNAL_CATEGORY = "internal"


@dataclass(frozen=True)
class TimestampStage:
    """One step of the first-activity lookup.

    ``categories=None`` means the chain's broad category set, which includes
    ``internal`` where the chain supports it.
    """
    name: str
    kind: str = TRANSFERS
    categories: Optional[Tuple[str, ...]] = None
    max_count: int = 1


@dataclass(frozen=True)
class ChainProfile:
    name: str
    network: str
    weight: float
    supports_internal_tx: bool = False
    supports_nft_acquisition: bool = False
    enabled: bool = True
    timestamp_stages: Tuple[TimestampStage, ...] = ()

    def transfer_categories(self, stage: TimestampStage) -> Tuple[str, ...]:
        if stage.categories is not None:
            return stage.categories
        if self.supports_internal_tx:
            return BROAD_CATEGORIES + (INTERNAL_CATEGORY,)
        return BROAD_CATEGORIES


TRANSFER_STAGES = (
    TimestampStage(name="first_transfer", max_count=1),
    TimestampStage(name="more_transfers", max_count=10),
    TimestampStage(name="erc20_transfers", categories=("erc20",), max_count=5),
)
NFT_STAGE = TimestampStage(name="nft_acquisition", kind=OWNED_TOKENS, max_count=5)


def _profile(name, network, weight, internal=False, nft=False) -> ChainProfile:
    stages = TRANSFER_STAGES + (NFT_STAGE,) if nft else TRANSFER_STAGES
    return ChainProfile(
        name=name,
        network=network,
        weight=weight,
        supports_internal_tx=internal,
        supports_nft_acquisition=nft,
        timestamp_stages=stages,
    )


DEFAULT_CHAINS: Tuple[ChainProfile, ...] = (
    _profile("ethereum", "eth-mainnet", 1.0, internal=True, nft=True),
    _profile("polygon", "polygon-mainnet", 0.8, internal=True),
    _profile("arbitrum", "arb-mainnet", 0.7),
    _profile("optimism", "opt-mainnet", 0.7, internal=True),
    _profile("base", "base-mainnet", 0.7),
    _profile("avalanche", "avax-mainnet", 0.7),
    _profile("bsc", "bnb-mainnet", 0.6),
    _profile("fantom", "fantom-mainnet", 0.6),
    _profile("zksync", "zksync-mainnet", 0.7),
)


def build_chain_profiles(settings: Settings) -> Mapping[str, ChainProfile]:
    """Read-only registry of the default chains with enable flags from settings."""
    profiles = {
        chain.name: replace(chain, enabled=settings.is_chain_enabled(chain.name))
        for chain in DEFAULT_CHAINS
    }
    return MappingProxyType(profiles)


CHAIN_PROFILES = build_chain_profiles(default_settings)
