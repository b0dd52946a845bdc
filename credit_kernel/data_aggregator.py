"""
Multi-chain Data Aggregator
Fans out one fetch per enabled chain, resolves first-activity timestamps through
each chain's fallback stages, derives the account age and scores the result.
"""

import asyncio
from datetime import datetime, timezone
from typing import Callable, Dict, Mapping, Optional

import aiohttp

from credit_kernel.chains import (
    CHAIN_PROFILES,
    OWNED_TOKENS,
    ChainProfile,
    TimestampStage,
    build_chain_profiles,
)
from credit_kernel.config import Settings, settings as default_settings
from credit_kernel.credit_scorer import ChainActivity, CreditScorer, ScoreResult
from credit_kernel.kernel_logging import get_logger
from credit_kernel.models import validate_wallet_address
from credit_kernel.services.alchemy_client import (
    AlchemyProvider,
    acquisition_timestamp,
    transfer_timestamp,
)

logger = get_logger(__name__)

DAYS_PER_TRANSACTION_ESTIMATE = 5
MAX_ESTIMATED_AGE_DAYS = 365

ProviderFactory = Callable[[aiohttp.ClientSession, ChainProfile], object]


def derive_account_age(activities: Mapping[str, ChainActivity], now: datetime) -> int:
    """
    Account age in whole days from the earliest first activity on any chain.

    Falls back to 5 days per transaction (capped at a year) when chains report
    transactions but no timestamp could be found.
    """
    timestamps = [a.first_activity for a in activities.values() if a.first_activity is not None]
    if timestamps:
        earliest = min(timestamps)
        return max((now - earliest).days, 0)

    total_tx_count = sum(a.count for a in activities.values())
    if total_tx_count > 0:
        return min(total_tx_count * DAYS_PER_TRANSACTION_ESTIMATE, MAX_ESTIMATED_AGE_DAYS)
    return 0


class DataAggregator:
    """
    Aggregator that scores a wallet from activity on every configured chain:
    - transaction count per chain
    - first activity per chain, via ordered fallback stages
    - account age across chains
    """

    def __init__(
        self,
        profiles: Optional[Mapping[str, ChainProfile]] = None,
        settings: Optional[Settings] = None,
        provider_factory: Optional[ProviderFactory] = None,
        scorer: Optional[CreditScorer] = None,
    ):
        self.settings = settings or default_settings
        if profiles is None:
            profiles = CHAIN_PROFILES if settings is None else build_chain_profiles(self.settings)
        self.profiles = profiles
        self.timeout = self.settings.FETCH_TIMEOUT_SECONDS
        self.provider_factory = provider_factory or self._alchemy_provider
        self.scorer = scorer or CreditScorer(
            min_score=self.settings.MIN_SCORE,
            max_score=self.settings.MAX_SCORE,
            pass_threshold=self.settings.PASS_THRESHOLD,
        )

    def _alchemy_provider(self, session: aiohttp.ClientSession, profile: ChainProfile) -> AlchemyProvider:
        return AlchemyProvider(
            session,
            profile,
            api_key=self.settings.api_key_for(profile.name),
            base_url=self.settings.ALCHEMY_BASE_URL,
        )

    async def compute_score(self, wallet_address: str, now: Optional[datetime] = None) -> ScoreResult:
        """Score a wallet. Raises InvalidWalletAddressError before any fetch."""
        address = validate_wallet_address(wallet_address)
        log = logger.bind(wallet=address)

        activities = await self.collect_activity(address)
        account_age_days = derive_account_age(activities, now or datetime.now(timezone.utc))
        result = self.scorer.calculate(activities, self.profiles, account_age_days)

        log.debug(
            "score_components",
            tx_component=round(result.tx_component, 4),
            age_component=round(result.age_component, 4),
            activity_component=round(result.activity_component, 4),
            weighted_sum=round(result.weighted_sum, 4),
            tx_count=result.tx_count,
            weighted_tx_count=result.weighted_tx_count,
            active_networks=result.active_networks,
            account_age_days=account_age_days,
        )
        log.info("score_calculated", score=result.score, status=result.status)
        return result

    async def collect_activity(self, address: str) -> Dict[str, ChainActivity]:
        """One ChainActivity per configured chain; failed or disabled chains stay at zero."""
        activities = {name: ChainActivity() for name in self.profiles}
        enabled = [profile for profile in self.profiles.values() if profile.enabled]
        if not enabled:
            return activities

        async with aiohttp.ClientSession() as session:
            results = await asyncio.gather(
                *(self._fetch_chain(session, profile, address) for profile in enabled),
                return_exceptions=True,
            )

        for profile, outcome in zip(enabled, results):
            if isinstance(outcome, BaseException):
                logger.warning(
                    "chain_fetch_failed",
                    chain=profile.name,
                    error=repr(outcome),
                )
                continue
            activities[profile.name] = outcome
        return activities

    async def _fetch_chain(self, session: aiohttp.ClientSession, profile: ChainProfile, address: str) -> ChainActivity:
        provider = self.provider_factory(session, profile)
        count = await asyncio.wait_for(provider.get_transaction_count(address), self.timeout)
        count = max(int(count), 0)
        logger.debug("transaction_count", chain=profile.name, count=count)

        first_activity = None
        if count > 0:
            first_activity = await self._resolve_first_activity(provider, profile, address)
        return ChainActivity(count=count, first_activity=first_activity)

    async def _resolve_first_activity(self, provider, profile: ChainProfile, address: str):
        for stage in profile.timestamp_stages:
            try:
                timestamp = await asyncio.wait_for(
                    self._run_stage(provider, profile, stage, address),
                    self.timeout,
                )
            except Exception as e:
                logger.warning("timestamp_stage_failed", chain=profile.name, stage=stage.name, error=repr(e))
                continue

            if timestamp is not None:
                logger.debug(
                    "first_activity_found",
                    chain=profile.name,
                    stage=stage.name,
                    first_activity=timestamp.isoformat(),
                )
                return timestamp

        logger.debug("first_activity_unknown", chain=profile.name)
        return None

    async def _run_stage(self, provider, profile: ChainProfile, stage: TimestampStage, address: str):
        if stage.kind == OWNED_TOKENS:
            tokens = await provider.get_owned_tokens(address, page_size=stage.max_count)
            records, extract = tokens, acquisition_timestamp
        else:
            transfers = await provider.get_asset_transfers(
                address,
                categories=profile.transfer_categories(stage),
                max_count=stage.max_count,
                order="asc",
            )
            records, extract = transfers, transfer_timestamp

        for record in records:
            timestamp = extract(record)
            if timestamp is not None:
                return timestamp
        return None


async def compute_score(wallet_address: str, chain_profiles: Optional[Mapping[str, ChainProfile]] = None) -> ScoreResult:
    return await DataAggregator(profiles=chain_profiles).compute_score(wallet_address)
