"""
Pytest fixtures for the credit score kernel. Providers are faked so tests run
without Alchemy access.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from credit_kernel.chains import build_chain_profiles
from credit_kernel.config import Settings

VALID_WALLET = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


class FakeProvider:
    """
    Stand-in for AlchemyProvider. ``transfers`` maps a category tuple to the
    records returned for it; values that are exceptions are raised instead.
    ``transfer_delays`` maps the same keys to a sleep before answering.
    """

    def __init__(self, count=0, transfers=None, owned_tokens=None, count_delay=0.0, transfer_delays=None):
        self.count = count
        self.transfers = transfers or {}
        self.owned_tokens = owned_tokens if owned_tokens is not None else []
        self.count_delay = count_delay
        self.transfer_delays = transfer_delays or {}
        self.calls = []

    async def get_transaction_count(self, address):
        self.calls.append(("count", address))
        if self.count_delay:
            await asyncio.sleep(self.count_delay)
        if isinstance(self.count, BaseException):
            raise self.count
        return self.count

    async def get_asset_transfers(self, address, categories, max_count, order="asc"):
        key = (tuple(categories), max_count)
        self.calls.append(("transfers", tuple(categories), max_count, order))
        if self.transfer_delays.get(key):
            await asyncio.sleep(self.transfer_delays[key])
        records = self.transfers.get(key, [])
        if isinstance(records, BaseException):
            raise records
        return records

    async def get_owned_tokens(self, address, page_size):
        self.calls.append(("owned_tokens", page_size))
        if isinstance(self.owned_tokens, BaseException):
            raise self.owned_tokens
        return self.owned_tokens


def transfer(timestamp=None):
    return {"metadata": {"blockTimestamp": timestamp}} if timestamp else {"metadata": {}}


@pytest.fixture
def settings():
    return Settings(ALCHEMY_API_KEY="test-key", FETCH_TIMEOUT_SECONDS=0.2)


@pytest.fixture
def profiles(settings):
    return build_chain_profiles(settings)


@pytest.fixture
def make_aggregator(settings, profiles):
    from credit_kernel.data_aggregator import DataAggregator

    def _make(providers, chain_profiles=None, agg_settings=None):
        def factory(session, profile):
            return providers.get(profile.name) or FakeProvider()

        return DataAggregator(
            profiles=chain_profiles if chain_profiles is not None else profiles,
            settings=agg_settings or settings,
            provider_factory=factory,
        )

    return _make
