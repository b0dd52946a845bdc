"""
Credit Scoring System
Weighted transaction, account age and cross-chain activity components mapped
onto a bounded integer score.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Mapping, Optional

from credit_kernel.chains import ChainProfile

TX_COUNT_WEIGHT = 0.5
AGE_WEIGHT = 0.3
ACTIVITY_WEIGHT = 0.2

MAX_TX_COUNT = 500
MAX_ACCOUNT_AGE_DAYS = 730
MAX_NETWORKS = 5

ACTIVE_NETWORK_MIN_TX = 3
NEW_WALLET_AGE_DAYS = 30
NEW_WALLET_AGE_BONUS = 0.1
DEFAULT_CHAIN_WEIGHT = 0.5


@dataclass
class ChainActivity:
    count: int = 0
    first_activity: Optional[datetime] = None


@dataclass
class ScoreResult:
    score: int
    tx_component: float
    age_component: float
    activity_component: float
    weighted_sum: float
    tx_count: int
    weighted_tx_count: float
    active_networks: int
    account_age_days: int
    status: str
    details: Dict[str, ChainActivity] = field(default_factory=dict)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class CreditScorer:
    """
    Credit scoring based on multi-chain transaction activity
    """

    def __init__(self, min_score: int = 300, max_score: int = 850, pass_threshold: int = 600):
        if min_score >= max_score:
            raise ValueError("min_score must be lower than max_score")
        self.min_score = min_score
        self.max_score = max_score
        self.pass_threshold = pass_threshold

    def calculate(
        self,
        activities: Mapping[str, ChainActivity],
        profiles: Mapping[str, ChainProfile],
        account_age_days: int,
    ) -> ScoreResult:
        """Calculate credit score from per-chain activity and account age"""
        weighted_tx_count = 0.0
        total_transactions = 0
        active_networks = 0

        for chain, activity in activities.items():
            profile = profiles.get(chain)
            weight = profile.weight if profile is not None else DEFAULT_CHAIN_WEIGHT

            weighted_tx_count += activity.count * weight
            total_transactions += activity.count
            if activity.count >= ACTIVE_NETWORK_MIN_TX:
                active_networks += 1

        tx_component = self._tx_component(weighted_tx_count)
        age_component = self._age_component(account_age_days, total_transactions)
        activity_component = min(active_networks / MAX_NETWORKS, 1.0)

        weighted_sum = (
            tx_component * TX_COUNT_WEIGHT +
            age_component * AGE_WEIGHT +
            activity_component * ACTIVITY_WEIGHT
        )

        score = round_half_up(self.min_score + weighted_sum * (self.max_score - self.min_score))
        score = max(self.min_score, min(score, self.max_score))

        return ScoreResult(
            score=score,
            tx_component=tx_component,
            age_component=age_component,
            activity_component=activity_component,
            weighted_sum=weighted_sum,
            tx_count=total_transactions,
            weighted_tx_count=weighted_tx_count,
            active_networks=active_networks,
            account_age_days=account_age_days,
            status=self.status_for(score),
            details=dict(activities),
        )

    def status_for(self, score: int) -> str:
        return "pass" if score >= self.pass_threshold else "fail"

    def _tx_component(self, weighted_tx_count: float) -> float:
        """Log scale: early transactions count most, heavy users saturate at 1"""
        if weighted_tx_count <= 0:
            return 0.0
        return min(math.log(1 + weighted_tx_count) / math.log(1 + MAX_TX_COUNT), 1.0)

    def _age_component(self, account_age_days: int, total_transactions: int) -> float:
        age_bonus = 0.0
        if total_transactions > 0 and account_age_days < NEW_WALLET_AGE_DAYS:
            age_bonus = NEW_WALLET_AGE_BONUS
        ratio = max(account_age_days, 0) / MAX_ACCOUNT_AGE_DAYS
        return min(math.sqrt(ratio) + age_bonus, 1.0)
