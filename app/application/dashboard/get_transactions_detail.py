"""
Use case: Deposits and withdrawals detail view.

Input: GetDomainDetailQuery (user_id, timeframe)
Output: TransactionsDetailResult
Side effects: None (read-only query).
Failure cases: None. Unreadable sources degrade to zero.
"""

import logging
from typing import Optional

from app.application.dashboard.clock import Clock, utc_now
from app.application.dashboard.dtos import (
    GetDomainDetailQuery,
    TransactionsDetailResult,
)
from app.application.dashboard.fetcher import FaultIsolatedFetcher, failed_sources
from app.domain.dashboard.bucketing import empty_totals
from app.domain.dashboard.ports import DepositRepository, WithdrawalRepository
from app.domain.dashboard.timeframes import parse_timeframe
from app.domain.dashboard.transaction_aggregator import (
    TransactionAggregator,
    TransactionBucket,
)

logger = logging.getLogger(__name__)


class GetTransactionsDetailUseCase:
    """Orchestrates the deposits/withdrawals dashboard view."""

    def __init__(
        self,
        deposit_repo: DepositRepository,
        withdrawal_repo: WithdrawalRepository,
        fetcher: Optional[FaultIsolatedFetcher] = None,
        recent_limit: int = 10,
        clock: Clock = utc_now,
    ) -> None:
        self._deposit_repo = deposit_repo
        self._withdrawal_repo = withdrawal_repo
        self._fetcher = fetcher or FaultIsolatedFetcher()
        self._aggregator = TransactionAggregator()
        self._recent_limit = recent_limit
        self._clock = clock

    async def execute(self, query: GetDomainDetailQuery) -> TransactionsDetailResult:
        timeframe = parse_timeframe(query.timeframe)
        logger.info("Building transactions detail: timeframe=%s", timeframe.value)
        now = self._clock()
        user_id = query.user_id

        outcomes = await self._fetcher.fetch_all(
            {
                "deposits": lambda: self._deposit_repo.list_deposits(user_id),
                "withdrawals": lambda: self._withdrawal_repo.list_withdrawals(user_id),
            }
        )
        deposits = outcomes["deposits"].records
        withdrawals = outcomes["withdrawals"].records

        try:
            return TransactionsDetailResult(
                timeframe=timeframe.value,
                deposits=self._aggregator.summarize(deposits, self._recent_limit),
                withdrawals=self._aggregator.summarize(withdrawals, self._recent_limit),
                deposit_totals_by_timeframe=self._aggregator.totals_by_timeframe(
                    deposits, now
                ),
                withdrawal_totals_by_timeframe=self._aggregator.totals_by_timeframe(
                    withdrawals, now
                ),
                degraded_sources=failed_sources(outcomes),
            )
        except Exception:
            logger.exception("Transactions detail failed, returning empty view")
            return TransactionsDetailResult(
                timeframe=timeframe.value,
                deposit_totals_by_timeframe=empty_totals(TransactionBucket),
                withdrawal_totals_by_timeframe=empty_totals(TransactionBucket),
                degraded_sources=list(outcomes),
            )
