"""
Use case: Wallets detail view.

Input: GetDomainDetailQuery (user_id, timeframe)
Output: WalletsDetailResult
Side effects: None (read-only query).
Failure cases: None. Unreadable sources degrade to zero.

The full history window is always loaded and replayed, so balance changes
and the per-timeframe totals do not depend on the requested timeframe. The
timeframe only decides how many of the newest events are charted.
Charts are built from history rather than from the wallet snapshots.
"""

import logging
from typing import Optional

from app.application.dashboard.clock import Clock, utc_now
from app.application.dashboard.dtos import GetDomainDetailQuery, WalletsDetailResult
from app.application.dashboard.fetcher import FaultIsolatedFetcher, failed_sources
from app.domain.dashboard.bucketing import empty_totals
from app.domain.dashboard.ports import WalletRepository
from app.domain.dashboard.timeframes import (
    Timeframe,
    history_limit,
    parse_timeframe,
)
from app.domain.dashboard.wallet_aggregator import (
    WalletActivityBucket,
    WalletAggregator,
)

logger = logging.getLogger(__name__)


class GetWalletsDetailUseCase:
    """Orchestrates the wallets-only dashboard view."""

    def __init__(
        self,
        wallet_repo: WalletRepository,
        aggregator: Optional[WalletAggregator] = None,
        fetcher: Optional[FaultIsolatedFetcher] = None,
        recent_limit: int = 10,
        clock: Clock = utc_now,
    ) -> None:
        self._wallet_repo = wallet_repo
        self._aggregator = aggregator or WalletAggregator()
        self._fetcher = fetcher or FaultIsolatedFetcher()
        self._recent_limit = recent_limit
        self._clock = clock

    async def execute(self, query: GetDomainDetailQuery) -> WalletsDetailResult:
        timeframe = parse_timeframe(query.timeframe)
        logger.info("Building wallets detail: timeframe=%s", timeframe.value)
        now = self._clock()
        user_id = query.user_id
        chart_limit = history_limit(timeframe)

        outcomes = await self._fetcher.fetch_all(
            {
                "wallets": lambda: self._wallet_repo.list_wallets(user_id),
                "wallet_history": lambda: self._wallet_repo.list_wallet_history(
                    user_id, history_limit(Timeframe.ALL)
                ),
            }
        )
        wallets = outcomes["wallets"].records
        history = outcomes["wallet_history"].records

        try:
            return WalletsDetailResult(
                timeframe=timeframe.value,
                summary=self._aggregator.summarize(
                    wallets, history, self._recent_limit, chart_limit
                ),
                totals_by_timeframe=self._aggregator.totals_by_timeframe(history, now),
                degraded_sources=failed_sources(outcomes),
            )
        except Exception:
            logger.exception("Wallets detail failed, returning empty view")
            return WalletsDetailResult(
                timeframe=timeframe.value,
                totals_by_timeframe=empty_totals(WalletActivityBucket),
                degraded_sources=list(outcomes),
            )
