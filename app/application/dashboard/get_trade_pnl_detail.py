"""
Use case: Trade P&L detail view.

Input: GetDomainDetailQuery (user_id, timeframe)
Output: TradePnLDetailResult
Side effects: None (read-only query).
Failure cases: None. An unreadable source degrades to zero.
"""

import logging
from typing import Optional

from app.application.dashboard.clock import Clock, utc_now
from app.application.dashboard.dtos import GetDomainDetailQuery, TradePnLDetailResult
from app.application.dashboard.fetcher import FaultIsolatedFetcher, failed_sources
from app.domain.dashboard.bucketing import empty_totals
from app.domain.dashboard.ports import TradePnLRepository
from app.domain.dashboard.timeframes import parse_timeframe, resolve_timeframe
from app.domain.dashboard.trade_pnl_aggregator import (
    TradePnLAggregator,
    TradePnLBucket,
)

logger = logging.getLogger(__name__)


class GetTradePnLDetailUseCase:
    """Orchestrates the trade-P&L-only dashboard view.

    Loads the full P&L history once; the timeframe only narrows the
    statistics and the recent list, so charts stay complete.
    """

    def __init__(
        self,
        trade_pnl_repo: TradePnLRepository,
        fetcher: Optional[FaultIsolatedFetcher] = None,
        recent_limit: int = 10,
        clock: Clock = utc_now,
    ) -> None:
        self._trade_pnl_repo = trade_pnl_repo
        self._fetcher = fetcher or FaultIsolatedFetcher()
        self._aggregator = TradePnLAggregator()
        self._recent_limit = recent_limit
        self._clock = clock

    async def execute(self, query: GetDomainDetailQuery) -> TradePnLDetailResult:
        timeframe = parse_timeframe(query.timeframe)
        logger.info("Building trade P&L detail: timeframe=%s", timeframe.value)
        now = self._clock()
        user_id = query.user_id

        outcomes = await self._fetcher.fetch_all(
            {"trade_pnl": lambda: self._trade_pnl_repo.list_trade_pnl(user_id)}
        )
        records = outcomes["trade_pnl"].records

        try:
            return TradePnLDetailResult(
                timeframe=timeframe.value,
                summary=self._aggregator.summarize(
                    records,
                    resolve_timeframe(timeframe, now),
                    now,
                    self._recent_limit,
                ),
                totals_by_timeframe=self._aggregator.totals_by_timeframe(records, now),
                degraded_sources=failed_sources(outcomes),
            )
        except Exception:
            logger.exception("Trade P&L detail failed, returning empty view")
            return TradePnLDetailResult(
                timeframe=timeframe.value,
                totals_by_timeframe=empty_totals(TradePnLBucket),
                degraded_sources=list(outcomes),
            )
