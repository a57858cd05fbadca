"""
Use case: Positions detail view.

Input: GetDomainDetailQuery (user_id, timeframe)
Output: PositionsDetailResult
Side effects: None (read-only query).
Failure cases: None. Unreadable sources degrade to zero.
"""

import logging
from typing import Optional

from app.application.dashboard.clock import Clock, utc_now
from app.application.dashboard.dtos import GetDomainDetailQuery, PositionsDetailResult
from app.application.dashboard.fetcher import FaultIsolatedFetcher, failed_sources
from app.domain.dashboard.bucketing import empty_totals
from app.domain.dashboard.position_aggregator import (
    PositionAggregator,
    PositionBucket,
)
from app.domain.dashboard.ports import PositionRepository
from app.domain.dashboard.timeframes import parse_timeframe

logger = logging.getLogger(__name__)


class GetPositionsDetailUseCase:
    """Orchestrates the positions-only dashboard view."""

    def __init__(
        self,
        position_repo: PositionRepository,
        fetcher: Optional[FaultIsolatedFetcher] = None,
        clock: Clock = utc_now,
    ) -> None:
        self._position_repo = position_repo
        self._fetcher = fetcher or FaultIsolatedFetcher()
        self._aggregator = PositionAggregator()
        self._clock = clock

    async def execute(self, query: GetDomainDetailQuery) -> PositionsDetailResult:
        timeframe = parse_timeframe(query.timeframe)
        logger.info("Building positions detail: timeframe=%s", timeframe.value)
        now = self._clock()
        user_id = query.user_id

        outcomes = await self._fetcher.fetch_all(
            {
                "open_positions": lambda: self._position_repo.list_open_positions(user_id),
                "all_positions": lambda: self._position_repo.list_all_positions(user_id),
            }
        )
        open_positions = outcomes["open_positions"].records
        all_positions = outcomes["all_positions"].records

        try:
            summary = self._aggregator.summarize(open_positions, all_positions)
            return PositionsDetailResult(
                timeframe=timeframe.value,
                summary=summary,
                performance=self._aggregator.performance(summary, now),
                totals_by_timeframe=self._aggregator.totals_by_timeframe(
                    all_positions, now
                ),
                degraded_sources=failed_sources(outcomes),
            )
        except Exception:
            logger.exception("Positions detail failed, returning empty view")
            return PositionsDetailResult(
                timeframe=timeframe.value,
                totals_by_timeframe=empty_totals(PositionBucket),
                degraded_sources=list(outcomes),
            )
