"""
Domain service: position rollups.

Scalar figures cover currently open positions; chart buckets cover every
position ever opened, keyed by when it was opened.
No framework imports. No IO. No side effects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.domain.dashboard.bucketing import (
    Bucket,
    ChartSeries,
    build_chart,
    totals_by_timeframe,
)
from app.domain.dashboard.entities import PositionRecord
from app.domain.dashboard.periods import day_key, first_timestamp
from app.domain.dashboard.values import ZERO, as_amount, percentage


@dataclass
class PositionBucket(Bucket):
    """Invested amount and P&L of the positions opened in a period."""

    invested: Decimal = ZERO
    pnl: Decimal = ZERO

    def accumulate(self, record: PositionRecord) -> None:
        self.invested += as_amount(record.invested_amount)
        self.pnl += as_amount(record.pnl)


@dataclass
class PositionsSummary:
    open_positions: int = 0
    total_positions: int = 0
    total_invested: Decimal = ZERO
    total_pnl: Decimal = ZERO
    pnl_percent: Decimal = ZERO
    chart: ChartSeries[PositionBucket] = field(default_factory=ChartSeries)


@dataclass
class PositionPerformance:
    """Headline performance figures.

    Attributes:
        day_change: P&L of the positions opened today (UTC).
        percent_change: Open P&L as a percentage of the open invested amount.
    """

    day_change: Decimal = ZERO
    percent_change: Decimal = ZERO


def position_timestamp(record: PositionRecord) -> Optional[datetime]:
    return first_timestamp(record.created_at, record.timestamp)


class PositionAggregator:
    """Reduces position records into summary figures and chart buckets."""

    def summarize(
        self,
        open_positions: list[PositionRecord],
        all_positions: list[PositionRecord],
    ) -> PositionsSummary:
        """Build the positions summary.

        Args:
            open_positions: Positions currently open.
            all_positions: Every position, open or closed, for the charts.
        """
        total_invested = sum(
            (as_amount(p.invested_amount) for p in open_positions), ZERO
        )
        total_pnl = sum((as_amount(p.pnl) for p in open_positions), ZERO)

        return PositionsSummary(
            open_positions=len(open_positions),
            total_positions=len(all_positions),
            total_invested=total_invested,
            total_pnl=total_pnl,
            pnl_percent=percentage(total_pnl, total_invested),
            chart=build_chart(all_positions, position_timestamp, PositionBucket),
        )

    def performance(
        self, summary: PositionsSummary, now: datetime
    ) -> PositionPerformance:
        today = day_key(now)
        day_change = next(
            (b.pnl for b in summary.chart.daily if b.period == today), ZERO
        )
        return PositionPerformance(
            day_change=day_change,
            percent_change=summary.pnl_percent,
        )

    def totals_by_timeframe(
        self, all_positions: list[PositionRecord], now: datetime
    ) -> dict[str, PositionBucket]:
        return totals_by_timeframe(
            all_positions, position_timestamp, PositionBucket, now
        )
