"""
Domain service: daily trade P&L rollups.

Each record is one trading day. Totals are sums over days; the win rate is
computed from the optional per-day trade counters and the average daily
P&L divides by the number of distinct days present.
No framework imports. No IO. No side effects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from app.domain.dashboard.bucketing import (
    Bucket,
    ChartSeries,
    build_chart,
    newest_first,
    totals_by_timeframe,
)
from app.domain.dashboard.entities import TradePnLRecord
from app.domain.dashboard.periods import day_key, parse_timestamp
from app.domain.dashboard.timeframes import DateWindow
from app.domain.dashboard.values import (
    ZERO,
    as_amount,
    as_count,
    percentage,
    round_cents,
)


@dataclass
class TradePnLBucket(Bucket):
    profit: Decimal = ZERO
    loss: Decimal = ZERO
    net_pnl: Decimal = ZERO
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0

    def accumulate(self, record: TradePnLRecord) -> None:
        self.profit += as_amount(record.profit)
        self.loss += as_amount(record.loss)
        self.net_pnl += as_amount(record.net_pnl)
        self.total_trades += as_count(record.total_trades)
        self.winning_trades += as_count(record.winning_trades)
        self.losing_trades += as_count(record.losing_trades)


@dataclass
class TradePnLTotals:
    """Summed P&L figures for a set of trading days.

    Attributes:
        win_rate: Winning trades as a percentage of all trades.
        average_daily_pnl: Net P&L per distinct trading day.
        days_traded: Distinct calendar days with a record.
    """

    profit: Decimal = ZERO
    loss: Decimal = ZERO
    net_pnl: Decimal = ZERO
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: Decimal = ZERO
    average_daily_pnl: Decimal = ZERO
    days_traded: int = 0


@dataclass
class TradePnLSummary:
    """Trade P&L view.

    Attributes:
        total: All-time totals.
        today: Totals of the current UTC day.
        statistics: Totals over the requested window.
        recent: Newest records inside the requested window.
    """

    total: TradePnLTotals = field(default_factory=TradePnLTotals)
    today: TradePnLTotals = field(default_factory=TradePnLTotals)
    statistics: TradePnLTotals = field(default_factory=TradePnLTotals)
    recent: list[TradePnLRecord] = field(default_factory=list)
    chart: ChartSeries[TradePnLBucket] = field(default_factory=ChartSeries)


def trade_pnl_timestamp(record: TradePnLRecord) -> Optional[datetime]:
    return parse_timestamp(record.date)


def _day_of(record: TradePnLRecord) -> Optional[str]:
    moment = trade_pnl_timestamp(record)
    return day_key(moment) if moment is not None else None


class TradePnLAggregator:
    """Reduces daily P&L records into totals, statistics and charts."""

    def totals(self, records: Iterable[TradePnLRecord]) -> TradePnLTotals:
        bucket = TradePnLBucket(period="total")
        days = set()
        for record in records:
            bucket.add(record)
            day = _day_of(record)
            if day is not None:
                days.add(day)

        days_traded = len(days)
        average = bucket.net_pnl / days_traded if days_traded else ZERO
        return TradePnLTotals(
            profit=bucket.profit,
            loss=bucket.loss,
            net_pnl=bucket.net_pnl,
            total_trades=bucket.total_trades,
            winning_trades=bucket.winning_trades,
            losing_trades=bucket.losing_trades,
            win_rate=percentage(
                Decimal(bucket.winning_trades), Decimal(bucket.total_trades)
            ),
            average_daily_pnl=round_cents(average),
            days_traded=days_traded,
        )

    def summarize(
        self,
        records: list[TradePnLRecord],
        window: DateWindow,
        now: datetime,
        recent_limit: int = 10,
    ) -> TradePnLSummary:
        """Build the trade P&L summary.

        Args:
            records: Every P&L record of the user.
            window: Window for statistics and the recent list.
            now: Current UTC moment, used to pick today's records.
            recent_limit: Number of newest in-window records to include.
        """
        today = day_key(now)
        todays = [r for r in records if _day_of(r) == today]
        in_window = [r for r in records if window.contains(trade_pnl_timestamp(r))]

        return TradePnLSummary(
            total=self.totals(records),
            today=self.totals(todays),
            statistics=self.totals(in_window),
            recent=newest_first(in_window, trade_pnl_timestamp)[:recent_limit],
            chart=build_chart(records, trade_pnl_timestamp, TradePnLBucket),
        )

    def totals_by_timeframe(
        self, records: list[TradePnLRecord], now: datetime
    ) -> dict[str, TradePnLBucket]:
        return totals_by_timeframe(records, trade_pnl_timestamp, TradePnLBucket, now)
