"""
Domain service: deposit and withdrawal rollups.

Deposits and withdrawals share one record shape, so one aggregator serves
both; callers keep the two lists apart.
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
    newest_first,
    totals_by_timeframe,
)
from app.domain.dashboard.entities import TransactionRecord, TransactionStatus
from app.domain.dashboard.periods import first_timestamp
from app.domain.dashboard.values import ZERO, as_amount


@dataclass
class TransactionBucket(Bucket):
    """Amounts requested in a period, split by settlement status."""

    total_amount: Decimal = ZERO
    pending_amount: Decimal = ZERO
    completed_amount: Decimal = ZERO
    pending_count: int = 0
    completed_count: int = 0

    def accumulate(self, record: TransactionRecord) -> None:
        amount = as_amount(record.amount)
        self.total_amount += amount
        if record.status == TransactionStatus.PENDING:
            self.pending_amount += amount
            self.pending_count += 1
        elif record.status == TransactionStatus.COMPLETED:
            self.completed_amount += amount
            self.completed_count += 1


@dataclass
class TransactionSummary:
    total_amount: Decimal = ZERO
    pending_amount: Decimal = ZERO
    completed_amount: Decimal = ZERO
    count: int = 0
    pending: int = 0
    completed: int = 0
    failed: int = 0
    recent_activity: list[TransactionRecord] = field(default_factory=list)
    chart: ChartSeries[TransactionBucket] = field(default_factory=ChartSeries)


def transaction_timestamp(record: TransactionRecord) -> Optional[datetime]:
    return first_timestamp(record.requested_at, record.completed_at)


class TransactionAggregator:
    """Reduces deposits or withdrawals into totals, status counts and charts."""

    def summarize(
        self, records: list[TransactionRecord], recent_limit: int = 10
    ) -> TransactionSummary:
        """Build the summary of one transaction list.

        Args:
            records: Deposits, or withdrawals, never both.
            recent_limit: Number of newest requests to include.
        """
        summary = TransactionSummary(count=len(records))
        for record in records:
            amount = as_amount(record.amount)
            summary.total_amount += amount
            if record.status == TransactionStatus.PENDING:
                summary.pending += 1
                summary.pending_amount += amount
            elif record.status == TransactionStatus.COMPLETED:
                summary.completed += 1
                summary.completed_amount += amount
            elif record.status == TransactionStatus.FAILED:
                summary.failed += 1

        summary.recent_activity = newest_first(
            records, transaction_timestamp
        )[:recent_limit]
        summary.chart = build_chart(records, transaction_timestamp, TransactionBucket)
        return summary

    def totals_by_timeframe(
        self, records: list[TransactionRecord], now: datetime
    ) -> dict[str, TransactionBucket]:
        return totals_by_timeframe(
            records, transaction_timestamp, TransactionBucket, now
        )
