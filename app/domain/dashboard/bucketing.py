"""
Domain service: generic period bucketing.

Every domain chart is the same reduction: key each record by calendar
period, fold it into that period's bucket, emit buckets in period order.
The domain-specific part is the bucket class, which knows how to add one
record to itself.
No framework imports. No IO. No side effects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from app.domain.dashboard.periods import Granularity, period_key
from app.domain.dashboard.timeframes import (
    DateWindow,
    Timeframe,
    resolve_timeframe,
)


@dataclass
class Bucket:
    """Accumulated values for one period.

    Subclasses add their numeric fields (with zero defaults) and override
    ``accumulate``. ``count`` is maintained here.
    """

    period: str
    count: int = 0

    def add(self, record: Any) -> None:
        self.count += 1
        self.accumulate(record)

    def accumulate(self, record: Any) -> None:
        """Fold the domain fields of one record into this bucket."""


BucketT = TypeVar("BucketT", bound=Bucket)
TimestampOf = Callable[[Any], Optional[datetime]]


@dataclass
class ChartSeries(Generic[BucketT]):
    """The four bucketed views of one domain."""

    daily: list[BucketT] = field(default_factory=list)
    weekly: list[BucketT] = field(default_factory=list)
    monthly: list[BucketT] = field(default_factory=list)
    yearly: list[BucketT] = field(default_factory=list)


def reduce_by_period(
    records: Iterable[Any],
    timestamp_of: TimestampOf,
    bucket_factory: Callable[[str], BucketT],
    granularity: Granularity,
) -> list[BucketT]:
    """Group records by period and accumulate each group.

    Args:
        records: Domain records, in any order.
        timestamp_of: Returns the parsed moment of a record, or None.
        bucket_factory: Builds an empty bucket for a period key.
        granularity: Period size.

    Returns:
        One bucket per distinct period, sorted ascending by period.
        Records without a usable timestamp are skipped.
    """
    buckets: dict[str, BucketT] = {}
    for record in records:
        moment = timestamp_of(record)
        if moment is None:
            continue
        key = period_key(moment, granularity)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = bucket_factory(key)
        bucket.add(record)
    return [buckets[key] for key in sorted(buckets)]


def build_chart(
    records: Iterable[Any],
    timestamp_of: TimestampOf,
    bucket_factory: Callable[[str], BucketT],
) -> ChartSeries[BucketT]:
    """Compute all four granularities eagerly."""
    records = list(records)
    return ChartSeries(
        daily=reduce_by_period(records, timestamp_of, bucket_factory, Granularity.DAY),
        weekly=reduce_by_period(records, timestamp_of, bucket_factory, Granularity.WEEK),
        monthly=reduce_by_period(records, timestamp_of, bucket_factory, Granularity.MONTH),
        yearly=reduce_by_period(records, timestamp_of, bucket_factory, Granularity.YEAR),
    )


def window_totals(
    records: Iterable[Any],
    timestamp_of: TimestampOf,
    bucket_factory: Callable[[str], BucketT],
    window: DateWindow,
    label: str,
) -> BucketT:
    """Accumulate the records falling inside a window into one bucket."""
    bucket = bucket_factory(label)
    for record in records:
        if window.contains(timestamp_of(record)):
            bucket.add(record)
    return bucket


def totals_by_timeframe(
    records: Iterable[Any],
    timestamp_of: TimestampOf,
    bucket_factory: Callable[[str], BucketT],
    now: datetime,
) -> dict[str, BucketT]:
    """Window totals for every timeframe token, keyed by token."""
    records = list(records)
    return {
        timeframe.value: window_totals(
            records,
            timestamp_of,
            bucket_factory,
            resolve_timeframe(timeframe, now),
            timeframe.value,
        )
        for timeframe in Timeframe
    }


def newest_first(
    records: Iterable[Any], timestamp_of: TimestampOf
) -> list[Any]:
    """Sort records by timestamp, newest first, undated records last.

    The sort is stable, so records sharing a timestamp keep their order.
    """
    dated = [(timestamp_of(record), record) for record in records]
    with_time = [item for item in dated if item[0] is not None]
    with_time.sort(key=lambda item: item[0], reverse=True)
    return [record for _, record in with_time] + [
        record for moment, record in dated if moment is None
    ]


def empty_totals(bucket_factory: Callable[[str], BucketT]) -> dict[str, BucketT]:
    """Zero-valued window totals for every timeframe token."""
    return {timeframe.value: bucket_factory(timeframe.value) for timeframe in Timeframe}
