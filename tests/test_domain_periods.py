"""
Tests for period keys, timeframe windows and generic bucketing.

All tests use pure domain objects; no database or network calls.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.domain.dashboard.bucketing import (
    build_chart,
    empty_totals,
    newest_first,
    reduce_by_period,
    totals_by_timeframe,
    window_totals,
)
from app.domain.dashboard.periods import (
    Granularity,
    day_key,
    first_timestamp,
    month_key,
    parse_timestamp,
    period_key,
    week_key,
    year_key,
)
from app.domain.dashboard.position_aggregator import (
    PositionBucket,
    position_timestamp,
)
from app.domain.dashboard.timeframes import (
    EPOCH_FLOOR,
    DateWindow,
    Timeframe,
    history_limit,
    parse_timeframe,
    resolve_timeframe,
)
from fakes import make_position

UTC = timezone.utc


def _at(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=UTC)


# ══════════════════════════════════════════════════════════════════════
# Timestamp parsing
# ══════════════════════════════════════════════════════════════════════


class TestParseTimestamp:
    def test_iso_string_with_z_suffix(self):
        assert parse_timestamp("2025-01-15T10:00:00Z") == _at(2025, 1, 15, 10)

    def test_offset_is_converted_to_utc(self):
        moment = parse_timestamp("2025-01-01T01:00:00+02:00")
        assert moment == _at(2024, 12, 31, 23)
        assert day_key(moment) == "2024-12-31"

    def test_naive_datetime_is_taken_as_utc(self):
        assert parse_timestamp(datetime(2025, 3, 1, 8, 30)) == datetime(
            2025, 3, 1, 8, 30, tzinfo=UTC
        )

    def test_date_is_midnight_utc(self):
        assert parse_timestamp(date(2025, 3, 1)) == _at(2025, 3, 1)

    @pytest.mark.parametrize(
        "value",
        [
            "2025/03/01",
            "Sat Mar 01 2025 09:00:00 GMT+0000",
            "Sat, 01 Mar 2025 09:00:00 GMT",
            "March 1, 2025",
        ],
    )
    def test_free_form_strings(self, value):
        moment = parse_timestamp(value)
        assert moment is not None
        assert day_key(moment) == "2025-03-01"

    def test_free_form_string_with_offset(self):
        assert parse_timestamp("01 Mar 2025 09:00:00 +0300") == _at(2025, 3, 1, 6)

    def test_number_is_epoch_milliseconds(self):
        assert parse_timestamp(0) == EPOCH_FLOOR
        assert parse_timestamp(86_400_000) == _at(1970, 1, 2)

    @pytest.mark.parametrize(
        "value", [None, "", "   ", "not a date", float("nan"), float("inf"), True, object()]
    )
    def test_unusable_values_give_none(self, value):
        assert parse_timestamp(value) is None


class TestFirstTimestamp:
    def test_skips_unset_candidates(self):
        assert first_timestamp(None, "", "2025-02-01") == _at(2025, 2, 1)

    def test_only_first_set_candidate_counts(self):
        assert first_timestamp("garbage", "2025-02-01") is None

    def test_all_unset(self):
        assert first_timestamp(None, None) is None


# ══════════════════════════════════════════════════════════════════════
# Period keys
# ══════════════════════════════════════════════════════════════════════


class TestPeriodKeys:
    def test_day_month_year_keys_are_zero_padded(self):
        moment = _at(2025, 3, 7)
        assert day_key(moment) == "2025-03-07"
        assert month_key(moment) == "2025-03"
        assert year_key(moment) == "2025"

    def test_last_day_of_year_belongs_to_next_iso_week_one(self):
        assert week_key(_at(2024, 12, 31)) == "2025-W01"

    def test_first_days_of_year_can_belong_to_previous_year(self):
        assert week_key(_at(2021, 1, 3)) == "2020-W53"

    def test_week_starts_on_monday(self):
        assert week_key(_at(2025, 1, 5)) == "2025-W01"
        assert week_key(_at(2025, 1, 6)) == "2025-W02"

    def test_period_key_uses_utc(self):
        moment = datetime(2025, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=2)))
        assert period_key(moment, Granularity.DAY) == "2024-12-31"
        assert period_key(moment, Granularity.YEAR) == "2024"


# ══════════════════════════════════════════════════════════════════════
# Timeframes
# ══════════════════════════════════════════════════════════════════════


class TestParseTimeframe:
    def test_known_tokens(self):
        assert parse_timeframe("1D") is Timeframe.ONE_DAY
        assert parse_timeframe("ALL") is Timeframe.ALL

    def test_tokens_are_case_insensitive(self):
        assert parse_timeframe("1w") is Timeframe.ONE_WEEK

    @pytest.mark.parametrize("token", ["", None, "2W", "forever"])
    def test_unknown_tokens_mean_one_month(self, token):
        assert parse_timeframe(token) is Timeframe.ONE_MONTH


class TestResolveTimeframe:
    def test_day_and_week_are_fixed_offsets(self):
        now = _at(2025, 3, 15, 12)
        assert resolve_timeframe(Timeframe.ONE_DAY, now).start == _at(2025, 3, 14, 12)
        assert resolve_timeframe(Timeframe.ONE_WEEK, now).start == _at(2025, 3, 8, 12)

    def test_month_offsets_clamp_day(self):
        assert resolve_timeframe(Timeframe.ONE_MONTH, _at(2025, 3, 31)).start == _at(
            2025, 2, 28
        )
        assert resolve_timeframe(
            Timeframe.THREE_MONTHS, _at(2025, 5, 31)
        ).start == _at(2025, 2, 28)

    def test_one_year_from_leap_day(self):
        assert resolve_timeframe(Timeframe.ONE_YEAR, _at(2024, 2, 29)).start == _at(
            2023, 2, 28
        )

    def test_one_month_from_leap_year_march(self):
        assert resolve_timeframe(Timeframe.ONE_MONTH, _at(2024, 3, 30)).start == _at(
            2024, 2, 29
        )

    def test_six_months_crosses_year(self):
        assert resolve_timeframe(Timeframe.SIX_MONTHS, _at(2025, 3, 15)).start == _at(
            2024, 9, 15
        )

    def test_all_starts_at_epoch(self):
        window = resolve_timeframe(Timeframe.ALL, _at(2025, 3, 15))
        assert window.start == EPOCH_FLOOR

    def test_start_never_after_end(self):
        for now in (_at(2025, 3, 31), _at(2024, 2, 29, 23), EPOCH_FLOOR):
            for timeframe in Timeframe:
                window = resolve_timeframe(timeframe, now)
                assert window.start <= window.end

    def test_window_is_half_open(self):
        now = _at(2025, 3, 15, 12)
        window = resolve_timeframe(Timeframe.ONE_DAY, now)
        assert window.end == now
        assert window.contains(window.start)
        assert not window.contains(now)
        assert not window.contains(None)

    def test_trailing_days(self):
        now = _at(2025, 3, 15, 12)
        assert DateWindow.trailing_days(30, now).start == now - timedelta(days=30)


class TestHistoryLimit:
    def test_limits_grow_with_timeframe(self):
        limits = [history_limit(tf) for tf in Timeframe]
        assert limits == [10, 20, 50, 100, 150, 200, 500]


# ══════════════════════════════════════════════════════════════════════
# Bucketing
# ══════════════════════════════════════════════════════════════════════


class TestReduceByPeriod:
    def test_buckets_are_sorted_and_accumulated(self):
        records = [
            make_position("p1", invested="10", pnl="1", created_at="2025-03-02T00:00:00Z"),
            make_position("p2", invested="20", pnl="2", created_at="2025-03-01T00:00:00Z"),
            make_position("p3", invested="30", pnl="3", created_at="2025-03-02T23:59:00Z"),
        ]
        buckets = reduce_by_period(
            records, position_timestamp, PositionBucket, Granularity.DAY
        )
        assert [b.period for b in buckets] == ["2025-03-01", "2025-03-02"]
        assert buckets[1].count == 2
        assert buckets[1].invested == Decimal("40")
        assert buckets[1].pnl == Decimal("4")

    def test_free_form_dates_are_bucketed(self):
        records = [
            make_position("p1", created_at="Sat, 01 Mar 2025 09:00:00 GMT"),
            make_position("p2", created_at="2025/03/01"),
        ]
        buckets = reduce_by_period(
            records, position_timestamp, PositionBucket, Granularity.DAY
        )
        assert [(b.period, b.count) for b in buckets] == [("2025-03-01", 2)]

    def test_undated_records_are_skipped(self):
        records = [
            make_position("p1", created_at=None),
            make_position("p2", created_at="nonsense"),
            make_position("p3", created_at="2025-03-01"),
        ]
        buckets = reduce_by_period(
            records, position_timestamp, PositionBucket, Granularity.MONTH
        )
        assert [(b.period, b.count) for b in buckets] == [("2025-03", 1)]

    def test_year_boundary_shares_iso_week(self):
        records = [
            make_position("p1", created_at="2024-12-31T12:00:00Z"),
            make_position("p2", created_at="2025-01-01T12:00:00Z"),
        ]
        chart = build_chart(records, position_timestamp, PositionBucket)
        assert [(b.period, b.count) for b in chart.weekly] == [("2025-W01", 2)]
        assert [b.period for b in chart.yearly] == ["2024", "2025"]
        assert [b.period for b in chart.monthly] == ["2024-12", "2025-01"]

    def test_counts_sum_to_dated_records_at_every_granularity(self):
        records = [
            make_position(f"p{i}", created_at=f"2025-0{1 + i % 3}-1{i % 9}T00:00:00Z")
            for i in range(12)
        ] + [make_position("undated", created_at=None)]
        chart = build_chart(records, position_timestamp, PositionBucket)
        for series in (chart.daily, chart.weekly, chart.monthly, chart.yearly):
            assert sum(b.count for b in series) == 12

    def test_empty_input_gives_empty_series(self):
        chart = build_chart([], position_timestamp, PositionBucket)
        assert chart.daily == chart.weekly == chart.monthly == chart.yearly == []


class TestWindowTotals:
    def test_only_records_inside_window_count(self):
        now = _at(2025, 3, 15, 12)
        records = [
            make_position("in", invested="5", created_at="2025-03-15T10:00:00Z"),
            make_position("edge", invested="7", created_at="2025-03-15T12:00:00Z"),
            make_position("old", invested="9", created_at="2025-03-01T00:00:00Z"),
        ]
        bucket = window_totals(
            records,
            position_timestamp,
            PositionBucket,
            resolve_timeframe(Timeframe.ONE_DAY, now),
            "1D",
        )
        assert bucket.period == "1D"
        assert bucket.count == 1
        assert bucket.invested == Decimal("5")

    def test_totals_by_timeframe_covers_every_token(self):
        now = _at(2025, 3, 15, 12)
        records = [
            make_position("recent", created_at="2025-03-15T10:00:00Z"),
            make_position("ten_days", created_at="2025-03-05T12:00:00Z"),
            make_position("old", created_at="2020-01-01T00:00:00Z"),
        ]
        totals = totals_by_timeframe(records, position_timestamp, PositionBucket, now)
        assert list(totals) == ["1D", "1W", "1M", "3M", "6M", "1Y", "ALL"]
        assert [totals[k].count for k in totals] == [1, 1, 2, 2, 2, 2, 3]

    def test_empty_totals_are_zero(self):
        totals = empty_totals(PositionBucket)
        assert set(totals) == {tf.value for tf in Timeframe}
        assert all(b.count == 0 and b.invested == 0 for b in totals.values())


class TestNewestFirst:
    def test_sorts_descending_with_undated_last(self):
        records = [
            make_position("a", created_at="2025-03-01"),
            make_position("b", created_at=None),
            make_position("c", created_at="2025-03-03"),
            make_position("d", created_at="2025-03-02"),
        ]
        ordered = newest_first(records, position_timestamp)
        assert [r.id for r in ordered] == ["c", "d", "a", "b"]

    def test_ties_keep_input_order(self):
        records = [
            make_position("first", created_at="2025-03-01"),
            make_position("second", created_at="2025-03-01"),
        ]
        assert [r.id for r in newest_first(records, position_timestamp)] == [
            "first",
            "second",
        ]
