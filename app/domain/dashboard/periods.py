"""
Domain service: calendar period keys.

Turns record timestamps into bucket keys for the four chart granularities.
Keys are zero-padded so that sorting them as strings sorts them in time.
No framework imports. No IO. No side effects.
"""

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from dateutil import parser as _date_parser

from app.domain.dashboard.entities import RawTimestamp

# Fills fields missing from free-form strings so results never depend on today.
_PARSE_DEFAULT = datetime(1970, 1, 1)


class Granularity(str, Enum):
    """Bucket size for chart series."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def _parse_text(value: str) -> Optional[datetime]:
    """Parse a date string: strict ISO-8601 first, then free-form."""
    text = value.strip()
    if not text:
        return None
    try:
        return _date_parser.isoparse(text)
    except (ValueError, OverflowError):
        pass
    try:
        return _date_parser.parse(text, default=_PARSE_DEFAULT)
    except (ValueError, OverflowError):
        return None


def parse_timestamp(value: RawTimestamp) -> Optional[datetime]:
    """Parse a stored timestamp into an aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC), dates (midnight UTC),
    date strings (ISO-8601 or free-form such as ``Sat, 01 Mar 2025 09:00:00
    GMT``) and epoch milliseconds.

    Returns:
        The parsed moment, or None when the value is missing or unusable.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        moment = _parse_text(value)
        if moment is None:
            return None
    else:
        return None

    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def first_timestamp(*candidates: RawTimestamp) -> Optional[datetime]:
    """Parse the first candidate that is set.

    None and empty strings count as unset. Only the first set candidate is
    considered: if it does not parse, the result is None even when a later
    candidate would have parsed.
    """
    for candidate in candidates:
        if candidate is None or candidate == "":
            continue
        return parse_timestamp(candidate)
    return None


def day_key(moment: datetime) -> str:
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def week_key(moment: datetime) -> str:
    """Return the ISO-8601 week key, e.g. ``2025-W01``.

    Week 1 is the week holding the year's first Thursday, and the key uses
    that Thursday's year, so 2024-12-31 belongs to ``2025-W01``.
    """
    iso_year, iso_week, _ = moment.date().isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


def month_key(moment: datetime) -> str:
    return f"{moment.year:04d}-{moment.month:02d}"


def year_key(moment: datetime) -> str:
    return f"{moment.year:04d}"


_KEYERS = {
    Granularity.DAY: day_key,
    Granularity.WEEK: week_key,
    Granularity.MONTH: month_key,
    Granularity.YEAR: year_key,
}


def period_key(moment: datetime, granularity: Granularity) -> str:
    """Return the bucket key of a UTC moment for the given granularity."""
    return _KEYERS[granularity](moment.astimezone(timezone.utc))
