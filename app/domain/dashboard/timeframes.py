"""
Domain service: timeframe resolution.

Maps the symbolic timeframe tokens used by the dashboard UI to concrete
half-open date windows ending now.
No framework imports. No IO. No side effects.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

EPOCH_FLOOR = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Timeframe(str, Enum):
    """Timeframe tokens understood by the dashboard."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    ALL = "ALL"


DEFAULT_TIMEFRAME = Timeframe.ONE_MONTH

_HISTORY_LIMITS = {
    Timeframe.ONE_DAY: 10,
    Timeframe.ONE_WEEK: 20,
    Timeframe.ONE_MONTH: 50,
    Timeframe.THREE_MONTHS: 100,
    Timeframe.SIX_MONTHS: 150,
    Timeframe.ONE_YEAR: 200,
    Timeframe.ALL: 500,
}


@dataclass(frozen=True)
class DateWindow:
    """A half-open interval ``[start, end)`` of UTC moments."""

    start: datetime
    end: datetime

    def contains(self, moment: Optional[datetime]) -> bool:
        return moment is not None and self.start <= moment < self.end

    @classmethod
    def trailing_days(cls, days: int, now: datetime) -> "DateWindow":
        """Window covering the last ``days`` days up to now."""
        return cls(start=now - timedelta(days=max(days, 0)), end=now)


def parse_timeframe(token: Optional[str]) -> Timeframe:
    """Return the Timeframe for a token, falling back to one month."""
    try:
        return Timeframe((token or "").strip().upper())
    except ValueError:
        logger.debug("Unknown timeframe token %r, using %s", token, DEFAULT_TIMEFRAME.value)
        return DEFAULT_TIMEFRAME


def resolve_timeframe(timeframe: Timeframe, now: datetime) -> DateWindow:
    """Resolve a timeframe to the window ending at ``now``.

    Args:
        timeframe: The requested timeframe.
        now: Aware UTC moment used as the window end.

    Returns:
        The window ``[now - offset, now)``; ``ALL`` starts at the epoch.
    """
    if timeframe is Timeframe.ONE_DAY:
        start = now - timedelta(days=1)
    elif timeframe is Timeframe.ONE_WEEK:
        start = now - timedelta(days=7)
    elif timeframe is Timeframe.ONE_MONTH:
        start = now - relativedelta(months=1)
    elif timeframe is Timeframe.THREE_MONTHS:
        start = now - relativedelta(months=3)
    elif timeframe is Timeframe.SIX_MONTHS:
        start = now - relativedelta(months=6)
    elif timeframe is Timeframe.ONE_YEAR:
        start = now - relativedelta(months=12)
    else:
        start = EPOCH_FLOOR
    return DateWindow(start=min(start, now), end=now)


def history_limit(timeframe: Timeframe) -> int:
    """Number of newest wallet history events charted for a timeframe."""
    return _HISTORY_LIMITS.get(timeframe, _HISTORY_LIMITS[DEFAULT_TIMEFRAME])
