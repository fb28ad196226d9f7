"""Timeframe tokens, sampling granularity and requested date ranges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pandas as pd

from chart_range_lab.core.instants import (
    EPOCH,
    InstantLike,
    TimeRange,
    TimezoneLike,
    localize_wall_time,
    to_timestamp,
    wall_time,
)


class Timeframe(str, Enum):
    """Symbolic chart lookback windows."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    SIX_MONTHS = "6M"
    YEAR_TO_DATE = "YTD"
    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"
    ALL = "ALL"

    @classmethod
    def parse(cls, token: Timeframe | str | None) -> Timeframe | None:
        """Return the matching member, or None for unknown tokens."""

        if isinstance(token, Timeframe):
            return token
        if not isinstance(token, str):
            return None
        try:
            return cls(token.strip().upper())
        except ValueError:
            return None


class Granularity(str, Enum):
    """Sampling step implied by a timeframe."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"

    @property
    def interval(self) -> str:
        """Interval code understood by the price endpoint."""

        return _INTERVAL_CODES[self]

    @property
    def step(self) -> pd.Timedelta:
        """Duration of one sample."""

        return _STEPS[self]


_INTERVAL_CODES = {
    Granularity.MINUTE: "1m",
    Granularity.HOUR: "1h",
    Granularity.DAY: "1d",
}

_STEPS = {
    Granularity.MINUTE: pd.Timedelta(minutes=1),
    Granularity.HOUR: pd.Timedelta(hours=1),
    Granularity.DAY: pd.Timedelta(days=1),
}

FALLBACK_TIMEFRAME = Timeframe.ONE_MONTH


@dataclass(frozen=True)
class RangeResult:
    """Concrete request window for one timeframe."""

    start: pd.Timestamp
    end: pd.Timestamp
    granularity: Granularity

    @property
    def window(self) -> TimeRange:
        """Requested bounds as a `TimeRange`."""

        return TimeRange(start=self.start, end=self.end)

    def to_query(self) -> dict[str, str]:
        """Build price endpoint query parameters."""

        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "interval": self.granularity.interval,
        }


def resolve_range(
    timeframe: Timeframe | str | None,
    now: InstantLike,
    *,
    tz: TimezoneLike | None = None,
) -> RangeResult:
    """Map a timeframe token and an explicit `now` into a request window.

    Calendar arithmetic runs on local wall-clock time in `tz`, or in the zone
    carried by `now` when `tz` is None. Month and year subtraction clamps to
    the last valid day of the target month, so 31 March minus one month is
    the last day of February. Unknown tokens resolve exactly like `1M`.

    Args:
        timeframe: Timeframe member or token such as ``"6M"``.
        now: Reference point; becomes the range end unchanged.
        tz: Optional zone that defines "local" midnight and calendar days.

    Returns:
        `RangeResult` with ``start < end``.
    """

    end = to_timestamp(now, tz)
    resolved = Timeframe.parse(timeframe) or FALLBACK_TIMEFRAME

    if resolved is Timeframe.ONE_DAY:
        start = _local_midnight(end)
        if start >= end:
            start = _shift_calendar(start, days=1)
        return RangeResult(start=start, end=end, granularity=Granularity.MINUTE)

    if resolved is Timeframe.ONE_WEEK:
        return RangeResult(
            start=end - pd.Timedelta(days=7),
            end=end,
            granularity=Granularity.HOUR,
        )

    if resolved is Timeframe.YEAR_TO_DATE:
        start = localize_wall_time(pd.Timestamp(year=end.year, month=1, day=1), end.tz)
        if start >= end:
            start = _shift_calendar(start, years=1)
        return RangeResult(start=start, end=end, granularity=Granularity.DAY)

    if resolved is Timeframe.ALL:
        start = EPOCH.tz_convert(end.tz)
        if start >= end:
            start = end - Granularity.DAY.step
        return RangeResult(start=start, end=end, granularity=Granularity.DAY)

    offsets = {
        Timeframe.ONE_MONTH: {"months": 1},
        Timeframe.SIX_MONTHS: {"months": 6},
        Timeframe.ONE_YEAR: {"years": 1},
        Timeframe.FIVE_YEARS: {"years": 5},
    }
    start = _shift_calendar(end, **offsets[resolved])
    return RangeResult(start=start, end=end, granularity=Granularity.DAY)


def _local_midnight(ts: pd.Timestamp) -> pd.Timestamp:
    """Start of the local calendar day containing `ts`."""

    return localize_wall_time(wall_time(ts).normalize(), ts.tz)


def _shift_calendar(ts: pd.Timestamp, *, years: int = 0, months: int = 0, days: int = 0) -> pd.Timestamp:
    """Move `ts` back on the local calendar, clamping to month end."""

    shifted = wall_time(ts) - pd.DateOffset(years=years, months=months, days=days)
    return localize_wall_time(shifted, ts.tz)
