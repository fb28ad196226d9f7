"""Axis and tooltip labels for chart points."""

from __future__ import annotations

import pandas as pd

from chart_range_lab.core.instants import (
    InstantLike,
    TimezoneLike,
    to_timestamp,
)
from chart_range_lab.core.timeframes import Timeframe

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_TIME_OF_DAY_TIMEFRAMES = frozenset({Timeframe.ONE_DAY})
_MONTH_DAY_TIMEFRAMES = frozenset({Timeframe.ONE_WEEK, Timeframe.ONE_MONTH})


def format_axis_label(
    point_in_time: InstantLike,
    timeframe: Timeframe | str | None,
    *,
    tz: TimezoneLike | None = None,
) -> str:
    """Format one axis tick for the given timeframe.

    `1D` ticks show clock time (``"02:30 PM"``), `1W`/`1M` ticks show month
    and day (``"Jun 15"``), everything else including unknown tokens adds the
    year (``"Jun 15, 2024"``).

    Aware instants render in their own zone unless `tz` is given; naive and
    epoch values are UTC.
    """

    ts = to_timestamp(point_in_time, tz)
    resolved = Timeframe.parse(timeframe)
    if resolved in _TIME_OF_DAY_TIMEFRAMES:
        return _clock_time(ts)
    if resolved in _MONTH_DAY_TIMEFRAMES:
        return _month_day(ts)
    return _calendar_date(ts)


def format_full(point_in_time: InstantLike, *, tz: TimezoneLike | None = None) -> str:
    """Format a tooltip label such as ``"Jun 15, 2024, 02:30 PM"``."""

    ts = to_timestamp(point_in_time, tz)
    return f"{_calendar_date(ts)}, {_clock_time(ts)}"


def format_display_date(
    value: InstantLike | None,
    *,
    tz: TimezoneLike | None = None,
) -> str:
    """Format a calendar date for advisories, ``"N/A"`` when absent."""

    if value is None:
        return "N/A"
    return _calendar_date(to_timestamp(value, tz))


def _clock_time(ts: pd.Timestamp) -> str:
    hour_12 = ts.hour % 12 or 12
    marker = "AM" if ts.hour < 12 else "PM"
    return f"{hour_12:02d}:{ts.minute:02d} {marker}"


def _month_day(ts: pd.Timestamp) -> str:
    return f"{_MONTH_ABBR[ts.month - 1]} {ts.day}"


def _calendar_date(ts: pd.Timestamp) -> str:
    return f"{_month_day(ts)}, {ts.year:04d}"
