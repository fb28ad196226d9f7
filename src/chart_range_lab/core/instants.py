"""Point-in-time coercion shared by range resolution, labels and classification."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

import pandas as pd

InstantLike = int | float | str | date | datetime | pd.Timestamp
TimezoneLike = str | tzinfo

DEFAULT_TIMEZONE = "UTC"
EPOCH = pd.Timestamp(0, unit="ms", tz="UTC")

# Relative keywords pandas resolves against the wall clock.
_CLOCK_KEYWORDS = frozenset({"now", "today", "tomorrow", "yesterday"})


class TimestampParseError(ValueError):
    """Raised when a value cannot be interpreted as a point in time."""


@dataclass(frozen=True)
class TimeRange:
    """Closed pair of timezone-aware bounds.

    Attributes:
        start: First instant covered.
        end: Last instant covered.
    """

    start: pd.Timestamp
    end: pd.Timestamp

    @property
    def span(self) -> pd.Timedelta:
        """Length of the range; zero when the bounds are inverted."""

        return max(self.end - self.start, pd.Timedelta(0))


def to_timestamp(value: InstantLike, tz: TimezoneLike | None = None) -> pd.Timestamp:
    """Coerce an instant-like value into a timezone-aware `pd.Timestamp`.

    Integers and floats are epoch milliseconds. Naive datetimes and strings
    without an offset are taken to be in `tz` (UTC when `tz` is None).
    Clock-relative text such as ``"now"`` or ``"today"`` is rejected.

    Args:
        value: Epoch milliseconds, datetime, date, Timestamp or ISO-8601 text.
        tz: Optional target timezone. Aware inputs are converted into it.

    Returns:
        Timezone-aware timestamp.

    Raises:
        TimestampParseError: If the value is missing, malformed or out of range.
    """

    if isinstance(value, bool):
        raise TimestampParseError(f"Not a point in time: {value!r}")

    try:
        if isinstance(value, numbers.Real):
            if not math.isfinite(value):
                raise TimestampParseError(f"Epoch milliseconds must be finite: {value!r}")
            ts = pd.Timestamp(value, unit="ms", tz="UTC")
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                raise TimestampParseError("Timestamp text cannot be empty")
            if text.lower() in _CLOCK_KEYWORDS:
                raise TimestampParseError(f"Relative timestamp keywords are not accepted: {value!r}")
            ts = pd.Timestamp(text)
        elif isinstance(value, date):
            ts = pd.Timestamp(value)
        else:
            raise TimestampParseError(f"Unsupported timestamp type: {type(value).__name__}")
    except TimestampParseError:
        raise
    except (ValueError, TypeError, OverflowError) as exc:
        raise TimestampParseError(f"Unparseable timestamp: {value!r}") from exc

    if pd.isna(ts):
        raise TimestampParseError(f"Unparseable timestamp: {value!r}")

    if ts.tzinfo is None:
        return localize_wall_time(ts, tz if tz is not None else DEFAULT_TIMEZONE)
    if tz is not None:
        return ts.tz_convert(tz)
    return ts


def localize_wall_time(wall: pd.Timestamp, tz: TimezoneLike) -> pd.Timestamp:
    """Attach `tz` to a naive wall-clock time without failing on DST edges.

    Non-existent local times move forward past the gap; ambiguous ones pick
    the first occurrence.
    """

    return wall.tz_localize(tz, ambiguous=True, nonexistent="shift_forward")


def wall_time(ts: pd.Timestamp) -> pd.Timestamp:
    """Drop the timezone of an aware timestamp, keeping its local wall clock."""

    return ts.tz_localize(None)
