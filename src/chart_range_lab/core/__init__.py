"""Timeframe ranges, chart labels and magnitude formatting."""

from .instants import EPOCH, TimeRange, TimestampParseError, to_timestamp
from .labels import format_axis_label, format_display_date, format_full
from .magnitude import format_abbreviated
from .timeframes import Granularity, RangeResult, Timeframe, resolve_range

__all__ = [
    "EPOCH",
    "Granularity",
    "RangeResult",
    "TimeRange",
    "Timeframe",
    "TimestampParseError",
    "format_abbreviated",
    "format_axis_label",
    "format_display_date",
    "format_full",
    "resolve_range",
    "to_timestamp",
]
