"""Data models for price points returned by the historical-price source."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from chart_range_lab.core.instants import TimeRange, to_timestamp


@dataclass(frozen=True)
class PricePoint:
    """One sampled price.

    Attributes:
        timestamp: Timezone-aware sample time.
        close: Closing price for the sample.
        volume: Traded volume, when the source reports it.
    """

    timestamp: pd.Timestamp
    close: float
    volume: float | None = None

    def __post_init__(self) -> None:
        """Normalize timestamp and numeric fields."""

        object.__setattr__(self, "timestamp", to_timestamp(self.timestamp))
        object.__setattr__(self, "close", float(self.close))
        if self.volume is not None:
            object.__setattr__(self, "volume", float(self.volume))


def points_frame(points: Sequence[PricePoint]) -> pd.DataFrame:
    """Build a sorted, de-duplicated frame indexed by UTC timestamp.

    Later points win when two share a timestamp.
    """

    frame = pd.DataFrame(
        {
            "close": [p.close for p in points],
            "volume": [p.volume for p in points],
        },
        index=pd.to_datetime([p.timestamp for p in points], utc=True).rename("timestamp"),
        dtype=float,
    )
    frame = frame[~frame.index.duplicated(keep="last")].sort_index()
    return frame


def actual_range(points: Sequence[PricePoint]) -> TimeRange | None:
    """Earliest and latest sample time, or None without points."""

    if not points:
        return None
    index = points_frame(points).index
    return TimeRange(start=index.min(), end=index.max())
