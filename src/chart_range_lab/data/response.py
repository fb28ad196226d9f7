"""Parsing and assessment of historical-price source payloads."""

from __future__ import annotations

import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pandas as pd

from chart_range_lab.config import CompletenessConfig
from chart_range_lab.core.instants import (
    DEFAULT_TIMEZONE,
    TimeRange,
    TimestampParseError,
    TimezoneLike,
    to_timestamp,
)
from chart_range_lab.core.timeframes import Granularity
from chart_range_lab.data.completeness import (
    Completeness,
    CompletenessReport,
    classify_completeness,
)
from chart_range_lab.data.models import PricePoint, actual_range

RawPayload = Mapping[str, Any]


@dataclass(frozen=True)
class PriceResponse:
    """Parsed payload of one price fetch.

    Attributes:
        points: Returned samples in source order.
        requested: Window the source says was requested, if reported.
        actual: Window the source says its points cover, if reported.
        reported: Completeness label computed by the source, if any.
    """

    points: tuple[PricePoint, ...]
    requested: TimeRange | None
    actual: TimeRange | None
    reported: Completeness | None


def parse_price_response(
    payload: RawPayload,
    *,
    tz: TimezoneLike = DEFAULT_TIMEZONE,
) -> PriceResponse:
    """Parse a price payload into typed values.

    Absent bounds stay None. Bounds and point timestamps that are present but
    unparseable raise instead of being replaced by a default.

    Raises:
        TimestampParseError: If any present timestamp cannot be parsed.
        KeyError: If a price entry has no timestamp or close.
    """

    prices_raw = payload.get("prices") or []
    points = tuple(_parse_point(item, position, tz=tz) for position, item in enumerate(prices_raw))

    requested = _parse_range(payload, "requested_start", "requested_end", tz=tz)
    actual = _parse_range(payload, "actual_start", "actual_end", tz=tz)

    reported_raw = payload.get("data_completeness")
    reported = Completeness.parse(str(reported_raw)) if reported_raw is not None else None

    return PriceResponse(points=points, requested=requested, actual=actual, reported=reported)


def assess_price_response(
    response: PriceResponse,
    *,
    requested: TimeRange | None = None,
    granularity: Granularity | None = None,
    policy: CompletenessConfig | None = None,
    label: str = "prices",
) -> CompletenessReport:
    """Classify a parsed response, warning when the chart needs an advisory.

    The covered range falls back to the point timestamps when the source did
    not report one. A source-reported label that disagrees with the
    recomputed classification also warns; the recomputed one is returned.

    Raises:
        ValueError: If neither `requested` nor the payload provides a window.
    """

    window = requested or response.requested
    if window is None:
        raise ValueError("A requested window is required to assess completeness")

    covered = response.actual or actual_range(response.points)
    report = classify_completeness(
        window,
        covered,
        len(response.points),
        granularity=granularity,
        policy=policy,
    )

    advisory = report.advisory()
    if advisory is not None:
        _, message = advisory
        warnings.warn(f"[{label}] {report.classification.value}: {message}", UserWarning, stacklevel=2)

    if response.reported is not None and response.reported is not report.classification:
        warnings.warn(
            f"[{label}] source reported {response.reported.value}, "
            f"classified {report.classification.value}",
            UserWarning,
            stacklevel=2,
        )

    return report


def _parse_point(item: RawPayload, position: int, *, tz: TimezoneLike) -> PricePoint:
    """Parse one entry of the `prices` list."""

    timestamp = _parse_instant(_required_value(item, "timestamp"), f"prices[{position}].timestamp", tz=tz)
    volume = item.get("volume")
    return PricePoint(
        timestamp=timestamp,
        close=float(_required_value(item, "close")),
        volume=None if volume is None else float(volume),
    )


def _parse_range(
    payload: RawPayload,
    start_key: str,
    end_key: str,
    *,
    tz: TimezoneLike,
) -> TimeRange | None:
    """Parse a pair of optional bounds; None unless both are present."""

    start = _parse_optional_instant(payload.get(start_key), start_key, tz=tz)
    end = _parse_optional_instant(payload.get(end_key), end_key, tz=tz)
    if start is None or end is None:
        return None
    return TimeRange(start=start, end=end)


def _parse_optional_instant(value: Any, field_name: str, *, tz: TimezoneLike) -> pd.Timestamp | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return _parse_instant(value, field_name, tz=tz)


def _parse_instant(value: Any, field_name: str, *, tz: TimezoneLike) -> pd.Timestamp:
    try:
        return to_timestamp(value, tz)
    except TimestampParseError as exc:
        raise TimestampParseError(f"{field_name}: {exc}") from exc


def _required_value(raw: RawPayload, key: str) -> Any:
    """Fetch a required scalar field."""

    if key not in raw:
        raise KeyError(f"Missing required price field: {key}")
    return raw[key]
