"""Classification of returned price history against the requested window."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Literal

import pandas as pd

from chart_range_lab.config import CompletenessConfig
from chart_range_lab.core.instants import TimeRange, TimezoneLike
from chart_range_lab.core.labels import format_display_date
from chart_range_lab.core.timeframes import Granularity

AdvisorySeverity = Literal["info", "warning"]


class Completeness(str, Enum):
    """How well returned data covers the requested window."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    SPARSE = "sparse"
    EMPTY = "empty"

    @classmethod
    def parse(cls, label: str | None) -> Completeness | None:
        """Map a source-reported label to a member, None when unknown."""

        if label is None:
            return None
        normalized = label.strip().lower()
        if normalized == "no_data":
            return cls.EMPTY
        try:
            return cls(normalized)
        except ValueError:
            return None


@dataclass(frozen=True)
class CompletenessReport:
    """Requested vs. covered bounds and the resulting classification."""

    requested_start: pd.Timestamp
    requested_end: pd.Timestamp
    actual_start: pd.Timestamp | None
    actual_end: pd.Timestamp | None
    classification: Completeness
    point_count: int = 0

    @property
    def coverage(self) -> float:
        """Covered share of the requested span, clipped to [0, 1]."""

        if self.actual_start is None or self.actual_end is None:
            return 0.0
        requested = TimeRange(self.requested_start, self.requested_end).span
        if requested <= pd.Timedelta(0):
            return 1.0
        actual = TimeRange(self.actual_start, self.actual_end).span
        return float(min(1.0, actual / requested))

    def advisory(
        self,
        *,
        tz: TimezoneLike | None = None,
    ) -> tuple[AdvisorySeverity, str] | None:
        """Gap advisory to show above a chart, None when nothing to report."""

        actual_text = (
            f"{format_display_date(self.actual_start, tz=tz)} to "
            f"{format_display_date(self.actual_end, tz=tz)}"
        )
        if self.classification is Completeness.SPARSE:
            return (
                "warning",
                f"Limited price data available. Data ranges from {actual_text}. "
                "Consider syncing for more complete data.",
            )
        if self.classification is Completeness.PARTIAL:
            requested_text = (
                f"{format_display_date(self.requested_start, tz=tz)} to "
                f"{format_display_date(self.requested_end, tz=tz)}"
            )
            return (
                "info",
                f"Partial data available from {actual_text} (requested {requested_text}).",
            )
        return None

    def to_dict(self) -> dict[str, str | int | float | None]:
        """Convert report to a JSON-friendly dictionary."""

        out = asdict(self)
        for key in ("requested_start", "requested_end", "actual_start", "actual_end"):
            value = out[key]
            out[key] = None if value is None else value.isoformat()
        out["classification"] = self.classification.value
        out["coverage"] = self.coverage
        return out


def classify_completeness(
    requested: TimeRange,
    actual: TimeRange | None,
    point_count: int,
    *,
    granularity: Granularity | None = None,
    policy: CompletenessConfig | None = None,
) -> CompletenessReport:
    """Classify returned data against the requested window.

    Rules, first match wins:
    - no points or no covered range: ``empty``
    - covered range reaches both requested edges within the edge tolerance:
      ``complete``
    - covered span shorter than ``sparse_fraction`` of the requested span:
      ``sparse``
    - anything else: ``partial``

    The edge tolerance is ``edge_tolerance_steps`` sampling steps of
    `granularity`, and zero when no granularity is given.

    Args:
        requested: Window that was asked for.
        actual: Window the returned points cover, if any.
        point_count: Number of returned points.
        granularity: Sampling step of the request.
        policy: Thresholds; defaults to `CompletenessConfig()`.

    Returns:
        Fresh `CompletenessReport`.
    """

    resolved_policy = policy or CompletenessConfig()
    count = max(int(point_count), 0)

    if count == 0 or actual is None:
        return CompletenessReport(
            requested_start=requested.start,
            requested_end=requested.end,
            actual_start=None if actual is None else actual.start,
            actual_end=None if actual is None else actual.end,
            classification=Completeness.EMPTY,
            point_count=count,
        )

    tolerance = pd.Timedelta(0)
    if granularity is not None:
        tolerance = granularity.step * resolved_policy.edge_tolerance_steps

    requested_span = TimeRange(requested.start, requested.end).span
    covers_start = actual.start <= requested.start + tolerance
    covers_end = actual.end >= requested.end - tolerance

    if covers_start and covers_end:
        classification = Completeness.COMPLETE
    elif actual.span < requested_span * resolved_policy.sparse_fraction:
        classification = Completeness.SPARSE
    else:
        classification = Completeness.PARTIAL

    return CompletenessReport(
        requested_start=requested.start,
        requested_end=requested.end,
        actual_start=actual.start,
        actual_end=actual.end,
        classification=classification,
        point_count=count,
    )
