"""Tests for completeness classification of returned price history."""

from __future__ import annotations

import pandas as pd
import pytest

from chart_range_lab.config import CompletenessConfig
from chart_range_lab.core import Granularity, TimeRange, resolve_range
from chart_range_lab.data import Completeness, classify_completeness

REQUESTED = TimeRange(
    start=pd.Timestamp("2024-01-01T00:00:00Z"),
    end=pd.Timestamp("2024-12-31T00:00:00Z"),
)


def _range(start: str, end: str) -> TimeRange:
    return TimeRange(start=pd.Timestamp(start), end=pd.Timestamp(end))


def test_missing_actual_range_is_empty() -> None:
    """No covered range should classify as empty for any request."""

    report = classify_completeness(REQUESTED, None, 0)

    assert report.classification is Completeness.EMPTY
    assert report.actual_start is None
    assert report.actual_end is None
    assert report.coverage == 0.0


def test_zero_points_is_empty_even_with_range() -> None:
    """A reported range without points should still be empty."""

    report = classify_completeness(REQUESTED, REQUESTED, 0)

    assert report.classification is Completeness.EMPTY


def test_superset_is_complete() -> None:
    """A covered range containing the request should be complete."""

    actual = _range("2023-12-01T00:00:00Z", "2025-01-05T00:00:00Z")

    report = classify_completeness(REQUESTED, actual, 260)

    assert report.classification is Completeness.COMPLETE
    assert report.coverage == 1.0


def test_edge_tolerance_scales_with_granularity() -> None:
    """Edges short by less than half a step should still be complete."""

    actual = _range("2024-01-01T10:00:00Z", "2024-12-30T15:00:00Z")

    with_step = classify_completeness(REQUESTED, actual, 250, granularity=Granularity.DAY)
    without_step = classify_completeness(REQUESTED, actual, 250)

    assert with_step.classification is Completeness.COMPLETE
    assert without_step.classification is Completeness.PARTIAL


def test_late_start_is_partial() -> None:
    """A late start covering most of the span should be partial."""

    actual = _range("2024-03-01T00:00:00Z", "2024-12-31T00:00:00Z")

    report = classify_completeness(REQUESTED, actual, 200, granularity=Granularity.DAY)

    assert report.classification is Completeness.PARTIAL
    assert report.actual_start == actual.start
    assert report.requested_start == REQUESTED.start


def test_short_history_is_sparse() -> None:
    """Coverage below the sparse fraction should be sparse."""

    actual = _range("2024-11-01T00:00:00Z", "2024-12-31T00:00:00Z")

    report = classify_completeness(REQUESTED, actual, 40, granularity=Granularity.DAY)

    assert report.classification is Completeness.SPARSE
    assert report.coverage == pytest.approx(60 / 365)


def test_single_point_is_sparse() -> None:
    """One point covers no span and should be sparse rather than empty."""

    point = pd.Timestamp("2024-12-30T00:00:00Z")

    report = classify_completeness(REQUESTED, TimeRange(point, point), 1)

    assert report.classification is Completeness.SPARSE


def test_sparse_fraction_is_configurable() -> None:
    """Raising the sparse fraction should reclassify partial data as sparse."""

    actual = _range("2024-04-01T00:00:00Z", "2024-12-31T00:00:00Z")
    strict = CompletenessConfig(sparse_fraction=0.9)

    default_report = classify_completeness(REQUESTED, actual, 180)
    strict_report = classify_completeness(REQUESTED, actual, 180, policy=strict)

    assert default_report.classification is Completeness.PARTIAL
    assert strict_report.classification is Completeness.SPARSE


def test_inputs_are_not_mutated() -> None:
    """Classification should leave its inputs untouched."""

    actual = _range("2024-03-01T00:00:00Z", "2024-12-31T00:00:00Z")
    before = (REQUESTED, actual)

    classify_completeness(REQUESTED, actual, 10)

    assert (REQUESTED, actual) == before


def test_classification_is_idempotent() -> None:
    """Repeated calls should produce equal reports."""

    actual = _range("2024-03-01T00:00:00Z", "2024-12-31T00:00:00Z")

    first = classify_completeness(REQUESTED, actual, 10)
    second = classify_completeness(REQUESTED, actual, 10)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_advisory_messages() -> None:
    """Sparse and partial reports should carry gap advisories."""

    sparse = classify_completeness(
        REQUESTED,
        _range("2024-11-01T00:00:00Z", "2024-12-31T00:00:00Z"),
        40,
    )
    partial = classify_completeness(
        REQUESTED,
        _range("2024-03-01T00:00:00Z", "2024-12-31T00:00:00Z"),
        200,
    )
    complete = classify_completeness(REQUESTED, REQUESTED, 250)

    assert sparse.advisory() == (
        "warning",
        "Limited price data available. Data ranges from Nov 1, 2024 to Dec 31, 2024. "
        "Consider syncing for more complete data.",
    )
    assert partial.advisory() == (
        "info",
        "Partial data available from Mar 1, 2024 to Dec 31, 2024 "
        "(requested Jan 1, 2024 to Dec 31, 2024).",
    )
    assert complete.advisory() is None
    assert classify_completeness(REQUESTED, None, 0).advisory() is None


def test_to_dict_is_json_friendly() -> None:
    """Report dictionaries should hold ISO strings and plain labels."""

    out = classify_completeness(REQUESTED, None, 0).to_dict()

    assert out["classification"] == "empty"
    assert out["requested_start"] == "2024-01-01T00:00:00+00:00"
    assert out["actual_start"] is None
    assert out["point_count"] == 0


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("complete", Completeness.COMPLETE),
        ("Partial", Completeness.PARTIAL),
        ("no_data", Completeness.EMPTY),
        ("mystery", None),
        (None, None),
    ],
)
def test_parse_source_labels(label: str | None, expected: Completeness | None) -> None:
    """Source-reported labels should map onto members."""

    assert Completeness.parse(label) is expected


def test_invalid_policy_rejected() -> None:
    """Out-of-range policy values should raise ValueError."""

    with pytest.raises(ValueError):
        CompletenessConfig(sparse_fraction=0.0)
    with pytest.raises(ValueError):
        CompletenessConfig(edge_tolerance_steps=-1.0)


def test_accepts_range_result_as_request() -> None:
    """A resolved RangeResult should be usable directly as the request."""

    requested = resolve_range("1Y", pd.Timestamp("2024-12-31T00:00:00Z"))
    actual = _range("2024-11-01T00:00:00Z", "2024-12-31T00:00:00Z")

    report = classify_completeness(requested, actual, 40)  # type: ignore[arg-type]

    assert report.classification is Completeness.SPARSE
