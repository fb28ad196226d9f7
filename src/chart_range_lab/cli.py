"""Command-line interface for chart-range-lab."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import pandas as pd

from chart_range_lab.config import ChartConfig, default_config, load_config, resolve_project_root
from chart_range_lab.core import (
    Granularity,
    TimeRange,
    format_abbreviated,
    format_axis_label,
    format_full,
    resolve_range,
    to_timestamp,
)
from chart_range_lab.data import classify_completeness


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = _load_cli_config(args.config)
    tz = config.display.timezone

    try:
        if args.command == "range":
            now = to_timestamp(_parse_instant_arg(args.now), tz) if args.now else pd.Timestamp.now(tz=tz)
            result = resolve_range(args.timeframe, now)
            payload = {**result.to_query(), "granularity": result.granularity.value}
            print(json.dumps(payload, indent=2))
            return

        if args.command == "label":
            instant = _parse_instant_arg(args.timestamp)
            if args.full:
                print(format_full(instant, tz=tz))
            else:
                print(format_axis_label(instant, args.timeframe, tz=tz))
            return

        if args.command == "classify":
            requested = TimeRange(
                start=to_timestamp(_parse_instant_arg(args.requested_start), tz),
                end=to_timestamp(_parse_instant_arg(args.requested_end), tz),
            )
            actual = None
            if args.actual_start and args.actual_end:
                actual = TimeRange(
                    start=to_timestamp(_parse_instant_arg(args.actual_start), tz),
                    end=to_timestamp(_parse_instant_arg(args.actual_end), tz),
                )
            granularity = Granularity(args.granularity) if args.granularity else None
            report = classify_completeness(
                requested,
                actual,
                args.points,
                granularity=granularity,
                policy=config.completeness,
            )
            print(json.dumps(report.to_dict(), indent=2))
            return

        if args.command == "abbreviate":
            print(format_abbreviated(args.amount, symbol=config.display.currency_symbol))
            return
    except ValueError as exc:
        parser.error(str(exc))

    raise ValueError(f"Unknown command: {args.command}")


def _build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    default_config_path = resolve_project_root(Path(__file__)) / "config" / "default.yaml"

    parser = argparse.ArgumentParser(description="Chart range lab CLI")
    parser.add_argument(
        "--config",
        type=Path,
        default=default_config_path,
        help="Path to YAML/TOML config file; built-in defaults when missing.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    range_parser = subparsers.add_parser("range", help="Resolve a timeframe into a request window")
    range_parser.add_argument("timeframe", help="Timeframe token, e.g. 1D, 6M, YTD")
    range_parser.add_argument("--now", help="Reference instant (ISO-8601 or epoch ms); defaults to the clock")

    label_parser = subparsers.add_parser("label", help="Format a chart label")
    label_parser.add_argument("timestamp", help="Instant as ISO-8601 or epoch milliseconds")
    label_parser.add_argument("--timeframe", default="1M", help="Timeframe that produced the point")
    label_parser.add_argument("--full", action="store_true", help="Render the tooltip form")

    amount_parser = subparsers.add_parser("abbreviate", help="Abbreviate a currency magnitude")
    amount_parser.add_argument("amount", help="Numeric amount")

    classify_parser = subparsers.add_parser("classify", help="Classify returned data coverage")
    classify_parser.add_argument("--requested-start", required=True)
    classify_parser.add_argument("--requested-end", required=True)
    classify_parser.add_argument("--actual-start")
    classify_parser.add_argument("--actual-end")
    classify_parser.add_argument("--points", type=int, default=0, help="Number of returned points")
    classify_parser.add_argument(
        "--granularity",
        choices=[g.value for g in Granularity],
        help="Sampling step of the request",
    )

    return parser


def _load_cli_config(path: Path) -> ChartConfig:
    """Load config if the file exists, otherwise fall back to defaults."""

    if path.exists():
        return load_config(path)
    return default_config()


def _parse_instant_arg(text: str) -> int | str:
    """Treat all-digit arguments as epoch milliseconds."""

    stripped = text.strip()
    if stripped.lstrip("-").isdigit():
        return int(stripped)
    return stripped


if __name__ == "__main__":
    main()
