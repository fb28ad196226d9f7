"""Configuration models and loader utilities."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from chart_range_lab.core.instants import DEFAULT_TIMEZONE


@dataclass(frozen=True)
class DisplayConfig:
    """Label and amount rendering configuration."""

    timezone: str = DEFAULT_TIMEZONE
    currency_symbol: str = "$"


@dataclass(frozen=True)
class CompletenessConfig:
    """Completeness classification policy.

    Attributes:
        sparse_fraction: Covered share of the requested span below which a
            non-empty result is classified as sparse.
        edge_tolerance_steps: Sampling steps by which either edge may fall
            short while still counting as complete.
    """

    sparse_fraction: float = 0.5
    edge_tolerance_steps: float = 0.5

    def __post_init__(self) -> None:
        """Validate policy bounds."""

        if not 0.0 < self.sparse_fraction <= 1.0:
            raise ValueError("sparse_fraction must be in (0, 1]")
        if self.edge_tolerance_steps < 0.0:
            raise ValueError("edge_tolerance_steps must be >= 0")


@dataclass(frozen=True)
class ChartConfig:
    """Top-level configuration object."""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    completeness: CompletenessConfig = field(default_factory=CompletenessConfig)


RawConfigDict = dict[str, Any]


def default_config() -> ChartConfig:
    """Return built-in defaults."""

    return ChartConfig()


def resolve_project_root(start: Path | None = None) -> Path:
    """Resolve repository root by locating `pyproject.toml`.

    Args:
        start: Optional starting path.

    Returns:
        Path to project root if found, otherwise current working directory.
    """

    candidate = (start or Path(__file__)).resolve()
    search_nodes = [candidate, *candidate.parents]
    for node in search_nodes:
        if node.is_dir() and (node / "pyproject.toml").exists():
            return node
        if node.is_file() and (node.parent / "pyproject.toml").exists():
            return node.parent
    return Path.cwd()


def load_config(path: str | Path) -> ChartConfig:
    """Load configuration from YAML or TOML.

    Every section and key is optional; missing values keep their defaults.

    Args:
        path: Config file path.

    Returns:
        Parsed and typed configuration object.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If suffix is unsupported or a policy value is out of range.
        KeyError: If a section is not a mapping.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    raw = _load_raw_config(config_path)
    return _parse_config(raw)


def _load_raw_config(path: Path) -> RawConfigDict:
    """Load raw dictionary from a supported config file."""

    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as fh:
            loaded = yaml.safe_load(fh)
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ValueError(f"YAML config must parse to a dictionary: {path}")
        return loaded
    if suffix == ".toml":
        with path.open("rb") as fh:
            loaded = tomllib.load(fh)
        return loaded
    raise ValueError(f"Unsupported config format: {path.suffix}")


def _parse_config(raw: RawConfigDict) -> ChartConfig:
    """Parse raw config dictionary into `ChartConfig`."""

    display_raw = _optional_dict(raw, "display")
    completeness_raw = _optional_dict(raw, "completeness")

    display_defaults = DisplayConfig()
    completeness_defaults = CompletenessConfig()

    return ChartConfig(
        display=DisplayConfig(
            timezone=str(display_raw.get("timezone", display_defaults.timezone)),
            currency_symbol=str(
                display_raw.get("currency_symbol", display_defaults.currency_symbol)
            ),
        ),
        completeness=CompletenessConfig(
            sparse_fraction=float(
                completeness_raw.get("sparse_fraction", completeness_defaults.sparse_fraction)
            ),
            edge_tolerance_steps=float(
                completeness_raw.get(
                    "edge_tolerance_steps",
                    completeness_defaults.edge_tolerance_steps,
                )
            ),
        ),
    )


def _optional_dict(raw: RawConfigDict, key: str) -> RawConfigDict:
    """Fetch an optional dictionary section."""

    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise KeyError(f"Invalid config section: {key}")
    return value
