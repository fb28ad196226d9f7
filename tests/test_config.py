"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from chart_range_lab.config import (
    ChartConfig,
    CompletenessConfig,
    default_config,
    load_config,
    resolve_project_root,
)


def test_default_config_values() -> None:
    """Built-in defaults should match the documented policy."""

    config = default_config()

    assert config == ChartConfig()
    assert config.display.timezone == "UTC"
    assert config.display.currency_symbol == "$"
    assert config.completeness == CompletenessConfig(sparse_fraction=0.5, edge_tolerance_steps=0.5)


def test_load_yaml_overrides(tmp_path: Path) -> None:
    """YAML values should override defaults key by key."""

    path = tmp_path / "chart.yaml"
    path.write_text(
        "display:\n  timezone: America/New_York\ncompleteness:\n  sparse_fraction: 0.25\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.display.timezone == "America/New_York"
    assert config.display.currency_symbol == "$"
    assert config.completeness.sparse_fraction == 0.25
    assert config.completeness.edge_tolerance_steps == 0.5


def test_load_toml(tmp_path: Path) -> None:
    """TOML files should load the same sections."""

    path = tmp_path / "chart.toml"
    path.write_text(
        '[display]\ncurrency_symbol = "€"\n\n[completeness]\nedge_tolerance_steps = 1.0\n',
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.display.currency_symbol == "€"
    assert config.completeness.edge_tolerance_steps == 1.0


def test_empty_yaml_uses_defaults(tmp_path: Path) -> None:
    """An empty YAML file should yield defaults."""

    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == default_config()


def test_shipped_default_config_loads() -> None:
    """The repository sample config should parse to defaults."""

    root = resolve_project_root(Path(__file__))

    assert load_config(root / "config" / "default.yaml") == default_config()


def test_load_config_errors(tmp_path: Path) -> None:
    """Missing files, unknown suffixes and bad values should raise."""

    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")

    ini_path = tmp_path / "chart.ini"
    ini_path.write_text("[display]\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported config format"):
        load_config(ini_path)

    bad_section = tmp_path / "bad.yaml"
    bad_section.write_text("display: [1, 2]\n", encoding="utf-8")
    with pytest.raises(KeyError):
        load_config(bad_section)

    bad_value = tmp_path / "bad_value.yaml"
    bad_value.write_text("completeness:\n  sparse_fraction: 1.5\n", encoding="utf-8")
    with pytest.raises(ValueError, match="sparse_fraction"):
        load_config(bad_value)
