"""Chart timeframe ranges, labels, completeness checks and magnitude formatting."""

__version__ = "0.1.0"
