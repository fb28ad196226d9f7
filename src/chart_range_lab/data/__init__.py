"""Data layer public exports."""

from .completeness import Completeness, CompletenessReport, classify_completeness
from .models import PricePoint, actual_range, points_frame
from .response import PriceResponse, assess_price_response, parse_price_response

__all__ = [
    "Completeness",
    "CompletenessReport",
    "PricePoint",
    "PriceResponse",
    "actual_range",
    "assess_price_response",
    "classify_completeness",
    "parse_price_response",
    "points_frame",
]
