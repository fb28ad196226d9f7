"""Abbreviated currency magnitudes for market-data displays."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

import pandas as pd

NOT_AVAILABLE = "N/A"

_CENTS = Decimal("0.01")

# Evaluated largest first against the unrounded magnitude.
_TIERS: tuple[tuple[Decimal, str], ...] = (
    (Decimal(10) ** 12, "T"),
    (Decimal(10) ** 9, "B"),
    (Decimal(10) ** 6, "M"),
    (Decimal(10) ** 3, "K"),
)


def format_abbreviated(amount: Decimal | float | int | None, *, symbol: str = "$") -> str:
    """Render an amount as ``"$1.23B"`` style text.

    The tier is chosen on the raw magnitude before division, and the quotient
    is rounded half-up to cents afterwards. A value just under a tier boundary
    can therefore round up to ``1000.00`` without moving to the next suffix:
    ``999_999_999_999`` renders as ``"$1000.00B"``.

    Negative amounts keep their sign in front of the symbol (``"-$1.50K"``).

    Args:
        amount: Numeric amount; None or NaN means unknown.
        symbol: Currency symbol prefix.

    Returns:
        Formatted string, or ``"N/A"`` for missing and non-finite amounts.

    Raises:
        ValueError: If `amount` is not numeric.
    """

    if amount is None or (not isinstance(amount, Decimal) and pd.isna(amount)):
        return NOT_AVAILABLE

    value = _to_decimal(amount)
    if not value.is_finite():
        return NOT_AVAILABLE

    magnitude = abs(value)
    with localcontext() as ctx:
        # Integer digits plus cents must fit the working precision.
        ctx.prec = max(ctx.prec, magnitude.adjusted() + 3)
        suffix = ""
        for threshold, tier_suffix in _TIERS:
            if magnitude >= threshold:
                magnitude = magnitude / threshold
                suffix = tier_suffix
                break

        rounded = magnitude.quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 and rounded != 0 else ""
    return f"{sign}{symbol}{rounded:f}{suffix}"


def _to_decimal(amount: Decimal | float | int) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool):
        raise ValueError(f"Not a numeric amount: {amount!r}")
    try:
        return Decimal(str(amount))
    except InvalidOperation as exc:
        raise ValueError(f"Not a numeric amount: {amount!r}") from exc
