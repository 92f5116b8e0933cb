"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

MONEY_QUANTUM = Decimal("0.01")
PRICE_QUANTUM = Decimal("0.0000000001")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Round a monetary value to cents.

    Args:
        value: Raw numeric value.
        rounding: Decimal rounding mode, half-up by default.

    Returns:
        Decimal: Value with two decimal places.
    """
    return coerce_decimal(value).quantize(MONEY_QUANTUM, rounding=rounding)


def quantize_price(value) -> Decimal:
    """Round a per-unit price or quantity to the stored precision."""
    return coerce_decimal(value).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


__all__ = [
    "MONEY_QUANTUM",
    "PRICE_QUANTUM",
    "coerce_decimal",
    "quantize_money",
    "quantize_price",
]
