"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
RATE_QUANTUM = Decimal("0.0001")


def coerce_decimal(value, default: Decimal = Decimal("0")) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON, or adapters.
        default: Value returned for None, unparseable or non-finite input.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return default
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return default
    return value if value.is_finite() else default


def quantize_rate(value: Decimal) -> Decimal:
    """Round an exchange rate to four decimal places."""
    return value.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


def quantize_cents(value: Decimal) -> Decimal:
    """Round a monetary amount to cents."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


__all__ = [
    "CENTS",
    "RATE_QUANTUM",
    "coerce_decimal",
    "quantize_rate",
    "quantize_cents",
]
