"""Display formatting for amounts, rates and durations."""

from decimal import ROUND_FLOOR, Decimal

from bankroll.utils.decimal_utils import coerce_decimal


def format_currency(value, currency_code: str = "") -> str:
    """Format an amount as ``$1,234.56 CAD`` (``-$`` when negative)."""
    amount = coerce_decimal(value)
    prefix = "-$" if amount < 0 else "$"
    formatted = f"{prefix}{abs(amount):,.2f}"
    if not currency_code:
        return formatted
    return f"{formatted} {currency_code}"


def format_currency_signed(value, currency_code: str = "") -> str:
    """Format an amount with an explicit ``+`` or ``-`` sign."""
    amount = coerce_decimal(value)
    formatted = format_currency(abs(amount), currency_code)
    if amount > 0:
        return f"+{formatted}"
    if amount < 0:
        return f"-{formatted}"
    return formatted


def format_duration(hours) -> str:
    """Format hours as ``2h 30m``, ``45m`` or ``3h``."""
    total_minutes = int(
        (coerce_decimal(hours) * 60).to_integral_value(rounding=ROUND_FLOOR)
    )
    total_minutes = max(0, total_minutes)
    h, m = divmod(total_minutes, 60)
    if h == 0:
        return f"{m}m"
    if m == 0:
        return f"{h}h"
    return f"{h}h {m}m"


def format_hourly_rate(value) -> str:
    amount = coerce_decimal(value)
    sign = "-$" if amount < 0 else "$"
    return f"{sign}{abs(amount):,.2f}/hr"


def format_percentage(ratio) -> str:
    """Format a ratio such as 0.125 as ``12.5%``."""
    return f"{coerce_decimal(ratio) * 100:.1f}%"


def format_exchange_rate(rate) -> str:
    return f"{coerce_decimal(rate):.4f}"


def format_hands_count(count: int) -> str:
    if count >= 1000:
        return f"{Decimal(count) / 1000:.1f}k"
    return str(count)


def format_blind_value(value) -> str:
    """Format a blind without trailing zeros (``1``, ``0.5``, ``2.25``)."""
    amount = coerce_decimal(value)
    if amount == amount.to_integral_value():
        return str(int(amount))
    return format(amount.normalize(), "f")


def format_blinds(small_blind, big_blind) -> str:
    return f"{format_blind_value(small_blind)}/{format_blind_value(big_blind)}"


__all__ = [
    "format_currency",
    "format_currency_signed",
    "format_duration",
    "format_hourly_rate",
    "format_percentage",
    "format_exchange_rate",
    "format_hands_count",
    "format_blind_value",
    "format_blinds",
]
