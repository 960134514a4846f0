"""Normalization helpers for live-typed user input."""

from decimal import Decimal, InvalidOperation

_ONE = Decimal("1")
_ZERO = Decimal("0")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def normalize_currency(code: str | None) -> str | None:
    """Normalize currency codes.

    Args:
        code: Raw currency code.

    Returns:
        str | None: Upper-cased code or None when blank.
    """
    if not code:
        return None
    cleaned = code.strip()
    return cleaned.upper() if cleaned else None


def parse_amount(text: str | None, default: Decimal = _ZERO) -> Decimal:
    """Parse a monetary text field, falling back to ``default``.

    Fields are parsed character by character as the user types, so partial
    input such as ``"12."`` or ``"-"`` must never raise.

    Args:
        text: Raw field value.
        default: Value used when the text is not a finite number.

    Returns:
        Decimal: Parsed amount.
    """
    if text is None:
        return default
    cleaned = str(text).strip().replace(",", "")
    if not cleaned:
        return default
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return default
    if not value.is_finite():
        return default
    return value


def parse_rate(text: str | None) -> Decimal:
    """Parse an exchange rate field; unusable input yields 1.0."""
    value = parse_amount(text, default=_ONE)
    return value if value > 0 else _ONE


def parse_count(text: str | None) -> int:
    """Parse an integer count field such as a manual hand count."""
    value = parse_amount(text)
    if value <= 0 or value != value.to_integral_value():
        return 0
    return int(value)


def parse_blinds(label: str | None) -> tuple[Decimal, Decimal] | None:
    """Split a ``"1/2"`` style blinds label into small and big blind.

    Returns:
        tuple[Decimal, Decimal] | None: Blinds, or None when unparseable.
    """
    if not label:
        return None
    parts = label.split("/")
    if len(parts) < 2:
        return None
    small = parse_amount(parts[0])
    big = parse_amount(parts[1])
    if small <= 0 and big <= 0:
        return None
    return small, big


def parse_bool(value, default: bool | None = None) -> bool | None:
    """Read a flag from a bool, a number or text such as ``"false"``.

    Args:
        value: Raw flag value.
        default: Value returned when the flag cannot be read.

    Returns:
        bool | None: The flag, or ``default``.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return default


__all__ = [
    "normalize_currency",
    "parse_amount",
    "parse_rate",
    "parse_count",
    "parse_blinds",
    "parse_bool",
]
