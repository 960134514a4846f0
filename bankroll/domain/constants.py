"""Domain constants for the bankroll ledger."""

from decimal import Decimal

DISCREPANCY_TOLERANCE = Decimal("0.01")

DEFAULT_BASE_CURRENCY = "CAD"
DEFAULT_SESSION_CURRENCY = "USD"
DEFAULT_GAME_TYPE = "No Limit Hold'em"
DEFAULT_HANDS_PER_HOUR_ONLINE = 85
DEFAULT_HANDS_PER_HOUR_LIVE = 25

EXCHANGE_INPUT_DIRECT = "direct"
EXCHANGE_INPUT_AMOUNTS = "amounts"
EXCHANGE_INPUT_MODES = (EXCHANGE_INPUT_DIRECT, EXCHANGE_INPUT_AMOUNTS)

SUPPORTED_CURRENCIES = (
    "CAD",
    "USD",
    "EUR",
    "GBP",
    "AUD",
    "MXN",
    "BTC",
    "ETH",
)

DISCREPANCY_ADJUSTMENT_NAME = "Discrepancy Fix"

EXPORT_VERSION = 1


__all__ = [
    "DISCREPANCY_TOLERANCE",
    "DEFAULT_BASE_CURRENCY",
    "DEFAULT_SESSION_CURRENCY",
    "DEFAULT_GAME_TYPE",
    "DEFAULT_HANDS_PER_HOUR_ONLINE",
    "DEFAULT_HANDS_PER_HOUR_LIVE",
    "EXCHANGE_INPUT_DIRECT",
    "EXCHANGE_INPUT_AMOUNTS",
    "EXCHANGE_INPUT_MODES",
    "SUPPORTED_CURRENCIES",
    "DISCREPANCY_ADJUSTMENT_NAME",
    "EXPORT_VERSION",
]
