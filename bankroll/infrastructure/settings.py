"""Settings provider for the bankroll ledger.

Settings are read-only once built. They come either from the key/value
store the application persists (``from_mapping``) or from ``LEDGER_*``
environment variables (``from_env``).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
import os

import dotenv

from bankroll.domain.constants import (
    DEFAULT_BASE_CURRENCY,
    DEFAULT_HANDS_PER_HOUR_LIVE,
    DEFAULT_HANDS_PER_HOUR_ONLINE,
    EXCHANGE_INPUT_DIRECT,
    EXCHANGE_INPUT_MODES,
    SUPPORTED_CURRENCIES,
)
from bankroll.domain.services.normalization import (
    normalize_currency,
    parse_bool,
)
from bankroll.infrastructure.logging.logger import get_app_logger
from bankroll.utils.decimal_utils import coerce_decimal
from bankroll.utils.utils import get_project_root

SETTINGS_ENV_VARS = {
    "baseCurrency": "LEDGER_BASE_CURRENCY",
    "handsPerHourOnline": "LEDGER_HANDS_PER_HOUR_ONLINE",
    "handsPerHourLive": "LEDGER_HANDS_PER_HOUR_LIVE",
    "exchangeRateInputMode": "LEDGER_EXCHANGE_RATE_INPUT_MODE",
    "defaultRateUSDToBase": "LEDGER_DEFAULT_RATE_USD_TO_BASE",
    "defaultRateEURToBase": "LEDGER_DEFAULT_RATE_EUR_TO_BASE",
    "defaultRateUSDToEUR": "LEDGER_DEFAULT_RATE_USD_TO_EUR",
    "showAdjustmentsInStats": "LEDGER_SHOW_ADJUSTMENTS_IN_STATS",
}
SETTINGS_KEYS = tuple(SETTINGS_ENV_VARS)

_DEFAULT_RATE_USD_TO_BASE = Decimal("1.36")
_DEFAULT_RATE_EUR_TO_BASE = Decimal("1.47")
_DEFAULT_RATE_USD_TO_EUR = Decimal("0.92")


@dataclass(frozen=True)
class LedgerSettings:
    """User-configured ledger defaults.

    Attributes:
        base_currency: Reporting currency, fixed after onboarding.
        hands_per_hour_online: Hands per hour per online table.
        hands_per_hour_live: Hands per hour at a live table.
        exchange_rate_input_mode: ``direct`` or ``amounts``.
        default_rate_usd_to_base: Pre-fill rate for USD sessions.
        default_rate_eur_to_base: Pre-fill rate for EUR sessions.
        default_rate_usd_to_eur: Pre-fill rate between USD and EUR.
        show_adjustments_in_stats: Whether stats include adjustments.
        database_url: SQLAlchemy URL of the ledger database.
    """

    base_currency: str = DEFAULT_BASE_CURRENCY
    hands_per_hour_online: int = DEFAULT_HANDS_PER_HOUR_ONLINE
    hands_per_hour_live: int = DEFAULT_HANDS_PER_HOUR_LIVE
    exchange_rate_input_mode: str = EXCHANGE_INPUT_DIRECT
    default_rate_usd_to_base: Decimal = _DEFAULT_RATE_USD_TO_BASE
    default_rate_eur_to_base: Decimal = _DEFAULT_RATE_EUR_TO_BASE
    default_rate_usd_to_eur: Decimal = _DEFAULT_RATE_USD_TO_EUR
    show_adjustments_in_stats: bool = True
    database_url: str | None = None

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, object],
        database_url: str | None = None,
    ) -> "LedgerSettings":
        """Build settings from the persisted key/value store.

        Zero, negative or unparseable values fall back to the defaults.

        Args:
            values: Mapping keyed by the names in ``SETTINGS_KEYS``.
            database_url: Optional database URL override.

        Returns:
            LedgerSettings: Settings with defaults applied.
        """
        logger = get_app_logger()
        unknown = sorted(set(values) - set(SETTINGS_KEYS))
        if unknown:
            logger.warning(f"Ignoring unknown settings keys: {unknown}")

        mode = str(
            values.get("exchangeRateInputMode") or EXCHANGE_INPUT_DIRECT
        ).strip().lower()
        if mode not in EXCHANGE_INPUT_MODES:
            logger.warning(
                f"Unknown exchange rate input mode '{mode}', using direct"
            )
            mode = EXCHANGE_INPUT_DIRECT

        base_currency = (
            normalize_currency(_as_text(values.get("baseCurrency")))
            or DEFAULT_BASE_CURRENCY
        )
        if base_currency not in SUPPORTED_CURRENCIES:
            logger.warning(
                f"Unsupported base currency '{base_currency}', "
                f"using {DEFAULT_BASE_CURRENCY}"
            )
            base_currency = DEFAULT_BASE_CURRENCY

        return cls(
            base_currency=base_currency,
            hands_per_hour_online=_positive_int(
                values.get("handsPerHourOnline"),
                DEFAULT_HANDS_PER_HOUR_ONLINE,
            ),
            hands_per_hour_live=_positive_int(
                values.get("handsPerHourLive"),
                DEFAULT_HANDS_PER_HOUR_LIVE,
            ),
            exchange_rate_input_mode=mode,
            default_rate_usd_to_base=_positive_rate(
                values.get("defaultRateUSDToBase"),
                _DEFAULT_RATE_USD_TO_BASE,
            ),
            default_rate_eur_to_base=_positive_rate(
                values.get("defaultRateEURToBase"),
                _DEFAULT_RATE_EUR_TO_BASE,
            ),
            default_rate_usd_to_eur=_positive_rate(
                values.get("defaultRateUSDToEUR"),
                _DEFAULT_RATE_USD_TO_EUR,
            ),
            show_adjustments_in_stats=parse_bool(
                values.get("showAdjustmentsInStats"),
                True,
            ),
            database_url=database_url,
        )

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from ``LEDGER_*`` environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        values = {
            key: os.environ[env_name]
            for key, env_name in SETTINGS_ENV_VARS.items()
            if os.getenv(env_name)
        }
        database_url = os.getenv("LEDGER_DB_URL") or cls.default_database_url()
        return cls.from_mapping(values, database_url=database_url)

    @staticmethod
    def default_database_url() -> str:
        """Return a SQLite URL under the project data/ directory."""
        data_dir = get_project_root() / "data"
        return f"sqlite:///{data_dir / 'bankroll.db'}"

    def default_exchange_rate(
        self,
        session_currency: str,
        base_currency: str | None = None,
    ) -> Decimal:
        """Return the pre-fill rate from ``session_currency`` to base.

        Args:
            session_currency: Currency the session is played in.
            base_currency: Target currency; defaults to ``base_currency``.

        Returns:
            Decimal: Base units per session unit, 1 for unknown pairs.
        """
        target = base_currency or self.base_currency
        if session_currency == target:
            return Decimal("1")
        usd_base = self.default_rate_usd_to_base
        eur_base = self.default_rate_eur_to_base
        usd_eur = self.default_rate_usd_to_eur
        rates = {
            ("USD", "CAD"): usd_base,
            ("EUR", "CAD"): eur_base,
            ("USD", "EUR"): usd_eur,
            ("CAD", "USD"): Decimal("1") / usd_base,
            ("CAD", "EUR"): Decimal("1") / eur_base,
            ("EUR", "USD"): Decimal("1") / usd_eur,
        }
        return rates.get((session_currency, target), Decimal("1"))


def _as_text(value) -> str | None:
    return None if value is None else str(value)


def _positive_int(value, default: int) -> int:
    number = coerce_decimal(value)
    if number <= 0:
        return default
    return int(number)


def _positive_rate(value, default: Decimal) -> Decimal:
    rate = coerce_decimal(value)
    return rate if rate > 0 else default


__all__ = ["LedgerSettings", "SETTINGS_KEYS", "SETTINGS_ENV_VARS"]
