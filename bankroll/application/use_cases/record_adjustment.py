"""Use case recording informational adjustments."""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.domain.models import Adjustment, OperationResult, ValidationIssue
from bankroll.domain.models.results import INVALID_AMOUNT, MISSING_FIELD
from bankroll.domain.services.calculations import convert_to_base
from bankroll.infrastructure.logging.logger import get_app_logger
from bankroll.infrastructure.settings import LedgerSettings
from bankroll.utils.decimal_utils import coerce_decimal


class RecordAdjustmentUseCase:
    """Record a signed adjustment such as a bonus, rakeback or correction.

    Adjustments are ledger entries only; they never move a platform balance.
    """

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        settings: LedgerSettings | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        logger=None,
    ) -> None:
        self._repository = repository
        self._settings = settings or LedgerSettings()
        self._clock = clock or datetime.now
        self._logger = logger or get_app_logger()

    def execute(
        self,
        name: str,
        amount,
        *,
        currency: str | None = None,
        exchange_rate=None,
        platform_id: UUID | None = None,
        location: str | None = None,
        date: datetime | None = None,
        notes: str | None = None,
    ) -> OperationResult:
        """Validate and persist an adjustment.

        Args:
            name: Label of the adjustment.
            amount: Signed amount in ``currency``.
            currency: Currency code; the base currency when omitted.
            exchange_rate: Base units per ``currency`` unit; the settings
                default when omitted.
            platform_id: Platform the adjustment relates to, if online.
            location: Card room the adjustment relates to, if live.
            date: Adjustment date; now when omitted.
            notes: Free text.

        Returns:
            OperationResult: Blocking issues, or the persistence outcome.
        """
        if not name or not name.strip():
            return OperationResult(
                ok=False,
                issues=(ValidationIssue(MISSING_FIELD, "Enter a name."),),
            )
        value = coerce_decimal(amount)
        if value == 0:
            return OperationResult(
                ok=False,
                issues=(
                    ValidationIssue(INVALID_AMOUNT, "Amount cannot be zero."),
                ),
            )
        code = currency or self._settings.base_currency
        if exchange_rate is None:
            rate = self._settings.default_exchange_rate(code)
        else:
            rate = coerce_decimal(exchange_rate, Decimal("1"))
        adjustment = Adjustment(
            name=name.strip(),
            amount=value,
            currency=code,
            exchange_rate_to_base=rate,
            amount_base=convert_to_base(value, rate),
            date=date or self._clock(),
            platform_id=platform_id,
            is_online=platform_id is not None,
            location=location,
            notes=notes,
        )
        return self.save(adjustment)

    def save(self, adjustment: Adjustment) -> OperationResult:
        """Persist a prepared adjustment."""
        try:
            self._repository.save_adjustment(adjustment)
        except SQLAlchemyError as exc:
            self._logger.error(
                f"Failed to save adjustment {adjustment.id}: {exc}"
            )
            return OperationResult(ok=False, error=str(exc))
        self._logger.info(
            f"Adjustment '{adjustment.name}' of {adjustment.amount} "
            f"{adjustment.currency} recorded"
        )
        return OperationResult(ok=True)


__all__ = ["RecordAdjustmentUseCase"]
