"""Use case recording deposits to and withdrawals from a platform."""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.domain.constants import EXCHANGE_INPUT_AMOUNTS
from bankroll.domain.models import (
    Deposit,
    OperationResult,
    Platform,
    ValidationIssue,
    Withdrawal,
)
from bankroll.domain.models.results import (
    INVALID_AMOUNT,
    MISSING_FIELD,
    PROFIT_TRANSACTION,
)
from bankroll.domain.services.calculations import (
    is_profit_transaction,
    processing_fee,
    resolve_exchange_rate,
)
from bankroll.infrastructure.logging.logger import get_app_logger
from bankroll.infrastructure.settings import LedgerSettings
from bankroll.utils.decimal_utils import coerce_decimal

_ZERO = Decimal("0")


class RecordTransferUseCase:
    """Record money moving between the player's bank and a platform.

    A transfer stores either an effective exchange rate (foreign exchange)
    or a processing fee (same unit on both sides), never both. Saving a
    deposit adds ``amount_received`` to the platform balance; saving a
    withdrawal subtracts ``amount_requested``. The record and the balance
    change are written in one transaction.
    """

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        settings: LedgerSettings | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port used to read platforms and persist transfers.
            settings: Ledger settings providing the base currency.
            clock: Callable returning the current time.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._settings = settings or LedgerSettings()
        self._clock = clock or datetime.now
        self._logger = logger or get_app_logger()

    def deposit(
        self,
        platform_id: UUID,
        amount_sent,
        amount_received,
        *,
        is_foreign_exchange: bool = False,
        exchange_rate=None,
        date: datetime | None = None,
        method: str | None = None,
    ) -> OperationResult:
        """Record a deposit.

        Args:
            platform_id: Receiving platform.
            amount_sent: Amount leaving the bank (base currency when FX).
            amount_received: Amount credited, in the platform currency.
            is_foreign_exchange: Whether the transfer converts currencies.
            exchange_rate: Rate typed by the user in direct input mode.
            date: Transfer date; now when omitted.
            method: Payment method label.

        Returns:
            OperationResult: Blocking issues, or the persistence outcome.
        """
        platform, issues = self._validate(
            platform_id,
            amount_sent,
            amount_received,
            is_foreign_exchange,
        )
        if issues:
            return OperationResult(ok=False, issues=issues)

        rate, fee, fx = self._rate_and_fee(
            platform,
            amount_sent,
            amount_received,
            is_foreign_exchange,
            exchange_rate,
        )
        deposit = Deposit(
            platform_id=platform.id,
            amount_sent=coerce_decimal(amount_sent),
            amount_received=coerce_decimal(amount_received),
            date=date or self._clock(),
            is_foreign_exchange=fx,
            effective_exchange_rate=rate,
            processing_fee=fee,
            method=method,
        )
        try:
            balance = self._repository.record_deposit(deposit)
        except (SQLAlchemyError, LookupError) as exc:
            self._logger.error(f"Failed to save deposit {deposit.id}: {exc}")
            return OperationResult(ok=False, error=str(exc))

        platform.current_balance = balance
        self._logger.info(
            f"Deposit of {deposit.amount_received} {platform.currency} "
            f"recorded on {platform.name}"
        )
        return OperationResult(ok=True)

    def withdrawal(
        self,
        platform_id: UUID,
        amount_requested,
        amount_received,
        *,
        is_foreign_exchange: bool = False,
        exchange_rate=None,
        date: datetime | None = None,
        method: str | None = None,
    ) -> OperationResult:
        """Record a withdrawal.

        Args:
            platform_id: Platform paying out.
            amount_requested: Amount debited, in the platform currency.
            amount_received: Amount arriving (base currency when FX).
            is_foreign_exchange: Whether the transfer converts currencies.
            exchange_rate: Rate typed by the user in direct input mode.
            date: Transfer date; now when omitted.
            method: Payout method label.

        Returns:
            OperationResult: Blocking issues, or the persistence outcome.
        """
        platform, issues = self._validate(
            platform_id,
            amount_requested,
            amount_received,
            is_foreign_exchange,
        )
        if issues:
            return OperationResult(ok=False, issues=issues)

        rate, fee, fx = self._rate_and_fee(
            platform,
            amount_requested,
            amount_received,
            is_foreign_exchange,
            exchange_rate,
        )
        withdrawal = Withdrawal(
            platform_id=platform.id,
            amount_requested=coerce_decimal(amount_requested),
            amount_received=coerce_decimal(amount_received),
            date=date or self._clock(),
            is_foreign_exchange=fx,
            effective_exchange_rate=rate,
            processing_fee=fee,
            method=method,
        )
        try:
            balance = self._repository.record_withdrawal(withdrawal)
        except (SQLAlchemyError, LookupError) as exc:
            self._logger.error(
                f"Failed to save withdrawal {withdrawal.id}: {exc}"
            )
            return OperationResult(ok=False, error=str(exc))

        platform.current_balance = balance
        self._logger.info(
            f"Withdrawal of {withdrawal.amount_requested} {platform.currency} "
            f"recorded on {platform.name}"
        )
        return OperationResult(ok=True)

    def _validate(
        self,
        platform_id: UUID,
        amount_out,
        amount_in,
        is_foreign_exchange: bool,
    ) -> tuple[Platform | None, tuple[ValidationIssue, ...]]:
        platform = (
            self._repository.get_platform(platform_id)
            if platform_id is not None
            else None
        )
        if platform is None:
            return None, (ValidationIssue(MISSING_FIELD, "Select a platform."),)
        if coerce_decimal(amount_out) <= 0 or coerce_decimal(amount_in) <= 0:
            return platform, (
                ValidationIssue(
                    INVALID_AMOUNT,
                    "Both amounts must be greater than zero.",
                ),
            )
        same_currency = platform.currency == self._settings.base_currency
        if is_profit_transaction(
            amount_out,
            amount_in,
            same_currency=same_currency,
            is_foreign_exchange=is_foreign_exchange,
        ):
            return platform, (
                ValidationIssue(
                    PROFIT_TRANSACTION,
                    "The amount received cannot exceed the amount sent "
                    "for a transfer in the same currency.",
                ),
            )
        return platform, ()

    def _rate_and_fee(
        self,
        platform: Platform,
        amount_out,
        amount_in,
        is_foreign_exchange: bool,
        exchange_rate,
    ) -> tuple[Decimal, Decimal, bool]:
        """Return (effective rate, processing fee, stored FX flag)."""
        same_currency = platform.currency == self._settings.base_currency
        if same_currency or not is_foreign_exchange:
            return _ZERO, processing_fee(amount_out, amount_in), False
        mode = self._settings.exchange_rate_input_mode
        if exchange_rate is None:
            mode = EXCHANGE_INPUT_AMOUNTS
        rate = resolve_exchange_rate(mode, exchange_rate, amount_out, amount_in)
        return rate, _ZERO, True


__all__ = ["RecordTransferUseCase"]
