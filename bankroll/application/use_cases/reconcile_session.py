"""Use case reconciling an online session with its platform balance.

The check only classifies the mismatch; the remediation is a user choice.
Any of the remediations (recording a transfer, logging an adjustment or
dismissing) leaves the session RESOLVED so it can be verified.
"""

from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.application.use_cases.record_adjustment import (
    RecordAdjustmentUseCase,
)
from bankroll.domain.models import (
    Discrepancy,
    OnlineSession,
    OperationResult,
    ReconciliationState,
    ValidationIssue,
)
from bankroll.domain.models.results import MISSING_FIELD
from bankroll.domain.services.reconciliation import (
    build_discrepancy_adjustment,
    check_session_discrepancy,
    requires_balance_check,
)
from bankroll.infrastructure.logging.logger import get_app_logger


class ReconcileSessionUseCase:
    """Check and resolve balance discrepancies on online sessions."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        *,
        clock: Callable[[], datetime] | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port used to read platforms and persist sessions.
            clock: Callable returning the current time.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._clock = clock or datetime.now
        self._logger = logger or get_app_logger()

    def check(self, session: OnlineSession) -> Discrepancy | None:
        """Run the balance check on a completed, unverified session.

        Sessions that are active or verified are not checked. A clean check
        resolves the session.

        Returns:
            Discrepancy | None: The mismatch found, if any.
        """
        if not requires_balance_check(session):
            return None
        platform = self._repository.get_platform(session.platform_id)
        if platform is None:
            self._logger.warning(
                f"Session {session.id} references an unknown platform"
            )
            return None
        discrepancy = check_session_discrepancy(session, platform)
        if discrepancy is None:
            self._resolve(session)
            return None
        self._logger.warning(
            f"Session {session.id}: platform {platform.name} is "
            f"{discrepancy.direction.value} than expected by "
            f"{discrepancy.delta}"
        )
        return discrepancy

    def dismiss(self, session: OnlineSession) -> OperationResult:
        """Accept the discrepancy without recording anything."""
        return self._resolve(session)

    def mark_resolved(self, session: OnlineSession) -> OperationResult:
        """Resolve after the user recorded a deposit or withdrawal."""
        return self._resolve(session)

    def log_as_adjustment(
        self,
        session: OnlineSession,
        discrepancy: Discrepancy,
    ) -> OperationResult:
        """Record the discrepancy as an adjustment and resolve the session.

        The adjustment amount is expected minus recorded balance, converted
        at the session's rate to base.
        """
        platform = self._repository.get_platform(session.platform_id)
        if platform is None:
            return OperationResult(
                ok=False,
                issues=(ValidationIssue(MISSING_FIELD, "Unknown platform."),),
            )
        adjustment = build_discrepancy_adjustment(
            discrepancy,
            platform,
            session.exchange_rate_to_base,
            self._clock(),
        )
        result = RecordAdjustmentUseCase(
            self._repository,
            logger=self._logger,
        ).save(adjustment)
        if not result.ok:
            return result
        return self._resolve(session)

    def _resolve(self, session: OnlineSession) -> OperationResult:
        session.reconciliation = ReconciliationState.RESOLVED
        try:
            self._repository.save_online_session(session)
        except SQLAlchemyError as exc:
            self._logger.error(
                f"Failed to resolve session {session.id}: {exc}"
            )
            return OperationResult(ok=False, error=str(exc))
        return OperationResult(ok=True)


__all__ = ["ReconcileSessionUseCase"]
