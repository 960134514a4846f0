"""Use case verifying sessions.

Verification is one-way. Verifying an online session commits its closing
balance to the platform; this is the only place besides an explicit save
where a session moves a platform balance.
"""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.application.use_cases.reconcile_session import (
    ReconcileSessionUseCase,
)
from bankroll.domain.models import (
    LiveSession,
    OnlineSession,
    ReconciliationState,
    VerificationOutcome,
    VerificationResult,
)
from bankroll.domain.services.calculations import computed_duration
from bankroll.domain.services.verification import (
    evaluate_verification,
    mark_verified,
)
from bankroll.infrastructure.logging.logger import get_app_logger


class VerifySessionUseCase:
    """Lock a session's monetary fields once the user confirms them."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        *,
        clock: Callable[[], datetime] | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port used to persist sessions and platforms.
            clock: Callable returning the current time.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._clock = clock or datetime.now
        self._logger = logger or get_app_logger()

    def execute(self, session: LiveSession | OnlineSession) -> VerificationResult:
        """Verify ``session`` when every guard passes.

        Online sessions still UNRESOLVED get a balance check first, so a
        session whose opening balance matches the platform verifies in a
        single step. The session is only marked verified once the record,
        and for online sessions the platform balance, are stored in one
        transaction.

        Args:
            session: Session to verify.

        Returns:
            VerificationResult: The outcome, plus persistence error text.
        """
        now = self._clock()
        if (
            isinstance(session, OnlineSession)
            and not session.is_verified
            and session.reconciliation is ReconciliationState.UNRESOLVED
        ):
            ReconcileSessionUseCase(
                self._repository,
                clock=self._clock,
                logger=self._logger,
            ).check(session)

        outcome = evaluate_verification(session, computed_duration(session, now))
        if outcome is not VerificationOutcome.VERIFIED:
            if outcome is VerificationOutcome.INVALID_DURATION:
                self._logger.warning(
                    f"Session {session.id} cannot be verified: "
                    f"duration must be positive"
                )
            return VerificationResult(outcome)

        verified = replace(session)
        mark_verified(verified)
        try:
            if isinstance(verified, OnlineSession):
                self._repository.commit_online_session(verified)
            else:
                self._repository.save_live_session(verified)
        except (SQLAlchemyError, LookupError) as exc:
            self._logger.error(f"Failed to verify session {session.id}: {exc}")
            return VerificationResult(outcome, error=str(exc))

        mark_verified(session)
        self._logger.info(f"Verified {type(session).__name__} {session.id}")
        return VerificationResult(outcome)


__all__ = ["VerifySessionUseCase"]
