"""Use cases driving the entry of a session from start to save.

Both session kinds share the same lifecycle::

    PRE_START -> ACTIVE -> STOPPED -> SAVED
         \\          \\         \\
          +----------+---------+--> DISCARDED

While ``ACTIVE`` every field change is persisted immediately. Durations are
always derived from the stored timestamps, never from a running timer.
Listeners are notified after every state change.
"""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.domain.errors import InvalidTransitionError
from bankroll.domain.models import (
    LiveSession,
    OnlineSession,
    OperationResult,
    ReconciliationState,
    SessionEntryState,
    ValidationIssue,
)
from bankroll.domain.models.results import (
    INVALID_TIME_RANGE,
    MISSING_FIELD,
    UNRESOLVED_DISCREPANCY,
)
from bankroll.domain.services.calculations import (
    effective_hands,
    estimated_hands,
    latest_conversion_rate,
    session_duration,
    session_net_result,
    session_net_result_base,
)
from bankroll.domain.services.normalization import parse_blinds
from bankroll.domain.services.reconciliation import check_session_discrepancy
from bankroll.infrastructure.logging.logger import get_app_logger
from bankroll.infrastructure.settings import LedgerSettings

SessionListener = Callable[[SessionEntryState, LiveSession | OnlineSession], None]

_EDITABLE_STATES = (
    SessionEntryState.PRE_START,
    SessionEntryState.ACTIVE,
    SessionEntryState.STOPPED,
)


class _SessionEntryUseCase:
    """Shared lifecycle for live and online session entry.

    Subclasses provide the session factory, persistence calls and the
    finalisation of derived fields.
    """

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        settings: LedgerSettings | None = None,
        session: LiveSession | OnlineSession | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port used to persist the session.
            settings: Ledger settings; defaults are used when omitted.
            session: Existing session to resume; a new draft otherwise.
            clock: Callable returning the current time.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._settings = settings or LedgerSettings()
        self._clock = clock or datetime.now
        self._logger = logger or get_app_logger()
        self._listeners: list[SessionListener] = []
        self._resumed = session is not None
        if session is None:
            self.session = self._new_session()
            self._persisted = False
            self._state = SessionEntryState.PRE_START
        else:
            self.session = session
            self._persisted = True
            self._state = (
                SessionEntryState.ACTIVE
                if session.is_active
                else SessionEntryState.STOPPED
            )

    @property
    def state(self) -> SessionEntryState:
        return self._state

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a state listener and return a callable removing it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes) -> OperationResult:
        """Apply field changes, autosaving while the session is active.

        A ``blinds`` label also sets the small and big blind when it parses.

        Raises:
            InvalidTransitionError: If the session was saved or discarded.
            AttributeError: If a change names an unknown field.
            LockedFieldError: If a change targets a verified amount.
        """
        self._require_state("update", _EDITABLE_STATES)
        for name, value in changes.items():
            if not hasattr(self.session, name):
                raise AttributeError(
                    f"{type(self.session).__name__} has no field '{name}'"
                )
            setattr(self.session, name, value)
        if "blinds" in changes:
            parsed = parse_blinds(changes["blinds"])
            if parsed is not None:
                self.session.small_blind, self.session.big_blind = parsed
        if self._state is SessionEntryState.ACTIVE:
            return self._persist("autosave")
        return OperationResult(ok=True)

    def start(self) -> OperationResult:
        """Persist the draft with a start timestamp and become ACTIVE."""
        self._require_state("start", (SessionEntryState.PRE_START,))
        issues = self._start_issues()
        if issues:
            return OperationResult(ok=False, issues=issues)

        self.session.start_time = self._clock()
        result = self._persist("start")
        if not result.ok:
            self.session.start_time = None
            return result
        self._persisted = True
        self._transition(SessionEntryState.ACTIVE)
        return result

    def stop(self) -> OperationResult:
        """Stamp the end time, compute the duration and become STOPPED."""
        self._require_state("stop", (SessionEntryState.ACTIVE,))
        previous = (self.session.end_time, self.session.duration)
        end_time = self._clock()
        self.session.end_time = end_time
        self.session.duration = session_duration(
            self.session.start_time,
            end_time,
            self.session.break_minutes,
        )
        result = self._persist("stop")
        if not result.ok:
            self.session.end_time, self.session.duration = previous
            return result
        self._transition(SessionEntryState.STOPPED)
        return result

    def save(self) -> OperationResult:
        """Finalise derived fields, persist and leave the flow as SAVED."""
        self._require_state("save", (SessionEntryState.STOPPED,))
        issues = self._save_issues()
        if any(issue.blocking for issue in issues):
            return OperationResult(ok=False, issues=issues)

        session = self.session
        session.duration = session_duration(
            session.start_time,
            session.end_time,
            session.break_minutes,
        )
        warnings = self._finalise()
        try:
            self._commit()
        except (SQLAlchemyError, LookupError) as exc:
            self._logger.error(f"Failed to save session {session.id}: {exc}")
            return OperationResult(ok=False, issues=warnings, error=str(exc))
        self._logger.info(
            f"Saved {type(session).__name__} {session.id} "
            f"with net result {session.net_profit_loss}"
        )
        self._transition(SessionEntryState.SAVED)
        return OperationResult(ok=True, issues=warnings)

    def discard(self) -> OperationResult:
        """Delete the draft record, if any, and become DISCARDED."""
        self._require_state("discard", _EDITABLE_STATES)
        if self._persisted:
            try:
                self._delete()
            except SQLAlchemyError as exc:
                self._logger.error(
                    f"Failed to discard session {self.session.id}: {exc}"
                )
                return OperationResult(ok=False, error=str(exc))
            self._persisted = False
        self._logger.info(f"Discarded session {self.session.id}")
        self._transition(SessionEntryState.DISCARDED)
        return OperationResult(ok=True)

    def elapsed_hours(self) -> Decimal:
        """Return hours played so far, from the stored timestamps."""
        if self.session.start_time is None:
            return Decimal("0")
        end = self.session.end_time or self._clock()
        return session_duration(
            self.session.start_time,
            end,
            self.session.break_minutes,
        )

    def _require_state(self, action: str, allowed) -> None:
        if self._state not in allowed:
            raise InvalidTransitionError(action, self._state.value)

    def _transition(self, state: SessionEntryState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state, self.session)

    def _persist(self, action: str) -> OperationResult:
        try:
            self._write()
        except SQLAlchemyError as exc:
            self._logger.error(
                f"Failed to {action} session {self.session.id}: {exc}"
            )
            return OperationResult(ok=False, error=str(exc))
        return OperationResult(ok=True)

    def _save_issues(self) -> tuple[ValidationIssue, ...]:
        issues = list(self._required_field_issues())
        session = self.session
        if session.start_time is None or session.end_time is None:
            issues.append(
                ValidationIssue(
                    INVALID_TIME_RANGE,
                    "Session needs both a start and an end time.",
                )
            )
        elif session.end_time <= session.start_time:
            issues.append(
                ValidationIssue(
                    INVALID_TIME_RANGE,
                    "End time must be after start time.",
                )
            )
        return tuple(issues)

    def _finalise_hands(self, hands_per_hour: int, tables: int = 1) -> None:
        estimate = estimated_hands(self.session.duration, hands_per_hour, tables)
        self.session.hands_count = effective_hands(
            self.session.hands_count,
            estimate,
        )

    def _commit(self) -> None:
        """Persist an explicit save; online sessions also move the balance."""
        self._write()

    def _new_session(self):
        raise NotImplementedError

    def _start_issues(self) -> tuple[ValidationIssue, ...]:
        raise NotImplementedError

    def _required_field_issues(self) -> tuple[ValidationIssue, ...]:
        raise NotImplementedError

    def _finalise(self) -> tuple[ValidationIssue, ...]:
        raise NotImplementedError

    def _write(self) -> None:
        raise NotImplementedError

    def _delete(self) -> None:
        raise NotImplementedError


class LiveSessionEntryUseCase(_SessionEntryUseCase):
    """Record a live session played at a card room."""

    def _new_session(self) -> LiveSession:
        session = LiveSession()
        rate = self._settings.default_exchange_rate(session.currency)
        session.exchange_rate_buy_in = rate
        session.exchange_rate_cash_out = rate
        session.exchange_rate_to_base = rate
        return session

    def _start_issues(self) -> tuple[ValidationIssue, ...]:
        return self._required_field_issues()

    def _required_field_issues(self) -> tuple[ValidationIssue, ...]:
        missing = []
        if not self.session.location.strip():
            missing.append("location")
        if not self.session.blinds.strip():
            missing.append("blinds")
        if not missing:
            return ()
        return (
            ValidationIssue(
                MISSING_FIELD,
                f"Required fields missing: {', '.join(missing)}.",
            ),
        )

    def _finalise(self) -> tuple[ValidationIssue, ...]:
        session = self.session
        session.net_profit_loss = session_net_result(
            session.buy_in,
            session.cash_out,
        )
        session.net_profit_loss_base = session_net_result_base(session)
        self._finalise_hands(self._settings.hands_per_hour_live)
        return ()

    def _write(self) -> None:
        self._repository.save_live_session(self.session)

    def _delete(self) -> None:
        self._repository.delete_live_session(self.session.id)


class OnlineSessionEntryUseCase(_SessionEntryUseCase):
    """Record an online session; saving commits the closing balance."""

    def _new_session(self) -> OnlineSession:
        return OnlineSession()

    def select_platform(self, platform_id) -> OperationResult:
        """Attach a platform and pre-fill the opening balance and rate."""
        platform = self._repository.get_platform(platform_id)
        if platform is None:
            return OperationResult(
                ok=False,
                issues=(ValidationIssue(MISSING_FIELD, "Unknown platform."),),
            )
        changes = {"platform_id": platform.id}
        if self._state is SessionEntryState.PRE_START:
            changes["balance_before"] = platform.current_balance
        if platform.currency == self._settings.base_currency:
            changes["exchange_rate_to_base"] = Decimal("1")
        else:
            changes["exchange_rate_to_base"] = (
                self._settings.default_exchange_rate(platform.currency)
            )
        return self.update(**changes)

    def check_balance(self):
        """Compare the opening balance with the platform's recorded balance.

        The platform balance read here is kept on the session so later
        checks compare against it rather than against the balance this
        session commits. A stopped session resumed from storage keeps the
        balance it already recorded. The session becomes RESOLVED when the
        balances agree.

        Returns:
            Discrepancy | None: The mismatch found, if any.
        """
        session = self.session
        if session.platform_id is None:
            return None
        platform = self._repository.get_platform(session.platform_id)
        if platform is None:
            return None
        if (
            not self._resumed
            or self._state is not SessionEntryState.STOPPED
            or session.checked_platform_balance is None
        ):
            session.checked_platform_balance = platform.current_balance
        discrepancy = check_session_discrepancy(session, platform)
        if discrepancy is None:
            self.session.reconciliation = ReconciliationState.RESOLVED
        else:
            self._logger.warning(
                f"Balance discrepancy of {discrepancy.delta} "
                f"({discrepancy.direction.value}) on platform {platform.name}"
            )
        return discrepancy

    def _start_issues(self) -> tuple[ValidationIssue, ...]:
        if self.session.platform_id is None:
            return (ValidationIssue(MISSING_FIELD, "Select a platform."),)
        return ()

    def _required_field_issues(self) -> tuple[ValidationIssue, ...]:
        missing = []
        if self.session.platform_id is None:
            missing.append("platform")
        if not self.session.blinds.strip():
            missing.append("blinds")
        if not missing:
            return ()
        return (
            ValidationIssue(
                MISSING_FIELD,
                f"Required fields missing: {', '.join(missing)}.",
            ),
        )

    def _finalise(self) -> tuple[ValidationIssue, ...]:
        session = self.session
        warnings = ()
        if session.reconciliation is ReconciliationState.UNRESOLVED:
            if self.check_balance() is not None:
                warnings = (
                    ValidationIssue(
                        UNRESOLVED_DISCREPANCY,
                        "Platform balance does not match the opening "
                        "balance; resolve it before verifying.",
                        blocking=False,
                    ),
                )
        platform = self._repository.get_platform(session.platform_id)
        rate = None
        if platform is not None:
            rate = latest_conversion_rate(
                self._repository.list_deposits(platform.id),
                self._repository.list_withdrawals(platform.id),
            )
        if rate is None:
            rate = session.exchange_rate_to_base
        session.net_profit_loss = session_net_result(
            session.balance_before,
            session.balance_after,
        )
        session.net_profit_loss_base = session_net_result_base(
            session,
            base_currency=self._settings.base_currency,
            platform=platform,
            platform_rate=rate,
        )
        self._finalise_hands(
            self._settings.hands_per_hour_online,
            session.tables,
        )
        return warnings

    def _commit(self) -> None:
        self._repository.commit_online_session(self.session)

    def _write(self) -> None:
        self._repository.save_online_session(self.session)

    def _delete(self) -> None:
        self._repository.delete_online_session(self.session.id)


__all__ = [
    "LiveSessionEntryUseCase",
    "OnlineSessionEntryUseCase",
    "SessionListener",
]
