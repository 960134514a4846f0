"""Verification guard for sessions.

Verification is one-way: a verified session stays verified, and the
monetary fields that fixed its result are locked by the entity itself.
"""

from decimal import Decimal

from bankroll.domain.models import (
    LiveSession,
    OnlineSession,
    ReconciliationState,
    VerificationOutcome,
)
from bankroll.domain.policies import (
    has_required_live_fields,
    has_required_online_fields,
)
from bankroll.utils.decimal_utils import coerce_decimal


def evaluate_verification(
    session: LiveSession | OnlineSession,
    duration,
) -> VerificationOutcome:
    """Return whether a session may be verified.

    Args:
        session: Session to evaluate.
        duration: Played hours computed from the session timestamps.

    Returns:
        VerificationOutcome: ``VERIFIED`` when every guard passes, otherwise
        the first failing guard. ``MISSING_FIELDS`` is a silent rejection;
        ``INVALID_DURATION`` is reported to the user.
    """
    if session.is_verified:
        return VerificationOutcome.ALREADY_VERIFIED
    if isinstance(session, LiveSession):
        has_fields = has_required_live_fields(session)
    else:
        has_fields = has_required_online_fields(session)
    if not has_fields:
        return VerificationOutcome.MISSING_FIELDS
    if coerce_decimal(duration) <= Decimal("0"):
        return VerificationOutcome.INVALID_DURATION
    if (
        isinstance(session, OnlineSession)
        and session.reconciliation is not ReconciliationState.RESOLVED
    ):
        return VerificationOutcome.UNRESOLVED_DISCREPANCY
    return VerificationOutcome.VERIFIED


def can_verify(session: LiveSession | OnlineSession, duration) -> bool:
    """Return True when every verification guard passes."""
    return evaluate_verification(session, duration) is VerificationOutcome.VERIFIED


def mark_verified(session: LiveSession | OnlineSession) -> None:
    """Set the verified flag; the entity locks its monetary fields."""
    session.is_verified = True


__all__ = ["evaluate_verification", "can_verify", "mark_verified"]
