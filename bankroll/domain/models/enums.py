"""Enumerations shared across the ledger domain."""

from enum import Enum


class SessionEntryState(str, Enum):
    """Lifecycle of a session being recorded."""

    PRE_START = "PRE_START"
    ACTIVE = "ACTIVE"
    STOPPED = "STOPPED"
    SAVED = "SAVED"
    DISCARDED = "DISCARDED"


class ReconciliationState(str, Enum):
    """Whether an online session's balance check has been settled."""

    UNRESOLVED = "UNRESOLVED"
    RESOLVED = "RESOLVED"


class DiscrepancyDirection(str, Enum):
    HIGHER = "HIGHER"
    LOWER = "LOWER"


class Remediation(str, Enum):
    """User-selectable ways of settling a balance discrepancy."""

    RECORD_DEPOSIT = "RECORD_DEPOSIT"
    RECORD_WITHDRAWAL = "RECORD_WITHDRAWAL"
    LOG_ADJUSTMENT = "LOG_ADJUSTMENT"
    DISMISS = "DISMISS"


class VerificationOutcome(str, Enum):
    VERIFIED = "VERIFIED"
    ALREADY_VERIFIED = "ALREADY_VERIFIED"
    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_DURATION = "INVALID_DURATION"
    UNRESOLVED_DISCREPANCY = "UNRESOLVED_DISCREPANCY"


__all__ = [
    "SessionEntryState",
    "ReconciliationState",
    "DiscrepancyDirection",
    "Remediation",
    "VerificationOutcome",
]
