"""Domain models package."""

from .enums import (
    DiscrepancyDirection,
    ReconciliationState,
    Remediation,
    SessionEntryState,
    VerificationOutcome,
)
from .ledger import (
    Adjustment,
    Deposit,
    LiveSession,
    OnlineSession,
    Platform,
    Withdrawal,
)
from .results import (
    Discrepancy,
    ImportSummary,
    OperationResult,
    StatsResult,
    ValidationIssue,
    VerificationResult,
)

__all__ = [
    "Adjustment",
    "Deposit",
    "LiveSession",
    "OnlineSession",
    "Platform",
    "Withdrawal",
    "DiscrepancyDirection",
    "ReconciliationState",
    "Remediation",
    "SessionEntryState",
    "VerificationOutcome",
    "Discrepancy",
    "ImportSummary",
    "OperationResult",
    "StatsResult",
    "ValidationIssue",
    "VerificationResult",
]
