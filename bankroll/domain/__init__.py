"""Domain package for ledger rules and core models."""

from .constants import DISCREPANCY_TOLERANCE, SUPPORTED_CURRENCIES
from .errors import (
    ImportFormatError,
    InvalidTransitionError,
    LedgerError,
    LockedFieldError,
)
from .models import (
    Adjustment,
    Deposit,
    Discrepancy,
    DiscrepancyDirection,
    LiveSession,
    OnlineSession,
    Platform,
    ReconciliationState,
    VerificationOutcome,
    Withdrawal,
)
from .services import (
    check_discrepancy,
    effective_rate,
    estimated_hands,
    evaluate_verification,
    processing_fee,
    session_duration,
    session_net_result,
    session_net_result_base,
)

__all__ = [
    "DISCREPANCY_TOLERANCE",
    "SUPPORTED_CURRENCIES",
    "ImportFormatError",
    "InvalidTransitionError",
    "LedgerError",
    "LockedFieldError",
    "Adjustment",
    "Deposit",
    "Discrepancy",
    "DiscrepancyDirection",
    "LiveSession",
    "OnlineSession",
    "Platform",
    "ReconciliationState",
    "VerificationOutcome",
    "Withdrawal",
    "check_discrepancy",
    "effective_rate",
    "estimated_hands",
    "evaluate_verification",
    "processing_fee",
    "session_duration",
    "session_net_result",
    "session_net_result_base",
]
