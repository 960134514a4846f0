"""Value objects returned by ledger calculations and use cases."""

from dataclasses import dataclass, field
from decimal import Decimal

from bankroll.domain.models.enums import (
    DiscrepancyDirection,
    Remediation,
    VerificationOutcome,
)

MISSING_FIELD = "MISSING_FIELD"
INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
INVALID_DURATION = "INVALID_DURATION"
INVALID_AMOUNT = "INVALID_AMOUNT"
PROFIT_TRANSACTION = "PROFIT_TRANSACTION"
UNRESOLVED_DISCREPANCY = "UNRESOLVED_DISCREPANCY"


@dataclass(frozen=True)
class ValidationIssue:
    """A user-facing validation message.

    Attributes:
        code: Machine-readable issue code.
        message: Text suitable for a blocking alert.
        blocking: False for warnings the user may confirm past.
    """

    code: str
    message: str
    blocking: bool = True


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a ledger action.

    Attributes:
        ok: True when the action was applied.
        issues: Validation issues that prevented or qualify the action.
        error: Persistence error text for a non-blocking notice.
    """

    ok: bool
    issues: tuple[ValidationIssue, ...] = ()
    error: str | None = None

    @property
    def warnings(self) -> tuple[ValidationIssue, ...]:
        return tuple(issue for issue in self.issues if not issue.blocking)


@dataclass(frozen=True)
class Discrepancy:
    """Mismatch between a platform's balance and what a session implies.

    Attributes:
        direction: HIGHER when the platform holds more than expected.
        delta: Absolute size of the mismatch.
        platform_balance: Balance recorded on the platform.
        expected_balance: Balance implied by the session.
    """

    direction: DiscrepancyDirection
    delta: Decimal
    platform_balance: Decimal
    expected_balance: Decimal

    @property
    def signed_difference(self) -> Decimal:
        """Return expected minus recorded balance."""
        return self.expected_balance - self.platform_balance

    @property
    def suggestions(self) -> tuple[Remediation, ...]:
        if self.direction is DiscrepancyDirection.HIGHER:
            return (Remediation.RECORD_DEPOSIT, Remediation.LOG_ADJUSTMENT)
        return (Remediation.RECORD_WITHDRAWAL, Remediation.LOG_ADJUSTMENT)


@dataclass(frozen=True)
class VerificationResult:
    outcome: VerificationOutcome
    error: str | None = None

    @property
    def verified(self) -> bool:
        return self.outcome is VerificationOutcome.VERIFIED and self.error is None


@dataclass(frozen=True)
class StatsResult:
    """Aggregated results over a filtered set of sessions."""

    net_result: Decimal = Decimal("0")
    net_result_no_adjustments: Decimal = Decimal("0")
    total_hours: Decimal = Decimal("0")
    total_hands: int = 0
    session_count: int = 0
    win_count: int = 0
    adjustments_total: Decimal = Decimal("0")

    @property
    def hourly_rate(self) -> Decimal:
        if self.total_hours > 0:
            return self.net_result / self.total_hours
        return Decimal("0")

    @property
    def average_result(self) -> Decimal:
        if self.session_count > 0:
            return self.net_result / self.session_count
        return Decimal("0")

    @property
    def win_rate(self) -> Decimal:
        if self.session_count > 0:
            return Decimal(self.win_count) / Decimal(self.session_count)
        return Decimal("0")


@dataclass(frozen=True)
class ImportSummary:
    """Counts of records added by an import."""

    platforms: int = 0
    live_sessions: int = 0
    online_sessions: int = 0
    deposits: int = 0
    withdrawals: int = 0
    adjustments: int = 0
    skipped: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return (
            self.platforms
            + self.live_sessions
            + self.online_sessions
            + self.deposits
            + self.withdrawals
            + self.adjustments
        )

    def describe(self) -> str:
        """Return a human readable summary of the added records."""
        sessions = self.live_sessions + self.online_sessions
        parts = []
        for count, noun in (
            (sessions, "session"),
            (self.platforms, "platform"),
            (self.deposits, "deposit"),
            (self.withdrawals, "withdrawal"),
            (self.adjustments, "adjustment"),
        ):
            if count > 0:
                parts.append(f"{count} {noun}{'' if count == 1 else 's'}")
        if not parts:
            return "No new records were added (all duplicates skipped)."
        return f"{', '.join(parts)} were added."


__all__ = [
    "MISSING_FIELD",
    "INVALID_TIME_RANGE",
    "INVALID_DURATION",
    "INVALID_AMOUNT",
    "PROFIT_TRANSACTION",
    "UNRESOLVED_DISCREPANCY",
    "ValidationIssue",
    "OperationResult",
    "Discrepancy",
    "VerificationResult",
    "StatsResult",
    "ImportSummary",
]
