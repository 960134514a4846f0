"""Balance reconciliation between platforms and online sessions."""

from datetime import datetime
from decimal import Decimal

from bankroll.domain.constants import (
    DISCREPANCY_ADJUSTMENT_NAME,
    DISCREPANCY_TOLERANCE,
)
from bankroll.domain.models import (
    Adjustment,
    Discrepancy,
    DiscrepancyDirection,
    OnlineSession,
    Platform,
)
from bankroll.domain.services.calculations import convert_to_base
from bankroll.utils.decimal_utils import coerce_decimal


def check_discrepancy(
    platform_balance,
    expected_balance,
) -> Discrepancy | None:
    """Classify the gap between a recorded and an expected balance.

    Args:
        platform_balance: Balance currently recorded on the platform.
        expected_balance: Balance the session implies.

    Returns:
        Discrepancy | None: None when the gap is within one cent,
        otherwise the direction and absolute size of the gap.
    """
    recorded = coerce_decimal(platform_balance)
    expected = coerce_decimal(expected_balance)
    difference = recorded - expected
    if abs(difference) <= DISCREPANCY_TOLERANCE:
        return None
    direction = (
        DiscrepancyDirection.HIGHER
        if difference > 0
        else DiscrepancyDirection.LOWER
    )
    return Discrepancy(
        direction=direction,
        delta=abs(difference),
        platform_balance=recorded,
        expected_balance=expected,
    )


def requires_balance_check(session: OnlineSession) -> bool:
    """Return True for completed, unverified sessions."""
    return (
        session.start_time is not None
        and session.end_time is not None
        and not session.is_verified
    )


def check_session_discrepancy(
    session: OnlineSession,
    platform: Platform,
) -> Discrepancy | None:
    """Compare a session's opening balance with its platform's balance.

    The balance recorded by an earlier check wins over the platform's
    current balance, which already includes the session once it is saved.
    """
    recorded = session.checked_platform_balance
    if recorded is None:
        recorded = platform.current_balance
    return check_discrepancy(recorded, session.balance_before)


def build_discrepancy_adjustment(
    discrepancy: Discrepancy,
    platform: Platform,
    rate,
    when: datetime,
) -> Adjustment:
    """Return an adjustment recording a discrepancy as a ledger entry.

    Args:
        discrepancy: The discrepancy being settled.
        platform: Platform the discrepancy was found on.
        rate: Base units per platform unit.
        when: Timestamp of the adjustment.

    Returns:
        Adjustment: Entry for ``expected - recorded`` in the platform
        currency.
    """
    amount: Decimal = discrepancy.signed_difference
    rate_value = coerce_decimal(rate, Decimal("1"))
    return Adjustment(
        name=DISCREPANCY_ADJUSTMENT_NAME,
        amount=amount,
        currency=platform.currency,
        exchange_rate_to_base=rate_value,
        amount_base=convert_to_base(amount, rate_value),
        date=when,
        platform_id=platform.id,
        is_online=True,
    )


__all__ = [
    "check_discrepancy",
    "requires_balance_check",
    "check_session_discrepancy",
    "build_discrepancy_adjustment",
]
