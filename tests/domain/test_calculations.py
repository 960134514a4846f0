"""Tests for the ledger calculation engine."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from bankroll.domain.models import Deposit, LiveSession, OnlineSession, Platform, Withdrawal
from bankroll.domain.services import calculations


def test_live_scenario_converts_each_leg_at_its_own_rate():
    """Buy-in and cash-out should convert independently."""
    session = LiveSession(
        currency="USD",
        buy_in=Decimal("100"),
        cash_out=Decimal("150"),
        exchange_rate_buy_in=Decimal("1.35"),
        exchange_rate_cash_out=Decimal("1.33"),
        tips=Decimal("10"),
    )

    net = calculations.session_net_result(session.buy_in, session.cash_out)
    net_base = calculations.session_net_result_base(session)

    assert net == Decimal("50")
    assert net_base == Decimal("64.5")


def test_tips_never_enter_the_net_result():
    """Tips are informational and excluded from the live result."""
    with_tips = LiveSession(
        buy_in=Decimal("200"),
        cash_out=Decimal("260"),
        tips=Decimal("25"),
    )
    without_tips = LiveSession(buy_in=Decimal("200"), cash_out=Decimal("260"))

    assert calculations.session_net_result_base(
        with_tips
    ) == calculations.session_net_result_base(without_tips)


def test_online_result_uses_platform_rate_only_when_currencies_differ():
    """Same-currency platforms report the native result unchanged."""
    cad = Platform(name="CAD Room", currency="CAD")
    usd = Platform(name="USD Room", currency="USD")
    session = OnlineSession(
        balance_before=Decimal("500"),
        balance_after=Decimal("650"),
    )

    same = calculations.session_net_result_base(
        session,
        base_currency="CAD",
        platform=cad,
        platform_rate=Decimal("1.40"),
    )
    converted = calculations.session_net_result_base(
        session,
        base_currency="CAD",
        platform=usd,
        platform_rate=Decimal("1.40"),
    )

    assert same == Decimal("150")
    assert converted == Decimal("210.00")


def test_online_result_falls_back_to_unit_rate():
    """An unusable platform rate should behave as 1."""
    assert calculations.online_net_result_base(
        Decimal("-40"),
        platform_currency="USD",
        base_currency="CAD",
        platform_rate=Decimal("0"),
    ) == Decimal("-40")


@pytest.mark.parametrize(
    ("sent", "received"),
    [
        (Decimal("0"), Decimal("100")),
        (Decimal("100"), Decimal("0")),
        (Decimal("-5"), Decimal("10")),
        (None, Decimal("10")),
    ],
)
def test_effective_rate_returns_zero_sentinel(sent, received):
    """Non-positive amounts mean the rate is not computable yet."""
    assert calculations.effective_rate(sent, received) == Decimal("0")


def test_effective_rate_rounds_to_four_decimals():
    assert calculations.effective_rate(Decimal("3"), Decimal("4")) == Decimal(
        "1.3333"
    )
    assert calculations.effective_rate(Decimal("200"), Decimal("195")) == (
        Decimal("0.9750")
    )


def test_processing_fee_is_positive_for_losses():
    assert calculations.processing_fee(Decimal("200"), Decimal("195")) == (
        Decimal("5")
    )


def test_session_duration_is_never_negative():
    """Long breaks or reversed timestamps should floor at zero."""
    start = datetime(2024, 1, 1, 20, 0)

    assert calculations.session_duration(
        start, start + timedelta(minutes=30), break_minutes=90
    ) == Decimal("0")
    assert calculations.session_duration(
        start, start - timedelta(hours=2)
    ) == Decimal("0")
    assert calculations.session_duration(
        start, start + timedelta(hours=3), break_minutes=30
    ) == Decimal("2.5")


def test_computed_duration_uses_now_for_active_sessions():
    start = datetime(2024, 1, 1, 20, 0)
    active = LiveSession(start_time=start)
    finished = LiveSession(duration=Decimal("1.5"))

    assert calculations.computed_duration(
        active, start + timedelta(hours=2)
    ) == Decimal("2")
    assert calculations.computed_duration(finished) == Decimal("1.5")


def test_estimated_hands_floors_and_counts_tables():
    assert calculations.estimated_hands(Decimal("1.5"), 85, 3) == 382
    assert calculations.estimated_hands(Decimal("2"), 25) == 50
    assert calculations.estimated_hands(Decimal("1"), 25, 0) == 25


def test_effective_hands_prefers_manual_count():
    assert calculations.effective_hands(120, 50) == 120
    assert calculations.effective_hands(0, 50) == 50


def test_resolve_exchange_rate_modes():
    assert calculations.resolve_exchange_rate(
        "direct", direct_rate=Decimal("1.36")
    ) == Decimal("1.36")
    assert calculations.resolve_exchange_rate(
        "direct", direct_rate=Decimal("0")
    ) == Decimal("1")
    assert calculations.resolve_exchange_rate(
        "amounts",
        amount_from=Decimal("100"),
        amount_to=Decimal("136"),
    ) == Decimal("1.3600")
    with pytest.raises(ValueError):
        calculations.resolve_exchange_rate("guess")


def test_is_profit_transaction_only_for_same_unit_transfers():
    assert calculations.is_profit_transaction(
        Decimal("100"),
        Decimal("110"),
        same_currency=True,
        is_foreign_exchange=False,
    )
    assert calculations.is_profit_transaction(
        Decimal("100"),
        Decimal("110"),
        same_currency=False,
        is_foreign_exchange=False,
    )
    assert not calculations.is_profit_transaction(
        Decimal("100"),
        Decimal("136"),
        same_currency=False,
        is_foreign_exchange=True,
    )


def test_latest_conversion_rate_inverts_deposit_rates():
    """Deposits store platform per base and must be inverted."""
    platform_id = Platform(name="Stars", currency="USD").id
    older = Withdrawal(
        platform_id=platform_id,
        amount_requested=Decimal("100"),
        amount_received=Decimal("137"),
        date=datetime(2024, 1, 1),
        is_foreign_exchange=True,
        effective_exchange_rate=Decimal("1.37"),
    )
    newer = Deposit(
        platform_id=platform_id,
        amount_sent=Decimal("125"),
        amount_received=Decimal("100"),
        date=datetime(2024, 2, 1),
        is_foreign_exchange=True,
        effective_exchange_rate=Decimal("0.8"),
    )

    assert calculations.latest_conversion_rate([newer], [older]) == Decimal(
        "1.2500"
    )
    assert calculations.latest_conversion_rate([], []) is None


def test_platform_net_result_values_balance_at_latest_rate():
    platform = Platform(
        name="Stars",
        currency="USD",
        current_balance=Decimal("100"),
    )
    deposit = Deposit(
        platform_id=platform.id,
        amount_sent=Decimal("135"),
        amount_received=Decimal("100"),
        date=datetime(2024, 1, 1),
        is_foreign_exchange=True,
        effective_exchange_rate=Decimal("0.8"),
    )
    withdrawal = Withdrawal(
        platform_id=platform.id,
        amount_requested=Decimal("50"),
        amount_received=Decimal("65"),
        date=datetime(2024, 3, 1),
        is_foreign_exchange=True,
        effective_exchange_rate=Decimal("1.3"),
    )

    result = calculations.platform_net_result(platform, [deposit], [withdrawal])

    # 65 withdrawn + 100 * 1.3 current value - 135 deposited
    assert result == Decimal("60.0")
    assert calculations.total_deposited([deposit]) == Decimal("135")
    assert calculations.total_withdrawn([withdrawal]) == Decimal("65")


def test_average_deposit_rate_defaults_to_one():
    assert calculations.average_deposit_rate([]) == Decimal("1")
