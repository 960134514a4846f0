"""Tests for GetPlatformSummaryUseCase."""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from bankroll.application.use_cases.get_platform_summary import (
    GetPlatformSummaryUseCase,
)
from bankroll.domain.models import Deposit, Platform, Withdrawal


def test_summary_values_current_balance_at_latest_rate(repository):
    platform = Platform(
        name="PokerStars",
        currency="USD",
        current_balance=Decimal("100"),
    )
    repository.save_platform(platform)
    repository.save_deposit(
        Deposit(
            platform_id=platform.id,
            amount_sent=Decimal("135"),
            amount_received=Decimal("100"),
            date=datetime(2024, 1, 10),
            is_foreign_exchange=True,
            effective_exchange_rate=Decimal("0.7407"),
        )
    )
    repository.save_withdrawal(
        Withdrawal(
            platform_id=platform.id,
            amount_requested=Decimal("50"),
            amount_received=Decimal("65"),
            date=datetime(2024, 3, 1),
            is_foreign_exchange=True,
            effective_exchange_rate=Decimal("1.3"),
        )
    )

    summary = GetPlatformSummaryUseCase(repository).execute(platform.id)

    assert summary.total_deposited == Decimal("135")
    assert summary.total_withdrawn == Decimal("65")
    assert summary.latest_rate == Decimal("1.3")
    assert summary.net_result == Decimal("60.0")


def test_summary_of_unknown_platform_is_none(repository):
    assert GetPlatformSummaryUseCase(repository).execute(uuid4()) is None
