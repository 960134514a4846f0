"""Tests for RecordAdjustmentUseCase."""

from decimal import Decimal

import pytest

from bankroll.application.use_cases.record_adjustment import (
    RecordAdjustmentUseCase,
)
from bankroll.domain.models import Platform
from bankroll.domain.models.results import INVALID_AMOUNT, MISSING_FIELD


@pytest.fixture
def use_case(repository, settings, clock, fake_logger):
    return RecordAdjustmentUseCase(
        repository,
        settings,
        clock=clock,
        logger=fake_logger,
    )


def test_adjustment_defaults_to_base_currency(use_case, repository):
    result = use_case.execute(" Rakeback ", "20", location="Casino")

    assert result.ok
    adjustment = repository.list_adjustments()[0]
    assert adjustment.name == "Rakeback"
    assert adjustment.currency == "CAD"
    assert adjustment.amount_base == Decimal("20")
    assert adjustment.is_online is False


def test_foreign_adjustment_converts_with_default_rate(use_case, repository):
    use_case.execute("Bonus", Decimal("-10"), currency="USD")

    adjustment = repository.list_adjustments()[0]
    assert adjustment.exchange_rate_to_base == Decimal("1.36")
    assert adjustment.amount_base == Decimal("-13.60")


def test_online_adjustment_leaves_platform_balance(use_case, repository):
    platform = Platform(
        name="Stars",
        currency="CAD",
        current_balance=Decimal("500"),
    )
    repository.save_platform(platform)

    use_case.execute("Freeroll win", "25", platform_id=platform.id)

    assert repository.list_adjustments()[0].is_online is True
    assert repository.get_platform(platform.id).current_balance == Decimal(
        "500"
    )


@pytest.mark.parametrize(
    ("name", "amount", "code"),
    [("", "10", MISSING_FIELD), ("  ", "10", MISSING_FIELD), ("Fix", "0", INVALID_AMOUNT)],
)
def test_invalid_adjustments_are_rejected(use_case, repository, name, amount, code):
    result = use_case.execute(name, amount)

    assert not result.ok
    assert result.issues[0].code == code
    assert repository.list_adjustments() == []
