"""Tests for GetStatsUseCase."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from bankroll.application.use_cases.get_stats import GetStatsUseCase
from bankroll.domain.models import Adjustment, LiveSession
from bankroll.domain.services.stats import LIVE, SessionFilter
from bankroll.infrastructure.settings import LedgerSettings


def _repository() -> MagicMock:
    repository = MagicMock()
    repository.list_online_sessions.return_value = []
    repository.list_live_sessions.return_value = [
        LiveSession(
            location="Casino",
            start_time=datetime(2024, 3, 1, 19, 0),
            end_time=datetime(2024, 3, 1, 21, 0),
            net_profit_loss=Decimal("40"),
            net_profit_loss_base=Decimal("54"),
        )
    ]
    repository.list_adjustments.return_value = [
        Adjustment(
            name="Bonus",
            amount=Decimal("10"),
            currency="CAD",
            amount_base=Decimal("10"),
            date=datetime(2024, 3, 2),
        )
    ]
    return repository


def test_stats_include_adjustments_by_default(clock, fake_logger):
    use_case = GetStatsUseCase(
        _repository(),
        LedgerSettings(),
        clock=clock,
        logger=fake_logger,
    )

    result = use_case.execute(session_filter=SessionFilter(LIVE))

    assert result.net_result == Decimal("64")
    assert result.total_hands == 50
    assert result.hourly_rate == Decimal("32")


def test_stats_can_hide_adjustments(clock, fake_logger):
    use_case = GetStatsUseCase(
        _repository(),
        LedgerSettings(show_adjustments_in_stats=False),
        clock=clock,
        logger=fake_logger,
    )

    result = use_case.execute()

    assert result.net_result == Decimal("54")
    assert result.adjustments_total == Decimal("0")
