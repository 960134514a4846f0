"""Tests for stats aggregation."""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from bankroll.domain.models import Adjustment, LiveSession, OnlineSession
from bankroll.domain.services.stats import (
    CUSTOM,
    LIVE,
    PLATFORM,
    THIS_MONTH,
    DateFilter,
    SessionFilter,
    compute_stats,
)

NOW = datetime(2024, 3, 15, 12, 0)


def _fixtures():
    platform_id = uuid4()
    online = [
        OnlineSession(
            platform_id=platform_id,
            tables=2,
            start_time=datetime(2024, 3, 1, 18, 0),
            end_time=datetime(2024, 3, 1, 20, 0),
            net_profit_loss=Decimal("150"),
            net_profit_loss_base=Decimal("204"),
        ),
    ]
    live = [
        LiveSession(
            location="Casino",
            start_time=datetime(2024, 2, 10, 18, 0),
            end_time=datetime(2024, 2, 10, 22, 0),
            hands_count=90,
            net_profit_loss=Decimal("-100"),
            net_profit_loss_base=Decimal("-135"),
        ),
    ]
    adjustments = [
        Adjustment(
            name="Rakeback",
            amount=Decimal("20"),
            currency="CAD",
            amount_base=Decimal("20"),
            date=datetime(2024, 3, 5),
            platform_id=platform_id,
        ),
    ]
    return platform_id, online, live, adjustments


def test_compute_stats_aggregates_all_sessions():
    _, online, live, adjustments = _fixtures()

    result = compute_stats(
        online,
        live,
        adjustments,
        now=NOW,
        hands_per_hour_online=85,
        hands_per_hour_live=25,
    )

    assert result.session_count == 2
    assert result.win_count == 1
    assert result.net_result_no_adjustments == Decimal("69")
    assert result.net_result == Decimal("89")
    assert result.total_hours == Decimal("6")
    # 2h * 85 * 2 tables estimated online + 90 manual live hands
    assert result.total_hands == 340 + 90
    assert result.win_rate == Decimal("0.5")


def test_compute_stats_respects_filters_and_adjustment_toggle():
    platform_id, online, live, adjustments = _fixtures()

    month = compute_stats(
        online,
        live,
        adjustments,
        now=NOW,
        hands_per_hour_online=85,
        hands_per_hour_live=25,
        date_filter=DateFilter(THIS_MONTH),
        show_adjustments=False,
    )
    live_only = compute_stats(
        online,
        live,
        adjustments,
        now=NOW,
        hands_per_hour_online=85,
        hands_per_hour_live=25,
        session_filter=SessionFilter(LIVE),
    )
    by_platform = compute_stats(
        online,
        live,
        adjustments,
        now=NOW,
        hands_per_hour_online=85,
        hands_per_hour_live=25,
        session_filter=SessionFilter(PLATFORM, platform_id),
    )

    assert month.session_count == 1
    assert month.net_result == Decimal("204")
    assert live_only.session_count == 1
    assert live_only.net_result_no_adjustments == Decimal("-135")
    assert by_platform.net_result == Decimal("224")


def test_custom_date_filter_bounds_are_inclusive():
    window = DateFilter(
        CUSTOM,
        start=datetime(2024, 2, 1),
        end=datetime(2024, 2, 29),
    )

    assert window.includes(datetime(2024, 2, 1), NOW)
    assert not window.includes(datetime(2024, 3, 1), NOW)
    assert not window.includes(None, NOW)
