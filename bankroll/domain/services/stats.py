"""Aggregate results over filtered sessions and adjustments."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from bankroll.domain.models import (
    Adjustment,
    LiveSession,
    OnlineSession,
    StatsResult,
)
from bankroll.domain.services.calculations import (
    computed_duration,
    effective_hands,
    estimated_hands,
)
from bankroll.utils.decimal_utils import coerce_decimal

ALL_TIME = "ALL_TIME"
THIS_MONTH = "THIS_MONTH"
THIS_YEAR = "THIS_YEAR"
CUSTOM = "CUSTOM"

ALL = "ALL"
LIVE = "LIVE"
ONLINE = "ONLINE"
PLATFORM = "PLATFORM"
GAME_TYPE = "GAME_TYPE"
LOCATION = "LOCATION"


@dataclass(frozen=True)
class DateFilter:
    """Date window applied to session start times."""

    kind: str = ALL_TIME
    start: datetime | None = None
    end: datetime | None = None

    def includes(self, moment: datetime | None, now: datetime) -> bool:
        if self.kind == ALL_TIME:
            return True
        if moment is None:
            return False
        if self.kind == THIS_MONTH:
            return (moment.year, moment.month) == (now.year, now.month)
        if self.kind == THIS_YEAR:
            return moment.year == now.year
        if self.kind == CUSTOM:
            if self.start is not None and moment < self.start:
                return False
            if self.end is not None and moment > self.end:
                return False
            return True
        raise ValueError(f"Unknown date filter: {self.kind}")


@dataclass(frozen=True)
class SessionFilter:
    """Session subset; ``value`` carries the platform id, game or location."""

    kind: str = ALL
    value: UUID | str | None = None


def compute_stats(
    online: Iterable[OnlineSession],
    live: Iterable[LiveSession],
    adjustments: Iterable[Adjustment],
    *,
    now: datetime,
    hands_per_hour_online: int,
    hands_per_hour_live: int,
    date_filter: DateFilter = DateFilter(),
    session_filter: SessionFilter = SessionFilter(),
    show_adjustments: bool = True,
) -> StatsResult:
    """Aggregate base-currency results, hours and hands.

    Args:
        online: Online sessions.
        live: Live sessions.
        adjustments: Adjustments, included when ``show_adjustments``.
        now: Reference time for relative date filters and active sessions.
        hands_per_hour_online: Estimate rate per online table.
        hands_per_hour_live: Estimate rate for live play.
        date_filter: Window on session dates.
        session_filter: Subset of sessions to include.
        show_adjustments: Whether adjustments count toward the result.

    Returns:
        StatsResult: Aggregated totals.
    """
    online_rows = [
        s for s in online if date_filter.includes(s.start_time, now)
    ]
    live_rows = [s for s in live if date_filter.includes(s.start_time, now)]

    kind = session_filter.kind
    if kind == LIVE:
        online_rows = []
    elif kind == ONLINE:
        live_rows = []
    elif kind == PLATFORM:
        online_rows = [
            s for s in online_rows if s.platform_id == session_filter.value
        ]
        live_rows = []
    elif kind == GAME_TYPE:
        online_rows = [
            s for s in online_rows if s.game_type == session_filter.value
        ]
        live_rows = [s for s in live_rows if s.game_type == session_filter.value]
    elif kind == LOCATION:
        live_rows = [s for s in live_rows if s.location == session_filter.value]
        online_rows = []
    elif kind != ALL:
        raise ValueError(f"Unknown session filter: {kind}")

    net = Decimal("0")
    hours = Decimal("0")
    hands = 0
    wins = 0
    for session in online_rows:
        duration = computed_duration(session, now)
        net += coerce_decimal(session.net_profit_loss_base)
        hours += duration
        hands += effective_hands(
            session.hands_count,
            estimated_hands(duration, hands_per_hour_online, session.tables),
        )
        if session.net_profit_loss > 0:
            wins += 1
    for session in live_rows:
        duration = computed_duration(session, now)
        net += coerce_decimal(session.net_profit_loss_base)
        hours += duration
        hands += effective_hands(
            session.hands_count,
            estimated_hands(duration, hands_per_hour_live),
        )
        if session.net_profit_loss > 0:
            wins += 1

    adjustments_total = Decimal("0")
    if show_adjustments:
        selected = [
            a for a in adjustments if date_filter.includes(a.date, now)
        ]
        if kind == PLATFORM:
            selected = [
                a for a in selected if a.platform_id == session_filter.value
            ]
        adjustments_total = sum(
            (coerce_decimal(a.amount_base) for a in selected),
            Decimal("0"),
        )

    return StatsResult(
        net_result=net + adjustments_total,
        net_result_no_adjustments=net,
        total_hours=hours,
        total_hands=hands,
        session_count=len(online_rows) + len(live_rows),
        win_count=wins,
        adjustments_total=adjustments_total,
    )


__all__ = [
    "ALL_TIME",
    "THIS_MONTH",
    "THIS_YEAR",
    "CUSTOM",
    "ALL",
    "LIVE",
    "ONLINE",
    "PLATFORM",
    "GAME_TYPE",
    "LOCATION",
    "DateFilter",
    "SessionFilter",
    "compute_stats",
]
