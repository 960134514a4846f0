"""Use case aggregating session statistics."""

from collections.abc import Callable
from datetime import datetime

from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.domain.models import StatsResult
from bankroll.domain.services.stats import (
    DateFilter,
    SessionFilter,
    compute_stats,
)
from bankroll.infrastructure.logging.logger import get_app_logger
from bankroll.infrastructure.settings import LedgerSettings


class GetStatsUseCase:
    """Compute results, hours and hands over the stored sessions."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        settings: LedgerSettings | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        logger=None,
    ) -> None:
        self._repository = repository
        self._settings = settings or LedgerSettings()
        self._clock = clock or datetime.now
        self._logger = logger or get_app_logger()

    def execute(
        self,
        date_filter: DateFilter | None = None,
        session_filter: SessionFilter | None = None,
    ) -> StatsResult:
        """Return aggregated stats for the selected sessions.

        Adjustments count toward the result when the settings say so.
        """
        result = compute_stats(
            self._repository.list_online_sessions(),
            self._repository.list_live_sessions(),
            self._repository.list_adjustments(),
            now=self._clock(),
            hands_per_hour_online=self._settings.hands_per_hour_online,
            hands_per_hour_live=self._settings.hands_per_hour_live,
            date_filter=date_filter or DateFilter(),
            session_filter=session_filter or SessionFilter(),
            show_adjustments=self._settings.show_adjustments_in_stats,
        )
        self._logger.debug(
            f"Computed stats over {result.session_count} sessions"
        )
        return result


__all__ = ["GetStatsUseCase"]
