"""Use case producing the ledger backup document."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.application.use_cases.ledger_document import (
    LedgerSnapshot,
    encode_snapshot,
)
from bankroll.infrastructure.logging.logger import get_app_logger
from bankroll.infrastructure.settings import LedgerSettings

EXPORT_FILE_PREFIX = "ProjectCapital_Export_"


def export_file_name(moment: datetime) -> str:
    """Return the default file name for an export made at ``moment``."""
    return f"{EXPORT_FILE_PREFIX}{moment:%Y-%m-%d}.json"


class ExportLedgerUseCase:
    """Collect every ledger record into an export document."""

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

    def execute(self) -> dict[str, Any]:
        """Return the export document for the whole ledger.

        Returns:
            dict[str, Any]: JSON-ready document.
        """
        snapshot = LedgerSnapshot(
            base_currency=self._settings.base_currency,
            export_date=self._clock(),
            platforms=self._repository.list_platforms(),
            live_sessions=self._repository.list_live_sessions(),
            online_sessions=self._repository.list_online_sessions(),
            deposits=self._repository.list_deposits(),
            withdrawals=self._repository.list_withdrawals(),
            adjustments=self._repository.list_adjustments(),
        )
        document = encode_snapshot(snapshot)
        self._logger.info(
            f"Exported {len(snapshot.platforms)} platforms, "
            f"{len(snapshot.live_sessions) + len(snapshot.online_sessions)} "
            f"sessions, {len(snapshot.deposits)} deposits, "
            f"{len(snapshot.withdrawals)} withdrawals and "
            f"{len(snapshot.adjustments)} adjustments"
        )
        return document


__all__ = ["ExportLedgerUseCase", "export_file_name", "EXPORT_FILE_PREFIX"]
