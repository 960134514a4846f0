"""Use case merging an export document into the ledger.

Import is additive: records whose id already exists are skipped, and a
platform whose name already exists is reused instead of duplicated. Nothing
local is ever overwritten or deleted.
"""

from typing import Any
from uuid import UUID

from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.application.use_cases.ledger_document import (
    decode_document,
    decode_platforms,
)
from bankroll.domain.models import ImportSummary
from bankroll.infrastructure.logging.logger import get_app_logger


class ImportLedgerUseCase:
    """Import platforms, sessions, transfers and adjustments."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port used to look up and persist records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, document: Any) -> ImportSummary:
        """Merge ``document`` into the ledger.

        Args:
            document: Parsed export document.

        Returns:
            ImportSummary: Counts of added records and skipped duplicates.

        Raises:
            ImportFormatError: If the document cannot be decoded.
        """
        repo = self._repository
        skipped: dict[str, int] = {}

        def skip(section: str) -> None:
            skipped[section] = skipped.get(section, 0) + 1

        platform_ids: dict[str, UUID] = {
            platform.name: platform.id for platform in repo.list_platforms()
        }
        new_platforms = []
        for platform in decode_platforms(document):
            existing = repo.get_platform(platform.id)
            if existing is None:
                existing = repo.get_platform_by_name(platform.name)
            if existing is not None:
                platform_ids[platform.name] = existing.id
                skip("platforms")
                continue
            if platform.name in platform_ids:
                skip("platforms")
                continue
            new_platforms.append(platform)
            platform_ids[platform.name] = platform.id

        snapshot = decode_document(document, platform_ids)
        for platform in new_platforms:
            repo.save_platform(platform)

        added_live = 0
        for session in snapshot.live_sessions:
            if repo.get_live_session(session.id) is not None:
                skip("liveSessions")
                continue
            repo.save_live_session(session)
            added_live += 1

        added_online = 0
        for session in snapshot.online_sessions:
            if repo.get_online_session(session.id) is not None:
                skip("onlineSessions")
                continue
            repo.save_online_session(session)
            added_online += 1

        added_deposits = 0
        for deposit in snapshot.deposits:
            if repo.get_deposit(deposit.id) is not None:
                skip("deposits")
                continue
            repo.save_deposit(deposit)
            added_deposits += 1

        added_withdrawals = 0
        for withdrawal in snapshot.withdrawals:
            if repo.get_withdrawal(withdrawal.id) is not None:
                skip("withdrawals")
                continue
            repo.save_withdrawal(withdrawal)
            added_withdrawals += 1

        added_adjustments = 0
        for adjustment in snapshot.adjustments:
            if repo.get_adjustment(adjustment.id) is not None:
                skip("adjustments")
                continue
            repo.save_adjustment(adjustment)
            added_adjustments += 1

        summary = ImportSummary(
            platforms=len(new_platforms),
            live_sessions=added_live,
            online_sessions=added_online,
            deposits=added_deposits,
            withdrawals=added_withdrawals,
            adjustments=added_adjustments,
            skipped=skipped,
        )
        self._logger.info(f"Import finished: {summary.describe()}")
        if skipped:
            self._logger.info(f"Skipped duplicates: {skipped}")
        return summary


__all__ = ["ImportLedgerUseCase"]
