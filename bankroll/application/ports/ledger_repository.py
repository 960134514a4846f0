"""Port for reading and writing ledger records."""

from decimal import Decimal
from typing import Protocol
from uuid import UUID

from bankroll.domain.models import (
    Adjustment,
    Deposit,
    LiveSession,
    OnlineSession,
    Platform,
    Withdrawal,
)


class LedgerRepositoryPort(Protocol):
    """Port exposing persistence for every ledger entity.

    ``save_*`` methods insert or replace by id. Platform balances only move
    through ``commit_online_session``, ``record_deposit`` and
    ``record_withdrawal``, each a single transaction covering the record
    and the balance.
    """

    def get_platform(self, platform_id: UUID) -> Platform | None:
        """Return a platform by id."""

    def get_platform_by_name(self, name: str) -> Platform | None:
        """Return a platform by its display name."""

    def list_platforms(self) -> list[Platform]:
        """Return every platform ordered by name."""

    def save_platform(self, platform: Platform) -> None:
        """Insert or replace a platform."""

    def delete_platform(self, platform_id: UUID) -> None:
        """Delete a platform."""

    def get_live_session(self, session_id: UUID) -> LiveSession | None:
        """Return a live session by id."""

    def list_live_sessions(self) -> list[LiveSession]:
        """Return live sessions, newest first."""

    def save_live_session(self, session: LiveSession) -> None:
        """Insert or replace a live session."""

    def delete_live_session(self, session_id: UUID) -> None:
        """Delete a live session."""

    def get_online_session(self, session_id: UUID) -> OnlineSession | None:
        """Return an online session by id."""

    def list_online_sessions(self) -> list[OnlineSession]:
        """Return online sessions, newest first."""

    def save_online_session(self, session: OnlineSession) -> None:
        """Insert or replace an online session."""

    def commit_online_session(self, session: OnlineSession) -> None:
        """Save a session and set its platform balance to balance_after."""

    def delete_online_session(self, session_id: UUID) -> None:
        """Delete an online session."""

    def get_deposit(self, deposit_id: UUID) -> Deposit | None:
        """Return a deposit by id."""

    def list_deposits(self, platform_id: UUID | None = None) -> list[Deposit]:
        """Return deposits, optionally for one platform."""

    def save_deposit(self, deposit: Deposit) -> None:
        """Insert or replace a deposit."""

    def record_deposit(self, deposit: Deposit) -> Decimal:
        """Insert a deposit and credit its platform; return the balance."""

    def delete_deposit(self, deposit_id: UUID) -> None:
        """Delete a deposit."""

    def get_withdrawal(self, withdrawal_id: UUID) -> Withdrawal | None:
        """Return a withdrawal by id."""

    def list_withdrawals(
        self,
        platform_id: UUID | None = None,
    ) -> list[Withdrawal]:
        """Return withdrawals, optionally for one platform."""

    def save_withdrawal(self, withdrawal: Withdrawal) -> None:
        """Insert or replace a withdrawal."""

    def record_withdrawal(self, withdrawal: Withdrawal) -> Decimal:
        """Insert a withdrawal and debit its platform; return the balance."""

    def delete_withdrawal(self, withdrawal_id: UUID) -> None:
        """Delete a withdrawal."""

    def get_adjustment(self, adjustment_id: UUID) -> Adjustment | None:
        """Return an adjustment by id."""

    def list_adjustments(self) -> list[Adjustment]:
        """Return adjustments, newest first."""

    def save_adjustment(self, adjustment: Adjustment) -> None:
        """Insert or replace an adjustment."""

    def delete_adjustment(self, adjustment_id: UUID) -> None:
        """Delete an adjustment."""


__all__ = ["LedgerRepositoryPort"]
