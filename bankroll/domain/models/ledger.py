"""Ledger entities: platforms, sessions, transfers and adjustments.

Entities are mutable dataclasses because sessions are edited continuously
while they are recorded. Sessions carry a verification lock: once
``is_verified`` is set, the monetary fields that fixed the net result reject
any change and the flag itself can never be cleared.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID, uuid4

from bankroll.domain.constants import (
    DEFAULT_GAME_TYPE,
    DEFAULT_SESSION_CURRENCY,
)
from bankroll.domain.errors import LockedFieldError
from bankroll.domain.models.enums import ReconciliationState

_ZERO = Decimal("0")
_ONE = Decimal("1")


class _VerificationLock:
    """Mixin rejecting writes to locked fields once verified."""

    _locked_fields: ClassVar[tuple[str, ...]] = ()

    def __setattr__(self, name: str, value) -> None:
        if self.__dict__.get("is_verified", False):
            entity = type(self).__name__
            if name == "is_verified" and not value:
                raise LockedFieldError(entity, name)
            if name in self._locked_fields and self.__dict__.get(name) != value:
                raise LockedFieldError(entity, name)
        super().__setattr__(name, value)

    @property
    def locked_fields(self) -> tuple[str, ...]:
        """Return the fields currently frozen by verification."""
        return self._locked_fields if self.__dict__.get("is_verified") else ()


@dataclass
class Platform:
    """An external poker site account with its own running balance.

    Attributes:
        name: Display name, unique across the ledger.
        currency: Currency code of the account.
        current_balance: Authoritative balance in ``currency``.
        created_at: Creation timestamp.
        id: Stable identity.
    """

    name: str
    currency: str
    current_balance: Decimal = _ZERO
    created_at: datetime | None = None
    id: UUID = field(default_factory=uuid4)


@dataclass
class LiveSession(_VerificationLock):
    """A cash game played in a physical card room."""

    _locked_fields: ClassVar[tuple[str, ...]] = ("buy_in", "cash_out", "currency")

    location: str = ""
    currency: str = DEFAULT_SESSION_CURRENCY
    exchange_rate_buy_in: Decimal = _ONE
    exchange_rate_cash_out: Decimal = _ONE
    exchange_rate_to_base: Decimal = _ONE
    game_type: str = DEFAULT_GAME_TYPE
    blinds: str = ""
    small_blind: Decimal = _ZERO
    big_blind: Decimal = _ZERO
    straddle: Decimal = _ZERO
    ante: Decimal = _ZERO
    table_size: int = 9
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration: Decimal = _ZERO
    break_minutes: Decimal = _ZERO
    buy_in: Decimal = _ZERO
    cash_out: Decimal = _ZERO
    tips: Decimal = _ZERO
    net_profit_loss: Decimal = _ZERO
    net_profit_loss_base: Decimal = _ZERO
    hands_count: int = 0
    notes: str | None = None
    id: UUID = field(default_factory=uuid4)
    is_verified: bool = False

    @property
    def is_active(self) -> bool:
        return self.start_time is not None and self.end_time is None


@dataclass
class OnlineSession(_VerificationLock):
    """A cash game played on a :class:`Platform`.

    The net result comes from the balance before and after the session
    rather than from buy-in and cash-out amounts. ``checked_platform_balance``
    is the platform balance read by the opening-balance check, before the
    session committed its closing balance.
    """

    _locked_fields: ClassVar[tuple[str, ...]] = (
        "balance_before",
        "balance_after",
        "platform_id",
    )

    platform_id: UUID | None = None
    game_type: str = DEFAULT_GAME_TYPE
    blinds: str = ""
    small_blind: Decimal = _ZERO
    big_blind: Decimal = _ZERO
    straddle: Decimal = _ZERO
    ante: Decimal = _ZERO
    table_size: int = 6
    tables: int = 1
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration: Decimal = _ZERO
    break_minutes: Decimal = _ZERO
    balance_before: Decimal = _ZERO
    balance_after: Decimal = _ZERO
    net_profit_loss: Decimal = _ZERO
    net_profit_loss_base: Decimal = _ZERO
    exchange_rate_to_base: Decimal = _ONE
    hands_count: int = 0
    notes: str | None = None
    checked_platform_balance: Decimal | None = None
    reconciliation: ReconciliationState = ReconciliationState.UNRESOLVED
    id: UUID = field(default_factory=uuid4)
    is_verified: bool = False

    @property
    def is_active(self) -> bool:
        return self.start_time is not None and self.end_time is None


@dataclass
class Deposit:
    """Money moved from the player's bank into a platform.

    ``amount_sent`` is in the base currency for foreign-exchange transfers;
    ``amount_received`` is always in the platform currency.
    """

    platform_id: UUID | None
    amount_sent: Decimal
    amount_received: Decimal
    date: datetime | None = None
    is_foreign_exchange: bool = False
    effective_exchange_rate: Decimal = _ZERO
    processing_fee: Decimal = _ZERO
    method: str | None = None
    id: UUID = field(default_factory=uuid4)


@dataclass
class Withdrawal:
    """Money moved from a platform back to the player's bank.

    ``amount_requested`` is in the platform currency; ``amount_received`` is
    what arrived, in the base currency for foreign-exchange transfers.
    """

    platform_id: UUID | None
    amount_requested: Decimal
    amount_received: Decimal
    date: datetime | None = None
    is_foreign_exchange: bool = False
    effective_exchange_rate: Decimal = _ZERO
    processing_fee: Decimal = _ZERO
    method: str | None = None
    id: UUID = field(default_factory=uuid4)


@dataclass
class Adjustment:
    """Informational ledger entry with no effect on platform balances."""

    name: str
    amount: Decimal
    currency: str
    exchange_rate_to_base: Decimal = _ONE
    amount_base: Decimal = _ZERO
    date: datetime | None = None
    platform_id: UUID | None = None
    is_online: bool = False
    location: str | None = None
    notes: str | None = None
    id: UUID = field(default_factory=uuid4)


__all__ = [
    "Platform",
    "LiveSession",
    "OnlineSession",
    "Deposit",
    "Withdrawal",
    "Adjustment",
]
