"""SQLAlchemy-backed repository for ledger records.

Every entity lives in its own table whose columns mirror the dataclass
fields. Money is stored as TEXT so Decimal values round-trip exactly;
identities and timestamps are stored as their string forms.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.engine import Engine

from bankroll.application.ports.database import DatabaseEnginePort
from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.domain.models import (
    Adjustment,
    Deposit,
    LiveSession,
    OnlineSession,
    Platform,
    ReconciliationState,
    Withdrawal,
)
from bankroll.infrastructure.logging.logger import get_app_logger
from bankroll.utils.decimal_utils import coerce_decimal

_DECIMAL = "decimal"
_UUID = "uuid"
_DATETIME = "datetime"
_BOOL = "bool"
_INT = "int"
_TEXT = "text"
_RECONCILIATION = "reconciliation"

_SQL_TYPES = {
    _DECIMAL: "TEXT",
    _UUID: "TEXT",
    _DATETIME: "TEXT",
    _BOOL: "INTEGER",
    _INT: "INTEGER",
    _TEXT: "TEXT",
    _RECONCILIATION: "TEXT",
}

_SESSION_GAME_COLUMNS = {
    "game_type": _TEXT,
    "blinds": _TEXT,
    "small_blind": _DECIMAL,
    "big_blind": _DECIMAL,
    "straddle": _DECIMAL,
    "ante": _DECIMAL,
    "table_size": _INT,
}


@dataclass(frozen=True)
class _TableSpec:
    """Mapping between an entity dataclass and its table."""

    name: str
    entity: type
    columns: dict[str, str]
    order_by: str

    def create_sql(self) -> str:
        definitions = ",\n    ".join(
            f"{column} {_SQL_TYPES[kind]}"
            + (" PRIMARY KEY" if column == "id" else "")
            for column, kind in self.columns.items()
        )
        return f"CREATE TABLE IF NOT EXISTS {self.name} (\n    {definitions}\n)"


PLATFORMS = _TableSpec(
    name="platforms",
    entity=Platform,
    columns={
        "id": _UUID,
        "name": _TEXT,
        "currency": _TEXT,
        "current_balance": _DECIMAL,
        "created_at": _DATETIME,
    },
    order_by="name",
)

LIVE_SESSIONS = _TableSpec(
    name="live_sessions",
    entity=LiveSession,
    columns={
        "id": _UUID,
        "location": _TEXT,
        "currency": _TEXT,
        "exchange_rate_buy_in": _DECIMAL,
        "exchange_rate_cash_out": _DECIMAL,
        "exchange_rate_to_base": _DECIMAL,
        **_SESSION_GAME_COLUMNS,
        "start_time": _DATETIME,
        "end_time": _DATETIME,
        "duration": _DECIMAL,
        "break_minutes": _DECIMAL,
        "buy_in": _DECIMAL,
        "cash_out": _DECIMAL,
        "tips": _DECIMAL,
        "net_profit_loss": _DECIMAL,
        "net_profit_loss_base": _DECIMAL,
        "hands_count": _INT,
        "notes": _TEXT,
        "is_verified": _BOOL,
    },
    order_by="start_time DESC",
)

ONLINE_SESSIONS = _TableSpec(
    name="online_sessions",
    entity=OnlineSession,
    columns={
        "id": _UUID,
        "platform_id": _UUID,
        **_SESSION_GAME_COLUMNS,
        "tables": _INT,
        "start_time": _DATETIME,
        "end_time": _DATETIME,
        "duration": _DECIMAL,
        "break_minutes": _DECIMAL,
        "balance_before": _DECIMAL,
        "balance_after": _DECIMAL,
        "net_profit_loss": _DECIMAL,
        "net_profit_loss_base": _DECIMAL,
        "exchange_rate_to_base": _DECIMAL,
        "hands_count": _INT,
        "notes": _TEXT,
        "checked_platform_balance": _DECIMAL,
        "reconciliation": _RECONCILIATION,
        "is_verified": _BOOL,
    },
    order_by="start_time DESC",
)

_TRANSFER_COLUMNS = {
    "date": _DATETIME,
    "is_foreign_exchange": _BOOL,
    "effective_exchange_rate": _DECIMAL,
    "processing_fee": _DECIMAL,
    "method": _TEXT,
}

DEPOSITS = _TableSpec(
    name="deposits",
    entity=Deposit,
    columns={
        "id": _UUID,
        "platform_id": _UUID,
        "amount_sent": _DECIMAL,
        "amount_received": _DECIMAL,
        **_TRANSFER_COLUMNS,
    },
    order_by="date DESC",
)

WITHDRAWALS = _TableSpec(
    name="withdrawals",
    entity=Withdrawal,
    columns={
        "id": _UUID,
        "platform_id": _UUID,
        "amount_requested": _DECIMAL,
        "amount_received": _DECIMAL,
        **_TRANSFER_COLUMNS,
    },
    order_by="date DESC",
)

ADJUSTMENTS = _TableSpec(
    name="adjustments",
    entity=Adjustment,
    columns={
        "id": _UUID,
        "name": _TEXT,
        "amount": _DECIMAL,
        "currency": _TEXT,
        "exchange_rate_to_base": _DECIMAL,
        "amount_base": _DECIMAL,
        "date": _DATETIME,
        "platform_id": _UUID,
        "is_online": _BOOL,
        "location": _TEXT,
        "notes": _TEXT,
    },
    order_by="date DESC",
)

LEDGER_TABLES = (
    PLATFORMS,
    LIVE_SESSIONS,
    ONLINE_SESSIONS,
    DEPOSITS,
    WITHDRAWALS,
    ADJUSTMENTS,
)


def _to_db(kind: str, value: Any) -> Any:
    if value is None:
        return None
    if kind in (_DECIMAL, _UUID):
        return str(value)
    if kind == _DATETIME:
        return value.isoformat()
    if kind == _BOOL:
        return 1 if value else 0
    if kind == _INT:
        return int(value)
    if kind == _RECONCILIATION:
        return ReconciliationState(value).value
    return value


def _from_db(kind: str, value: Any) -> Any:
    if value is None:
        return None
    if kind == _DECIMAL:
        return coerce_decimal(value)
    if kind == _UUID:
        return value if isinstance(value, UUID) else UUID(str(value))
    if kind == _DATETIME:
        if isinstance(value, datetime):
            return value
        return datetime.fromisoformat(str(value))
    if kind == _BOOL:
        return bool(value)
    if kind == _INT:
        return int(value)
    if kind == _RECONCILIATION:
        return ReconciliationState(value)
    return value


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository backed by SQLAlchemy for every ledger entity."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._schema_ready = False

    def ensure_schema(self) -> None:
        """Create the ledger tables if they do not exist."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            for table in LEDGER_TABLES:
                conn.exec_driver_sql(table.create_sql())
        self._schema_ready = True
        self._logger.debug("Ledger schema is ready")

    def _engine(self) -> Engine:
        if not self._schema_ready:
            self.ensure_schema()
        return self._db_port.get_ledger_engine()

    # Generic table operations

    def _row_to_entity(self, table: _TableSpec, row) -> Any:
        mapping = row._mapping
        values = {
            column: _from_db(kind, mapping[column])
            for column, kind in table.columns.items()
        }
        return table.entity(**values)

    def _entity_params(self, table: _TableSpec, entity) -> dict[str, Any]:
        return {
            column: _to_db(kind, getattr(entity, column))
            for column, kind in table.columns.items()
        }

    def _get(self, table: _TableSpec, entity_id: UUID):
        query = text(f"SELECT * FROM {table.name} WHERE id = :id")
        with self._engine().connect() as conn:
            row = conn.execute(query, {"id": str(entity_id)}).first()
        return None if row is None else self._row_to_entity(table, row)

    def _list(
        self,
        table: _TableSpec,
        platform_id: UUID | None = None,
    ) -> list:
        where = ""
        params: dict[str, Any] = {}
        if platform_id is not None:
            where = " WHERE platform_id = :platform_id"
            params["platform_id"] = str(platform_id)
        query = text(
            f"SELECT * FROM {table.name}{where} ORDER BY {table.order_by}"
        )
        with self._engine().connect() as conn:
            rows = conn.execute(query, params).all()
        return [self._row_to_entity(table, row) for row in rows]

    def _upsert(self, conn, table: _TableSpec, entity) -> None:
        columns = list(table.columns)
        updates = ", ".join(
            f"{column} = excluded.{column}"
            for column in columns
            if column != "id"
        )
        query = text(
            f"INSERT INTO {table.name} ({', '.join(columns)}) "
            f"VALUES ({', '.join(':' + column for column in columns)}) "
            f"ON CONFLICT (id) DO UPDATE SET {updates}"
        )
        conn.execute(query, self._entity_params(table, entity))

    def _save(self, table: _TableSpec, entity) -> None:
        with self._engine().begin() as conn:
            self._upsert(conn, table, entity)

    def _delete(self, table: _TableSpec, entity_id: UUID) -> None:
        query = text(f"DELETE FROM {table.name} WHERE id = :id")
        with self._engine().begin() as conn:
            conn.execute(query, {"id": str(entity_id)})

    def _write_balance(self, conn, platform_id: UUID, balance: Decimal) -> None:
        query = text(
            "UPDATE platforms SET current_balance = :balance WHERE id = :id"
        )
        result = conn.execute(
            query,
            {"balance": str(balance), "id": str(platform_id)},
        )
        if result.rowcount == 0:
            raise LookupError(f"Unknown platform: {platform_id}")

    def _move_balance(self, conn, platform_id: UUID, delta: Decimal) -> Decimal:
        query = text("SELECT current_balance FROM platforms WHERE id = :id")
        row = conn.execute(query, {"id": str(platform_id)}).first()
        if row is None:
            raise LookupError(f"Unknown platform: {platform_id}")
        balance = coerce_decimal(row.current_balance) + delta
        self._write_balance(conn, platform_id, balance)
        return balance

    # Platforms

    def get_platform(self, platform_id: UUID) -> Platform | None:
        return self._get(PLATFORMS, platform_id)

    def get_platform_by_name(self, name: str) -> Platform | None:
        query = text("SELECT * FROM platforms WHERE name = :name")
        with self._engine().connect() as conn:
            row = conn.execute(query, {"name": name}).first()
        return None if row is None else self._row_to_entity(PLATFORMS, row)

    def list_platforms(self) -> list[Platform]:
        return self._list(PLATFORMS)

    def save_platform(self, platform: Platform) -> None:
        self._save(PLATFORMS, platform)

    def delete_platform(self, platform_id: UUID) -> None:
        self._delete(PLATFORMS, platform_id)

    # Live sessions

    def get_live_session(self, session_id: UUID) -> LiveSession | None:
        return self._get(LIVE_SESSIONS, session_id)

    def list_live_sessions(self) -> list[LiveSession]:
        return self._list(LIVE_SESSIONS)

    def save_live_session(self, session: LiveSession) -> None:
        self._save(LIVE_SESSIONS, session)

    def delete_live_session(self, session_id: UUID) -> None:
        self._delete(LIVE_SESSIONS, session_id)

    # Online sessions

    def get_online_session(self, session_id: UUID) -> OnlineSession | None:
        return self._get(ONLINE_SESSIONS, session_id)

    def list_online_sessions(self) -> list[OnlineSession]:
        return self._list(ONLINE_SESSIONS)

    def save_online_session(self, session: OnlineSession) -> None:
        self._save(ONLINE_SESSIONS, session)

    def commit_online_session(self, session: OnlineSession) -> None:
        """Save a session and set its platform balance in one transaction.

        The platform balance becomes ``session.balance_after``.

        Raises:
            LookupError: If the platform does not exist.
        """
        with self._engine().begin() as conn:
            self._upsert(conn, ONLINE_SESSIONS, session)
            self._write_balance(conn, session.platform_id, session.balance_after)
        self._logger.info(
            f"Platform {session.platform_id} balance set to "
            f"{session.balance_after} by session {session.id}"
        )

    def delete_online_session(self, session_id: UUID) -> None:
        self._delete(ONLINE_SESSIONS, session_id)

    # Transfers

    def get_deposit(self, deposit_id: UUID) -> Deposit | None:
        return self._get(DEPOSITS, deposit_id)

    def list_deposits(self, platform_id: UUID | None = None) -> list[Deposit]:
        return self._list(DEPOSITS, platform_id)

    def save_deposit(self, deposit: Deposit) -> None:
        self._save(DEPOSITS, deposit)

    def delete_deposit(self, deposit_id: UUID) -> None:
        self._delete(DEPOSITS, deposit_id)

    def record_deposit(self, deposit: Deposit) -> Decimal:
        """Insert a deposit and credit its platform in one transaction.

        Args:
            deposit: Deposit to store.

        Returns:
            Decimal: The platform balance after the deposit.

        Raises:
            LookupError: If the platform does not exist.
        """
        with self._engine().begin() as conn:
            self._upsert(conn, DEPOSITS, deposit)
            balance = self._move_balance(
                conn,
                deposit.platform_id,
                deposit.amount_received,
            )
        self._logger.info(
            f"Platform {deposit.platform_id} balance moved by "
            f"{deposit.amount_received}"
        )
        return balance

    def record_withdrawal(self, withdrawal: Withdrawal) -> Decimal:
        """Insert a withdrawal and debit its platform in one transaction.

        Raises:
            LookupError: If the platform does not exist.
        """
        with self._engine().begin() as conn:
            self._upsert(conn, WITHDRAWALS, withdrawal)
            balance = self._move_balance(
                conn,
                withdrawal.platform_id,
                -withdrawal.amount_requested,
            )
        self._logger.info(
            f"Platform {withdrawal.platform_id} balance moved by "
            f"{-withdrawal.amount_requested}"
        )
        return balance

    def get_withdrawal(self, withdrawal_id: UUID) -> Withdrawal | None:
        return self._get(WITHDRAWALS, withdrawal_id)

    def list_withdrawals(
        self,
        platform_id: UUID | None = None,
    ) -> list[Withdrawal]:
        return self._list(WITHDRAWALS, platform_id)

    def save_withdrawal(self, withdrawal: Withdrawal) -> None:
        self._save(WITHDRAWALS, withdrawal)

    def delete_withdrawal(self, withdrawal_id: UUID) -> None:
        self._delete(WITHDRAWALS, withdrawal_id)

    # Adjustments

    def get_adjustment(self, adjustment_id: UUID) -> Adjustment | None:
        return self._get(ADJUSTMENTS, adjustment_id)

    def list_adjustments(self) -> list[Adjustment]:
        return self._list(ADJUSTMENTS)

    def save_adjustment(self, adjustment: Adjustment) -> None:
        self._save(ADJUSTMENTS, adjustment)

    def delete_adjustment(self, adjustment_id: UUID) -> None:
        self._delete(ADJUSTMENTS, adjustment_id)


__all__ = ["SqlAlchemyLedgerRepository", "LEDGER_TABLES"]
