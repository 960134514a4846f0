"""Composition root for wiring infrastructure adapters."""

from bankroll.application.ports.database import DatabaseEnginePort
from bankroll.application.ports.ledger_repository import LedgerRepositoryPort
from bankroll.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from bankroll.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from bankroll.infrastructure.logging.logger import get_app_logger
from bankroll.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db, logger=get_app_logger())


def build_settings() -> LedgerSettings:
    """Return the ledger settings read from the environment."""
    return LedgerSettings.from_env()


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_settings",
]
