"""Shared fixtures for the ledger tests."""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine

from bankroll.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from bankroll.infrastructure.settings import LedgerSettings


class SqliteDatabasePort:
    """DatabaseEnginePort backed by a SQLite file."""

    def __init__(self, path) -> None:
        self.engine = create_engine(f"sqlite:///{path}", future=True)

    def get_ledger_engine(self):
        return self.engine


class SteppingClock:
    """Clock returning a fixed time that tests advance explicitly."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def advance(self, **delta) -> None:
        self.now += timedelta(**delta)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fake_logger():
    return MagicMock()


@pytest.fixture
def db_port(tmp_path):
    port = SqliteDatabasePort(tmp_path / "ledger.db")
    yield port
    port.engine.dispose()


@pytest.fixture
def repository(db_port, fake_logger):
    return SqlAlchemyLedgerRepository(db_port, logger=fake_logger)


@pytest.fixture
def settings():
    return LedgerSettings(base_currency="CAD")


@pytest.fixture
def clock():
    return SteppingClock(datetime(2024, 3, 1, 19, 0, 0))


@pytest.fixture
def other_repository(tmp_path, fake_logger):
    """A second, empty ledger for merge scenarios."""
    port = SqliteDatabasePort(tmp_path / "other.db")
    yield SqlAlchemyLedgerRepository(port, logger=fake_logger)
    port.engine.dispose()
