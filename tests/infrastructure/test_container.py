"""Tests for the composition root."""

from unittest.mock import MagicMock

from bankroll.infrastructure import container
from bankroll.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from bankroll.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from bankroll.infrastructure.settings import LedgerSettings


def test_build_ledger_repository_uses_given_port(monkeypatch) -> None:
    """The repository should be wired to the provided database port."""
    monkeypatch.setattr(container, "get_app_logger", MagicMock)
    db_port = MagicMock()

    repository = container.build_ledger_repository(db_port=db_port)

    assert isinstance(repository, SqlAlchemyLedgerRepository)
    assert repository._db_port is db_port


def test_build_ledger_repository_defaults_to_engine_adapter(monkeypatch):
    monkeypatch.setattr(container, "get_app_logger", MagicMock)

    repository = container.build_ledger_repository()

    assert isinstance(repository._db_port, SqlAlchemyDatabaseEngineAdapter)


def test_build_settings_reads_environment(monkeypatch) -> None:
    expected = LedgerSettings(base_currency="EUR")
    monkeypatch.setattr(
        container.LedgerSettings,
        "from_env",
        classmethod(lambda cls: expected),
    )

    assert container.build_settings() is expected
