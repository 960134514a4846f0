"""Tests for the export_ledger_cli adapter."""

from datetime import datetime
import json
from unittest.mock import MagicMock

from bankroll.adapters import export_ledger_cli


def _document() -> dict:
    return {
        "exportVersion": 1,
        "platforms": [{"name": "PokerStars"}],
        "liveSessions": [{"location": "Casino"}],
        "onlineSessions": [{}, {}],
        "deposits": [],
        "withdrawals": [],
        "adjustments": [],
    }


def _patch_dependencies(monkeypatch, document):
    fake_logger = MagicMock()
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = document
    monkeypatch.setattr(export_ledger_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(export_ledger_cli, "get_usage_logger", MagicMock)
    monkeypatch.setattr(
        export_ledger_cli,
        "build_ledger_repository",
        lambda: "repository",
    )
    monkeypatch.setattr(export_ledger_cli, "build_settings", lambda: "settings")

    def _fake_use_case(repository, settings, clock, logger):
        assert repository == "repository"
        assert settings == "settings"
        assert logger is fake_logger
        return fake_use_case

    monkeypatch.setattr(export_ledger_cli, "ExportLedgerUseCase", _fake_use_case)
    return fake_use_case


def test_main_writes_document_to_configured_directory(
    monkeypatch,
    capsys,
    tmp_path,
):
    """The CLI should write the export under LEDGER_EXPORT_PATH."""
    fake_use_case = _patch_dependencies(monkeypatch, _document())
    monkeypatch.setenv("LEDGER_EXPORT_PATH", str(tmp_path))

    export_ledger_cli.main()

    fake_use_case.execute.assert_called_once()
    written = list(tmp_path.glob("ProjectCapital_Export_*.json"))
    assert len(written) == 1
    assert json.loads(written[0].read_text())["exportVersion"] == 1
    captured = capsys.readouterr()
    assert "Exported 3 sessions and 1 platforms" in captured.out


def test_resolve_destination_accepts_file_path(monkeypatch, tmp_path):
    target = tmp_path / "backup.json"
    monkeypatch.setenv("LEDGER_EXPORT_PATH", str(target))

    assert export_ledger_cli._resolve_destination(datetime(2024, 3, 1)) == target


def test_resolve_destination_defaults_to_exports_dir(monkeypatch, tmp_path):
    monkeypatch.delenv("LEDGER_EXPORT_PATH", raising=False)
    monkeypatch.setattr(export_ledger_cli, "get_project_root", lambda: tmp_path)

    destination = export_ledger_cli._resolve_destination(datetime(2024, 3, 1))

    assert destination == (
        tmp_path / "exports" / "ProjectCapital_Export_2024-03-01.json"
    )
