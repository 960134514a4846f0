"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

from bankroll.infrastructure.logging import logger as logger_module


def test_logger_builder_writes_dated_file_under_logs(tmp_path, monkeypatch):
    """LoggerBuilder should build loggers in the project logs directory."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240301"),
    )

    builder = logger_module.LoggerBuilder()
    ledger_logger = (
        builder.name("bankroll.test.builder")
        .subdir("ledger")
        .prefix("ledger_logs")
        .console(False)
        .level(logging.WARNING)
        .build()
    )

    try:
        assert ledger_logger.level == logging.WARNING
        assert ledger_logger.propagate is False
        file_handlers = [
            h
            for h in ledger_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        assert len(file_handlers) == 1
        assert len(ledger_logger.handlers) == 1
        expected = tmp_path / "logs" / "ledger" / "20240301_ledger_logs.log"
        assert file_handlers[0].baseFilename == str(expected)
        # A second build reuses the configured handlers.
        assert builder.build() is ledger_logger
        assert len(ledger_logger.handlers) == 1
    finally:
        for handler in list(ledger_logger.handlers):
            handler.close()
            ledger_logger.removeHandler(handler)


def test_default_handlers_use_formatter(tmp_path):
    """Default handlers should apply the provided formatter."""
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "ledger.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    try:
        assert isinstance(file_handler, logging.FileHandler)
        assert file_handler.level == logging.INFO
        assert file_handler.formatter is fmt
        assert isinstance(console_handler, logging.StreamHandler)
        assert console_handler.formatter is fmt
    finally:
        file_handler.close()


def test_logger_delegates_to_built_logger(monkeypatch):
    """Logger methods should call the wrapped logging.Logger."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    logger = logger_module.Logger("bankroll.test")
    logger.info("session saved")
    logger.warning("discrepancy")
    logger.error("write failed")
    logger.debug("dbg")
    logger.critical("crit")

    fake_logger.info.assert_called_with("session saved")
    fake_logger.warning.assert_called_with("discrepancy")
    fake_logger.error.assert_called_with("write failed")
    fake_logger.debug.assert_called_with("dbg")
    fake_logger.critical.assert_called_with("crit")
    assert logger_module.Logger("bankroll.test") is logger


def test_app_and_usage_loggers_are_distinct_singletons(monkeypatch):
    """get_app_logger and get_usage_logger should return per-class singletons."""
    built = []

    def _fake_build(self):
        built.append((self._subdir, self._prefix))
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built == [("app", "app_logs"), ("usage", "usage_logs")]
