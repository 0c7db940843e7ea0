"""Tests for the ledger logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from src.infrastructure.logging import logger as logger_module


@pytest.fixture
def log_root(tmp_path, monkeypatch):
    """Point log files at a temporary root with a fixed date stamp."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20261018"),
    )
    return tmp_path


def _file_handlers(logger: logging.Logger) -> list[logging.FileHandler]:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def _fresh_logger(monkeypatch, name: str) -> logging.Logger:
    """Return the named logger with its handlers emptied for this test."""
    logger = logging.getLogger(name)
    monkeypatch.setattr(logger, "handlers", [])
    return logger


def test_builder_writes_daily_file_under_subdir(log_root, monkeypatch):
    _fresh_logger(monkeypatch, "ledger.sync")
    builder = (
        logger_module.LoggerBuilder()
        .name("ledger.sync")
        .subdir("sync")
        .prefix("sync_logs")
        .console(False)
        .level(logging.WARNING)
    )

    built = builder.build()

    assert built.level == logging.WARNING
    assert built.propagate is False
    handlers = _file_handlers(built)
    assert len(handlers) == 1
    assert handlers[0].baseFilename == str(
        log_root / "logs" / "sync" / "20261018_sync_logs.log"
    )
    assert not [
        h for h in built.handlers if not isinstance(h, logging.FileHandler)
    ]
    assert builder.build() is built
    assert len(built.handlers) == 1
    handlers[0].close()


@pytest.mark.parametrize(
    ("factory", "cls", "name", "subdir", "prefix"),
    [
        ("get_app_logger", "AppLogger", "ledger.app", "app", "app_logs"),
        (
            "get_usage_logger",
            "UsageLogger",
            "ledger.usage",
            "usage",
            "usage_logs",
        ),
    ],
)
def test_ledger_loggers_use_their_own_log_files(
    log_root, monkeypatch, factory, cls, name, subdir, prefix
):
    """Application and usage events land in separate daily files."""
    _fresh_logger(monkeypatch, name)
    monkeypatch.setattr(getattr(logger_module, cls), "_instance", None)

    wrapper = getattr(logger_module, factory)()
    wrapper.info("month closed")

    assert wrapper.logger.name == name
    handlers = _file_handlers(wrapper.logger)
    expected = log_root / "logs" / subdir / f"20261018_{prefix}.log"
    assert handlers[0].baseFilename == str(expected)
    for handler in handlers:
        handler.flush()
    assert "month closed" in expected.read_text(encoding="utf-8")
    for handler in wrapper.logger.handlers:
        handler.close()


def test_default_handlers_use_formatter(tmp_path):
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "ledger.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert isinstance(console_handler, logging.StreamHandler)
    assert console_handler.formatter is fmt
    file_handler.close()


def test_wrapper_forwards_every_level(monkeypatch):
    """The ledger logger wrapper should call the underlying logger."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)

    ledger_logger = logger_module.get_app_logger()
    ledger_logger.debug("replaying history")
    ledger_logger.info("ledger loaded")
    ledger_logger.warning("negative amount")
    ledger_logger.error("archive failed")
    ledger_logger.critical("engine disposed twice")

    fake_logger.debug.assert_called_with("replaying history")
    fake_logger.info.assert_called_with("ledger loaded")
    fake_logger.warning.assert_called_with("negative amount")
    fake_logger.error.assert_called_with("archive failed")
    fake_logger.critical.assert_called_with("engine disposed twice")
    assert logger_module.get_app_logger() is ledger_logger


def test_app_and_usage_loggers_are_distinct_singletons(monkeypatch):
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: MagicMock(),
    )
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert app_logger.logger is not usage_logger.logger
