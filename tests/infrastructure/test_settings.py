"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import LedgerSettings


def _clear_env(monkeypatch) -> None:
    monkeypatch.setattr(settings_module, "get_app_logger", MagicMock)
    for name in (
        "LEDGER_LOG_CAPACITY",
        "LEDGER_LOG_VIEW_LIMIT",
        "LEDGER_ARCHIVE_LOGS",
        "LEDGER_USER_ID",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_uses_defaults(monkeypatch) -> None:
    _clear_env(monkeypatch)

    settings = LedgerSettings.from_env()

    assert settings.log_capacity == 1000
    assert settings.log_view_limit == 100
    assert settings.archive_logs is False
    assert settings.user_id is None


def test_from_env_reads_values(monkeypatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("LEDGER_LOG_CAPACITY", "500")
    monkeypatch.setenv("LEDGER_LOG_VIEW_LIMIT", "50")
    monkeypatch.setenv("LEDGER_ARCHIVE_LOGS", "Yes")
    monkeypatch.setenv("LEDGER_USER_ID", " user-1 ")

    settings = LedgerSettings.from_env()

    assert settings.log_capacity == 500
    assert settings.log_view_limit == 50
    assert settings.archive_logs is True
    assert settings.user_id == "user-1"


def test_invalid_values_fall_back_with_warning(monkeypatch) -> None:
    _clear_env(monkeypatch)
    logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    monkeypatch.setenv("LEDGER_LOG_CAPACITY", "lots")
    monkeypatch.setenv("LEDGER_LOG_VIEW_LIMIT", "-3")

    settings = LedgerSettings.from_env()

    assert settings.log_capacity == 1000
    assert settings.log_view_limit == 100
    assert logger.warning.call_count == 2


def test_capacity_is_raised_to_view_limit(monkeypatch) -> None:
    _clear_env(monkeypatch)
    logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    monkeypatch.setenv("LEDGER_LOG_CAPACITY", "10")

    settings = LedgerSettings.from_env()

    assert settings.log_capacity == 100
    logger.warning.assert_called_once()
