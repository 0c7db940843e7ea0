"""Settings helpers for the ledger engine and its adapters."""

from dataclasses import dataclass
import os
from typing import Optional

from src.domain.constants import DEFAULT_LOG_CAPACITY, DEFAULT_LOG_VIEW_LIMIT
from src.infrastructure.logging.logger import get_app_logger

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the change log and the dashboard.

    Attributes:
        log_capacity: Maximum entries kept in memory by the change log.
        log_view_limit: Most recent entries exposed in snapshots.
        archive_logs: Whether evicted entries go to the activity log table.
        user_id: Optional user whose ledger is loaded.
    """

    log_capacity: int = DEFAULT_LOG_CAPACITY
    log_view_limit: int = DEFAULT_LOG_VIEW_LIMIT
    archive_logs: bool = False
    user_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.log_capacity < self.log_view_limit:
            object.__setattr__(self, "log_capacity", self.log_view_limit)

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        log_capacity = cls._read_positive_int(
            "LEDGER_LOG_CAPACITY",
            DEFAULT_LOG_CAPACITY,
            logger,
        )
        log_view_limit = cls._read_positive_int(
            "LEDGER_LOG_VIEW_LIMIT",
            DEFAULT_LOG_VIEW_LIMIT,
            logger,
        )
        if log_capacity < log_view_limit:
            logger.warning(
                f"LEDGER_LOG_CAPACITY={log_capacity} is below the view "
                f"limit; using {log_view_limit}"
            )
        archive_logs = (
            os.getenv("LEDGER_ARCHIVE_LOGS", "false").strip().lower()
            in _TRUE_VALUES
        )
        user_id = os.getenv("LEDGER_USER_ID", "").strip() or None
        return cls(
            log_capacity=log_capacity,
            log_view_limit=log_view_limit,
            archive_logs=archive_logs,
            user_id=user_id,
        )

    @staticmethod
    def _read_positive_int(name: str, default: int, logger) -> int:
        """Read a positive integer environment variable.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or the default.
        """
        raw_value = os.getenv(name)
        if raw_value is None or not raw_value.strip():
            return default
        try:
            value = int(raw_value)
        except ValueError:
            logger.warning(
                f"Invalid integer for {name}: '{raw_value}'. "
                f"Using {default}."
            )
            return default
        if value <= 0:
            logger.warning(f"{name} must be positive. Using {default}.")
            return default
        return value


__all__ = ["LedgerSettings"]
