"""Composition root for wiring infrastructure adapters."""

from src.application.ports.change_log_archive import ChangeLogArchivePort
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.use_cases.ledger_sync import LedgerSyncEngine
from src.infrastructure.activity_log_archive import SqlAlchemyChangeLogArchive
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> LedgerRepositoryPort:
    """Return the ledger repository for the configured user."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or LedgerSettings.from_env()
    return SqlAlchemyLedgerRepository(
        resolved_db,
        user_id=resolved_settings.user_id,
    )


def build_change_log_archive(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> ChangeLogArchivePort | None:
    """Return the activity log archive, or None when archiving is off."""
    resolved_settings = settings or LedgerSettings.from_env()
    if not resolved_settings.archive_logs:
        return None
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyChangeLogArchive(
        resolved_db,
        user_id=resolved_settings.user_id,
    )


def build_ledger_sync_engine(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
    with_archive: bool = True,
) -> LedgerSyncEngine:
    """Return a new ledger engine configured from settings.

    Args:
        db_port: Optional database port used by the archive.
        settings: Optional settings, read from the environment by default.
        with_archive: Whether evicted and disposed entries reach the
            activity log archive. Engines that only replay stored data for
            display pass False.

    Returns:
        LedgerSyncEngine: A new, isolated engine.
    """
    resolved_settings = settings or LedgerSettings.from_env()
    archive = (
        build_change_log_archive(db_port, resolved_settings)
        if with_archive
        else None
    )
    return LedgerSyncEngine.create(
        log_capacity=resolved_settings.log_capacity,
        log_view_limit=resolved_settings.log_view_limit,
        archive=archive,
        logger=get_app_logger(),
        user_id=resolved_settings.user_id,
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_change_log_archive",
    "build_ledger_sync_engine",
]
