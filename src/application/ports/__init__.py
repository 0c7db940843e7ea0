"""Application ports package."""

from .change_log_archive import ChangeLogArchivePort
from .database import DatabaseEnginePort
from .ledger_repository import LedgerRepositoryPort

__all__ = [
    "ChangeLogArchivePort",
    "DatabaseEnginePort",
    "LedgerRepositoryPort",
]
