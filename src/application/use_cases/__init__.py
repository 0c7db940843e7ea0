"""Application use cases package."""

from .change_log import ChangeLogRecorder
from .close_month import CloseMonthUseCase
from .export_change_log import build_change_log_csv
from .ledger_sync import LedgerSyncEngine
from .load_ledger import LoadLedgerUseCase
from .notifications import SnapshotNotifier

__all__ = [
    "ChangeLogRecorder",
    "CloseMonthUseCase",
    "LedgerSyncEngine",
    "LoadLedgerUseCase",
    "SnapshotNotifier",
    "build_change_log_csv",
]
