"""Consolidated ledger engine.

The engine receives discrete changes (income replaced, expense list
updated, month closed, ...), appends them to the change log, re-derives the
affected sections and the whole-ledger summary, and synchronously pushes
the new snapshot to every subscriber. It never performs I/O on its own: the
lists it receives are already materialized by the caller.
"""

from dataclasses import replace
from datetime import datetime
from typing import Callable

from src.application.ports.change_log_archive import ChangeLogArchivePort
from src.application.use_cases.change_log import (
    ChangeLogRecorder,
    local_now,
)
from src.application.use_cases.export_change_log import build_change_log_csv
from src.application.use_cases.notifications import (
    SnapshotCallback,
    SnapshotNotifier,
)
from src.domain.constants import DEFAULT_LOG_CAPACITY, DEFAULT_LOG_VIEW_LIMIT
from src.domain.models import (
    ChangeDescriptor,
    ChangeLogEntry,
    ChangeMetadata,
    ConsolidatedSpreadsheet,
    Expense,
    Income,
    MonthlyData,
    SpreadsheetSections,
)
from src.domain.services.calendar import month_year_label
from src.domain.services.finance import (
    apply_expenses_to_monthly,
    apply_income_to_monthly,
    build_expenses_section,
    build_history_section,
    build_income_section,
    build_investments_section,
    build_monthly_section,
    compute_summary,
    empty_spreadsheet,
)
from src.infrastructure.logging.logger import get_app_logger


class LedgerSyncEngine:
    """Keep a consolidated snapshot of the ledger in sync with changes."""

    def __init__(
        self,
        log_capacity: int = DEFAULT_LOG_CAPACITY,
        log_view_limit: int = DEFAULT_LOG_VIEW_LIMIT,
        archive: ChangeLogArchivePort | None = None,
        logger=None,
        clock: Callable[[], datetime] = local_now,
        user_id: str | None = None,
    ) -> None:
        """Initialize the engine with a zeroed snapshot.

        Args:
            log_capacity: Maximum change log entries kept in memory.
            log_view_limit: Most recent entries exposed in snapshots.
            archive: Optional sink for entries evicted from memory.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Callable returning the current time.
            user_id: Optional user attached to initialization changes.
        """
        self._logger = logger or get_app_logger()
        self._clock = clock
        self._user_id = user_id
        self._recorder = ChangeLogRecorder(
            capacity=log_capacity,
            view_limit=log_view_limit,
            archive=archive,
            logger=self._logger,
            clock=clock,
        )
        self._notifier = SnapshotNotifier(logger=self._logger)
        self._snapshot = empty_spreadsheet(clock())
        self._disposed = False

    @classmethod
    def create(cls, **kwargs) -> "LedgerSyncEngine":
        """Return a new, isolated engine."""
        return cls(**kwargs)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Drop subscribers and hand retained log entries to the archive.

        Further calls to ``record`` raise RuntimeError; disposing twice is
        a no-op.
        """
        if self._disposed:
            return
        self._notifier.clear()
        archived = self._recorder.flush()
        self._disposed = True
        self._logger.info(
            f"Ledger engine disposed, archived {archived} log entries"
        )

    def record(self, change: ChangeDescriptor) -> ChangeLogEntry:
        """Log a change, recompute the snapshot and notify subscribers.

        Args:
            change: Change reported by the caller.

        Returns:
            ChangeLogEntry: The recorded entry.

        Raises:
            RuntimeError: If the engine has been disposed.
        """
        if self._disposed:
            raise RuntimeError("LedgerSyncEngine has been disposed")
        entry = self._recorder.record(change)
        self._snapshot = self._recompute(entry)
        self._notifier.notify(self._snapshot)
        return entry

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Register a snapshot callback and return its unsubscribe hook."""
        return self._notifier.subscribe(callback)

    def get_consolidated_data(self) -> ConsolidatedSpreadsheet:
        """Return the current snapshot."""
        return self._snapshot

    def get_logs(self) -> list[ChangeLogEntry]:
        """Return every change log entry still held in memory."""
        return self._recorder.entries()

    def export_to_csv(self) -> str:
        """Return the retained change log as CSV text."""
        return build_change_log_csv(self._recorder.entries())

    def initialize_with_data(
        self,
        income: Income,
        expenses: list[Expense],
        monthly_history: list[MonthlyData],
    ) -> ConsolidatedSpreadsheet:
        """Replay authoritative data through ``record``.

        Income, expenses, investments and history are recorded in that
        order, each as an ``update`` change for the current month.

        Args:
            income: Income of the current month.
            expenses: Every expense of the current month.
            monthly_history: Closed months.

        Returns:
            ConsolidatedSpreadsheet: Snapshot after the last change.
        """
        label = month_year_label(self._clock())
        replay = (
            ("income", income, ["monthly", "summary"],
             "Inicialização da renda"),
            ("expense", expenses, ["monthly", "summary"],
             "Inicialização das despesas"),
            ("investment", expenses, ["summary"],
             "Inicialização dos investimentos"),
            ("history", monthly_history, ["summary"],
             "Inicialização do histórico"),
        )
        for section, data, related_sections, description in replay:
            self.record(
                ChangeDescriptor(
                    section=section,
                    action="update",
                    data=data,
                    related_sections=related_sections,
                    metadata=ChangeMetadata(
                        month_year=label,
                        description=description,
                        user_id=self._user_id,
                    ),
                )
            )
        return self._snapshot

    def _recompute(self, entry: ChangeLogEntry) -> ConsolidatedSpreadsheet:
        timestamp = entry.timestamp
        sections = self._apply_section(
            self._snapshot.sections,
            entry,
            timestamp,
        )
        return ConsolidatedSpreadsheet(
            summary=compute_summary(sections, timestamp),
            sections=sections,
            logs=self._recorder.view(),
        )

    def _apply_section(
        self,
        sections: SpreadsheetSections,
        entry: ChangeLogEntry,
        timestamp: datetime,
    ) -> SpreadsheetSections:
        data = entry.data
        if entry.section == "income":
            return replace(
                sections,
                income=build_income_section(data, timestamp),
                monthly=apply_income_to_monthly(
                    sections.monthly,
                    data,
                    timestamp,
                ),
            )
        if entry.section == "expense":
            return replace(
                sections,
                expenses=build_expenses_section(data, timestamp),
                monthly=apply_expenses_to_monthly(
                    sections.monthly,
                    data,
                    timestamp,
                ),
            )
        if entry.section == "investment":
            return replace(
                sections,
                investments=build_investments_section(data, timestamp),
            )
        if entry.section == "monthly":
            return replace(
                sections,
                monthly=build_monthly_section(data, timestamp),
            )
        if entry.section == "history":
            return replace(
                sections,
                history=build_history_section(data, timestamp),
            )
        self._logger.warning(
            f"Unknown ledger section '{entry.section}', only the summary "
            f"was refreshed"
        )
        return sections


__all__ = ["LedgerSyncEngine"]
