"""Use case loading the authoritative ledger into the sync engine."""

from datetime import datetime
from typing import Callable

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.use_cases.change_log import local_now
from src.application.use_cases.ledger_sync import LedgerSyncEngine
from src.domain.models import ConsolidatedSpreadsheet
from src.domain.services.calendar import month_name
from src.domain.services.validation import validate_expenses
from src.infrastructure.logging.logger import get_app_logger


class LoadLedgerUseCase:
    """Fetch a month of ledger data and replay it through the engine."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        engine: LedgerSyncEngine,
        logger=None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing income, expenses and history.
            engine: Engine receiving the replayed changes.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Callable returning the current time.
        """
        self._ledger_repository = ledger_repository
        self._engine = engine
        self._logger = logger or get_app_logger()
        self._clock = clock

    def execute(
        self,
        month: str | None = None,
        year: int | None = None,
    ) -> ConsolidatedSpreadsheet:
        """Load a month (the current one by default) into the engine.

        Args:
            month: Optional Portuguese month name.
            year: Optional calendar year.

        Returns:
            ConsolidatedSpreadsheet: Snapshot after initialization.
        """
        now = self._clock()
        month = month or month_name(now)
        year = year or now.year

        income = self._ledger_repository.fetch_income(month, year)
        expenses = self._ledger_repository.fetch_expenses(month, year)
        history = self._ledger_repository.fetch_monthly_history()
        self._logger.info(
            f"Fetched {len(expenses)} expenses and {len(history)} closed "
            f"months for {month} {year}"
        )

        invalid_count = validate_expenses(expenses, self._logger)
        if invalid_count:
            self._logger.warning(
                f"{invalid_count} expenses violate ledger conventions"
            )

        snapshot = self._engine.initialize_with_data(income, expenses, history)
        self._logger.info(
            f"Ledger loaded: income={snapshot.summary.total_income}, "
            f"expenses={snapshot.summary.total_expenses}, "
            f"investments={snapshot.summary.total_investments}"
        )
        return snapshot


__all__ = ["LoadLedgerUseCase"]
