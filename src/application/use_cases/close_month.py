"""Use case closing a month into the ledger history.

Closing a month:

* snapshots its income and expenses into an immutable ``MonthlyData``;
* persists the snapshot through the ledger repository;
* resets the engine's monthly section to the following month and replays
  the refreshed history.
"""

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.use_cases.ledger_sync import LedgerSyncEngine
from src.domain.models import (
    ChangeDescriptor,
    ChangeMetadata,
    Income,
    MonthlyData,
)
from src.domain.services.calendar import next_month
from src.domain.services.finance import build_monthly_snapshot
from src.infrastructure.logging.logger import get_app_logger


class CloseMonthUseCase:
    """Snapshot a month and roll the engine over to the next one."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        engine: LedgerSyncEngine,
        logger=None,
        user_id: str | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing and persisting ledger months.
            engine: Engine receiving the month reset and history changes.
            logger: Optional logger compatible with logging.Logger-like API.
            user_id: Optional user attached to the recorded changes.
        """
        self._ledger_repository = ledger_repository
        self._engine = engine
        self._logger = logger or get_app_logger()
        self._user_id = user_id

    def execute(self, month: str, year: int) -> MonthlyData:
        """Close ``month``/``year``.

        Args:
            month: Portuguese month name of the month to close.
            year: Calendar year of the month to close.

        Returns:
            MonthlyData: The persisted snapshot.
        """
        income = self._ledger_repository.fetch_income(month, year)
        expenses = self._ledger_repository.fetch_expenses(month, year)
        closed = build_monthly_snapshot(month, year, income, expenses)
        self._ledger_repository.save_monthly_summary(closed)
        self._logger.info(
            f"Closed {month} {year}: income={closed.total_income}, "
            f"expenses={closed.total_expenses}, "
            f"remaining={closed.remaining_income}"
        )

        label = f"{month} {year}"
        following_month, following_year = next_month(month, year)
        self._engine.record(
            ChangeDescriptor(
                section="monthly",
                action="reset",
                data=MonthlyData(
                    month=following_month,
                    year=following_year,
                    income=Income(),
                ),
                related_sections=["history", "summary"],
                metadata=ChangeMetadata(
                    month_year=label,
                    description="Fechamento do mês",
                    amount=closed.remaining_income,
                    user_id=self._user_id,
                ),
            )
        )
        history = self._ledger_repository.fetch_monthly_history()
        self._engine.record(
            ChangeDescriptor(
                section="history",
                action="update",
                data=history,
                related_sections=["summary"],
                metadata=ChangeMetadata(
                    month_year=label,
                    description="Atualização do histórico",
                    user_id=self._user_id,
                ),
            )
        )
        return closed


__all__ = ["CloseMonthUseCase"]
