"""Port for reading and closing ledger months."""

from typing import Protocol

from src.domain.models import Expense, Income, MonthlyData


class LedgerRepositoryPort(Protocol):
    """Port exposing the authoritative ledger records."""

    def fetch_income(self, month: str, year: int) -> Income:
        """Return the income of a month, zeroed when none was recorded."""

    def fetch_expenses(self, month: str, year: int) -> list[Expense]:
        """Return the expenses of a month in chronological order."""

    def fetch_monthly_history(self) -> list[MonthlyData]:
        """Return every closed month, oldest first."""

    def save_monthly_summary(self, monthly_data: MonthlyData) -> None:
        """Persist a closed month."""


__all__ = ["LedgerRepositoryPort"]
