"""Domain models for ledger records: income, expenses and closed months."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Income:
    """Monthly income, replaced wholesale on every update.

    Attributes:
        salary: Salary received in the month.
        extra_income: Any other income received in the month.
    """

    salary: Decimal = Decimal("0")
    extra_income: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        """Return salary plus extra income."""
        return self.salary + self.extra_income


@dataclass(frozen=True)
class Expense:
    """Single expense transaction.

    Attributes:
        id: Unique identifier of the expense.
        name: Free-text name, also the grouping key for investments.
        amount: Positive transaction amount.
        category: Spending category label.
        payment_method: Income source paying the expense (salary or extra).
        type: Expense kind (fixed, variable or investment).
        date: When the expense was recorded.
        investment_balance: Account balance after the transaction, only set
            for investments.
    """

    id: str
    name: str
    amount: Decimal
    category: str
    payment_method: str
    type: str
    date: datetime
    investment_balance: Decimal | None = None


@dataclass(frozen=True)
class MonthlyData:
    """Closed snapshot of a month, immutable once appended to history."""

    month: str
    year: int
    income: Income
    expenses: list[Expense] = field(default_factory=list)
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    remaining_income: Decimal = Decimal("0")


__all__ = ["Income", "Expense", "MonthlyData"]
