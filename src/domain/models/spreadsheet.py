"""Domain models for the consolidated spreadsheet snapshot and its log."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from .ledger import Expense, MonthlyData


@dataclass(frozen=True)
class ChangeMetadata:
    """Descriptive metadata attached to a recorded change.

    Attributes:
        month_year: Label of the month the change belongs to.
        description: Optional human readable description.
        amount: Optional amount involved in the change.
        category: Optional expense category involved in the change.
        user_id: Optional identifier of the user who made the change.
    """

    month_year: str
    description: str | None = None
    amount: Decimal | None = None
    category: str | None = None
    user_id: str | None = None


@dataclass(frozen=True)
class ChangeDescriptor:
    """Change reported by a caller, before the recorder stamps it."""

    section: str
    action: str
    data: Any
    metadata: ChangeMetadata
    related_sections: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ChangeLogEntry:
    """Recorded change with its identifier and wall-clock timestamp."""

    id: str
    timestamp: datetime
    section: str
    action: str
    data: Any
    metadata: ChangeMetadata
    related_sections: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ConsolidatedInvestment:
    """Running position of every investment sharing a name."""

    name: str
    total_invested: Decimal
    current_balance: Decimal
    performance: Decimal


@dataclass(frozen=True)
class YearlyTotals:
    """Totals of closed months grouped by calendar year."""

    year: int
    total_income: Decimal
    total_expenses: Decimal
    total_investments: Decimal
    net_balance: Decimal


@dataclass(frozen=True)
class IncomeSection:
    salary: Decimal
    extra_income: Decimal
    total_income: Decimal
    last_updated: datetime


@dataclass(frozen=True)
class ExpensesSection:
    fixed: list[Expense]
    variable: list[Expense]
    total_fixed: Decimal
    total_variable: Decimal
    last_updated: datetime


@dataclass(frozen=True)
class InvestmentsSection:
    transactions: list[Expense]
    consolidated: list[ConsolidatedInvestment]
    total_invested: Decimal
    last_updated: datetime


@dataclass(frozen=True)
class MonthlySection:
    current_month: str
    current_year: int
    monthly_data: MonthlyData
    last_updated: datetime


@dataclass(frozen=True)
class HistorySection:
    months: list[MonthlyData]
    yearly_totals: list[YearlyTotals]
    last_updated: datetime


@dataclass(frozen=True)
class SpreadsheetSections:
    """Per-section state merged into the summary."""

    income: IncomeSection
    expenses: ExpensesSection
    investments: InvestmentsSection
    monthly: MonthlySection
    history: HistorySection


@dataclass(frozen=True)
class LedgerSummary:
    """Whole-ledger totals.

    Attributes:
        total_income: Salary plus extra income.
        total_expenses: Fixed plus variable expenses, investments excluded.
        total_investments: Raw sum of investment transactions.
        net_balance: Income minus expenses, investments excluded.
        last_updated: Timestamp of the recompute that produced the summary.
    """

    total_income: Decimal
    total_expenses: Decimal
    total_investments: Decimal
    net_balance: Decimal
    last_updated: datetime


@dataclass(frozen=True)
class ConsolidatedSpreadsheet:
    """Snapshot of the whole ledger pushed to subscribers."""

    summary: LedgerSummary
    sections: SpreadsheetSections
    logs: list[ChangeLogEntry] = field(default_factory=list)


@dataclass(frozen=True)
class BudgetUsage:
    """Spending per income source and how much of it is used."""

    salary_spent: Decimal
    extra_spent: Decimal
    remaining_salary: Decimal
    remaining_extra: Decimal
    salary_usage_percent: Decimal
    extra_usage_percent: Decimal


__all__ = [
    "ChangeMetadata",
    "ChangeDescriptor",
    "ChangeLogEntry",
    "ConsolidatedInvestment",
    "YearlyTotals",
    "IncomeSection",
    "ExpensesSection",
    "InvestmentsSection",
    "MonthlySection",
    "HistorySection",
    "SpreadsheetSections",
    "LedgerSummary",
    "ConsolidatedSpreadsheet",
    "BudgetUsage",
]
