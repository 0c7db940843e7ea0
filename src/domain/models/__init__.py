"""Domain models package."""

from .ledger import Expense, Income, MonthlyData
from .spreadsheet import (
    BudgetUsage,
    ChangeDescriptor,
    ChangeLogEntry,
    ChangeMetadata,
    ConsolidatedInvestment,
    ConsolidatedSpreadsheet,
    ExpensesSection,
    HistorySection,
    IncomeSection,
    InvestmentsSection,
    LedgerSummary,
    MonthlySection,
    SpreadsheetSections,
    YearlyTotals,
)

__all__ = [
    "Expense",
    "Income",
    "MonthlyData",
    "BudgetUsage",
    "ChangeDescriptor",
    "ChangeLogEntry",
    "ChangeMetadata",
    "ConsolidatedInvestment",
    "ConsolidatedSpreadsheet",
    "ExpensesSection",
    "HistorySection",
    "IncomeSection",
    "InvestmentsSection",
    "LedgerSummary",
    "MonthlySection",
    "SpreadsheetSections",
    "YearlyTotals",
]
