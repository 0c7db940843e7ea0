"""Domain package for business rules and core models."""

from .constants import EXPENSE_TYPES, PAYMENT_METHODS
from .models import (
    ChangeDescriptor,
    ChangeLogEntry,
    ChangeMetadata,
    ConsolidatedInvestment,
    ConsolidatedSpreadsheet,
    Expense,
    Income,
    LedgerSummary,
    MonthlyData,
)
from .services import (
    build_monthly_snapshot,
    compute_budget_usage,
    compute_summary,
    consolidate_investments,
    month_year_label,
)

__all__ = [
    "ChangeDescriptor",
    "ChangeLogEntry",
    "ChangeMetadata",
    "ConsolidatedInvestment",
    "ConsolidatedSpreadsheet",
    "Expense",
    "Income",
    "LedgerSummary",
    "MonthlyData",
    "EXPENSE_TYPES",
    "PAYMENT_METHODS",
    "build_monthly_snapshot",
    "compute_budget_usage",
    "compute_summary",
    "consolidate_investments",
    "month_year_label",
]
