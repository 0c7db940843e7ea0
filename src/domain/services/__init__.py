"""Domain services package."""

from .calendar import month_name, month_number, month_year_label
from .finance import (
    build_monthly_snapshot,
    calculate_yearly_totals,
    compute_budget_usage,
    compute_summary,
    empty_spreadsheet,
    sum_by_category,
)
from .investments import compute_performance, consolidate_investments
from .normalization import (
    normalize_expense_type,
    normalize_investment_key,
    normalize_payment_method,
)
from .validation import validate_expense, validate_expenses

__all__ = [
    "build_monthly_snapshot",
    "calculate_yearly_totals",
    "compute_budget_usage",
    "compute_performance",
    "compute_summary",
    "consolidate_investments",
    "empty_spreadsheet",
    "month_name",
    "month_number",
    "month_year_label",
    "normalize_expense_type",
    "normalize_investment_key",
    "normalize_payment_method",
    "sum_by_category",
    "validate_expense",
    "validate_expenses",
]
