"""Domain services for ledger aggregates."""

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from src.domain.constants import (
    EXPENSE_TYPE_FIXED,
    EXPENSE_TYPE_INVESTMENT,
    EXPENSE_TYPE_VARIABLE,
    PAYMENT_METHOD_EXTRA,
    PAYMENT_METHOD_SALARY,
)
from src.domain.models import (
    BudgetUsage,
    ConsolidatedSpreadsheet,
    Expense,
    ExpensesSection,
    HistorySection,
    Income,
    IncomeSection,
    InvestmentsSection,
    LedgerSummary,
    MonthlyData,
    MonthlySection,
    SpreadsheetSections,
    YearlyTotals,
)
from src.domain.services.calendar import month_name
from src.domain.services.investments import consolidate_investments
from src.utils.decimal_utils import coerce_decimal


def sum_amounts(expenses: Iterable[Expense]) -> Decimal:
    """Return the sum of expense amounts."""
    return sum(
        (coerce_decimal(expense.amount) for expense in expenses),
        Decimal("0"),
    )


def filter_by_type(
    expenses: Iterable[Expense],
    expense_type: str,
) -> list[Expense]:
    """Return expenses of a given type, preserving order."""
    return [expense for expense in expenses if expense.type == expense_type]


def build_income_section(income: Income, timestamp: datetime) -> IncomeSection:
    """Build the income section from a wholesale income update."""
    return IncomeSection(
        salary=income.salary,
        extra_income=income.extra_income,
        total_income=income.total,
        last_updated=timestamp,
    )


def build_expenses_section(
    expenses: list[Expense],
    timestamp: datetime,
) -> ExpensesSection:
    """Split expenses into fixed and variable lists with their totals.

    Investments are left out; they belong to the investments section.
    """
    fixed = filter_by_type(expenses, EXPENSE_TYPE_FIXED)
    variable = filter_by_type(expenses, EXPENSE_TYPE_VARIABLE)
    return ExpensesSection(
        fixed=fixed,
        variable=variable,
        total_fixed=sum_amounts(fixed),
        total_variable=sum_amounts(variable),
        last_updated=timestamp,
    )


def build_investments_section(
    expenses: list[Expense],
    timestamp: datetime,
) -> InvestmentsSection:
    """Build the investments section from the full expense list.

    ``total_invested`` is the raw sum of investment transactions and does
    not depend on the per-name consolidation.
    """
    investments = filter_by_type(expenses, EXPENSE_TYPE_INVESTMENT)
    return InvestmentsSection(
        transactions=investments,
        consolidated=consolidate_investments(investments),
        total_invested=sum_amounts(investments),
        last_updated=timestamp,
    )


def build_history_section(
    months: list[MonthlyData],
    timestamp: datetime,
) -> HistorySection:
    """Build the history section with its per-year totals."""
    return HistorySection(
        months=list(months),
        yearly_totals=calculate_yearly_totals(months),
        last_updated=timestamp,
    )


def calculate_yearly_totals(months: Iterable[MonthlyData]) -> list[YearlyTotals]:
    """Group closed months by year.

    Args:
        months: Closed monthly snapshots.

    Returns:
        list[YearlyTotals]: One entry per year in first-seen order.
    """
    totals: dict[int, list[Decimal]] = {}
    for month in months:
        investments = sum_amounts(
            filter_by_type(month.expenses, EXPENSE_TYPE_INVESTMENT)
        )
        if month.year not in totals:
            totals[month.year] = [
                coerce_decimal(month.total_income),
                coerce_decimal(month.total_expenses),
                investments,
            ]
            continue
        entry = totals[month.year]
        entry[0] += coerce_decimal(month.total_income)
        entry[1] += coerce_decimal(month.total_expenses)
        entry[2] += investments

    return [
        YearlyTotals(
            year=year,
            total_income=total_income,
            total_expenses=total_expenses,
            total_investments=total_investments,
            net_balance=total_income - total_expenses,
        )
        for year, (total_income, total_expenses, total_investments)
        in totals.items()
    ]


def apply_income_to_monthly(
    monthly: MonthlySection,
    income: Income,
    timestamp: datetime,
) -> MonthlySection:
    """Carry an income update into the current month."""
    monthly_data = replace(
        monthly.monthly_data,
        income=income,
        total_income=income.total,
    )
    return replace(monthly, monthly_data=monthly_data, last_updated=timestamp)


def apply_expenses_to_monthly(
    monthly: MonthlySection,
    expenses: list[Expense],
    timestamp: datetime,
) -> MonthlySection:
    """Carry an expense update into the current month, without investments."""
    spending = [
        expense
        for expense in expenses
        if expense.type != EXPENSE_TYPE_INVESTMENT
    ]
    monthly_data = replace(
        monthly.monthly_data,
        expenses=spending,
        total_expenses=sum_amounts(spending),
    )
    return replace(monthly, monthly_data=monthly_data, last_updated=timestamp)


def build_monthly_section(
    monthly_data: MonthlyData,
    timestamp: datetime,
) -> MonthlySection:
    """Replace the monthly section with a full monthly snapshot."""
    return MonthlySection(
        current_month=monthly_data.month,
        current_year=monthly_data.year,
        monthly_data=monthly_data,
        last_updated=timestamp,
    )


def build_monthly_snapshot(
    month: str,
    year: int,
    income: Income,
    expenses: list[Expense],
) -> MonthlyData:
    """Close a month into an immutable snapshot.

    Args:
        month: Month name.
        year: Calendar year.
        income: Income of the month.
        expenses: Every expense of the month, investments included.

    Returns:
        MonthlyData: Snapshot whose totals exclude investments.
    """
    total_expenses = sum_amounts(
        expense
        for expense in expenses
        if expense.type != EXPENSE_TYPE_INVESTMENT
    )
    return MonthlyData(
        month=month,
        year=year,
        income=income,
        expenses=list(expenses),
        total_income=income.total,
        total_expenses=total_expenses,
        remaining_income=income.total - total_expenses,
    )


def compute_summary(
    sections: SpreadsheetSections,
    timestamp: datetime,
) -> LedgerSummary:
    """Derive whole-ledger totals from the current sections.

    Investments are tracked on their own and never count as expenses, so
    they affect neither ``total_expenses`` nor ``net_balance``.

    Args:
        sections: Current per-section state.
        timestamp: Recompute time stored as ``last_updated``.

    Returns:
        LedgerSummary: Totals for the ledger.
    """
    total_income = sections.income.total_income
    total_expenses = (
        sections.expenses.total_fixed + sections.expenses.total_variable
    )
    return LedgerSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        total_investments=sections.investments.total_invested,
        net_balance=total_income - total_expenses,
        last_updated=timestamp,
    )


def compute_budget_usage(
    income: Income,
    expenses: Iterable[Expense],
) -> BudgetUsage:
    """Compute how much of each income source has been spent.

    Args:
        income: Income of the month.
        expenses: Expenses of the month; investments count against the
            income source that paid them.

    Returns:
        BudgetUsage: Spending, remainder and usage percentage per source.
    """
    salary_spent = Decimal("0")
    extra_spent = Decimal("0")
    for expense in expenses:
        if expense.payment_method == PAYMENT_METHOD_SALARY:
            salary_spent += coerce_decimal(expense.amount)
        elif expense.payment_method == PAYMENT_METHOD_EXTRA:
            extra_spent += coerce_decimal(expense.amount)
    return BudgetUsage(
        salary_spent=salary_spent,
        extra_spent=extra_spent,
        remaining_salary=income.salary - salary_spent,
        remaining_extra=income.extra_income - extra_spent,
        salary_usage_percent=_usage_percent(salary_spent, income.salary),
        extra_usage_percent=_usage_percent(extra_spent, income.extra_income),
    )


def sum_by_category(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Return expense totals per category in first-seen order."""
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = (
            totals.get(expense.category, Decimal("0"))
            + coerce_decimal(expense.amount)
        )
    return totals


def empty_spreadsheet(timestamp: datetime) -> ConsolidatedSpreadsheet:
    """Return a zeroed snapshot labelled with the month of ``timestamp``."""
    zero = Decimal("0")
    current_month = month_name(timestamp)
    sections = SpreadsheetSections(
        income=build_income_section(Income(), timestamp),
        expenses=build_expenses_section([], timestamp),
        investments=build_investments_section([], timestamp),
        monthly=build_monthly_section(
            MonthlyData(
                month=current_month,
                year=timestamp.year,
                income=Income(),
            ),
            timestamp,
        ),
        history=build_history_section([], timestamp),
    )
    return ConsolidatedSpreadsheet(
        summary=LedgerSummary(
            total_income=zero,
            total_expenses=zero,
            total_investments=zero,
            net_balance=zero,
            last_updated=timestamp,
        ),
        sections=sections,
        logs=[],
    )


def _usage_percent(spent: Decimal, available: Decimal) -> Decimal:
    if available <= 0:
        return Decimal("0")
    return spent / available * Decimal("100")


__all__ = [
    "sum_amounts",
    "filter_by_type",
    "build_income_section",
    "build_expenses_section",
    "build_investments_section",
    "build_history_section",
    "build_monthly_section",
    "build_monthly_snapshot",
    "calculate_yearly_totals",
    "apply_income_to_monthly",
    "apply_expenses_to_monthly",
    "compute_summary",
    "compute_budget_usage",
    "sum_by_category",
    "empty_spreadsheet",
]
