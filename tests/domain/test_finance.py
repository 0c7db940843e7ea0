"""Tests for ledger aggregate services."""

from datetime import datetime
from decimal import Decimal

from src.domain.models import (
    Expense,
    Income,
    MonthlyData,
    SpreadsheetSections,
)
from src.domain.services.finance import (
    build_expenses_section,
    build_history_section,
    build_income_section,
    build_investments_section,
    build_monthly_section,
    build_monthly_snapshot,
    calculate_yearly_totals,
    compute_budget_usage,
    compute_summary,
    empty_spreadsheet,
    sum_by_category,
)

NOW = datetime(2024, 5, 10, 12, 0, 0)


def _expense(
    amount: str,
    expense_type: str = "fixed",
    payment_method: str = "salary",
    category: str = "Moradia",
    name: str = "Aluguel",
) -> Expense:
    return Expense(
        id=f"{name}-{amount}",
        name=name,
        amount=Decimal(amount),
        category=category,
        payment_method=payment_method,
        type=expense_type,
        date=NOW,
    )


def _sections(income: Income, expenses: list[Expense]) -> SpreadsheetSections:
    monthly = MonthlyData(month="maio", year=2024, income=income)
    return SpreadsheetSections(
        income=build_income_section(income, NOW),
        expenses=build_expenses_section(expenses, NOW),
        investments=build_investments_section(expenses, NOW),
        monthly=build_monthly_section(monthly, NOW),
        history=build_history_section([], NOW),
    )


def test_summary_excludes_investments() -> None:
    """Investments count neither as expenses nor against the balance."""
    income = Income(salary=Decimal("5000"), extra_income=Decimal("0"))
    expenses = [
        _expense("1000"),
        _expense("2000", expense_type="investment", name="CDB"),
    ]

    summary = compute_summary(_sections(income, expenses), NOW)

    assert summary.total_income == Decimal("5000")
    assert summary.total_expenses == Decimal("1000")
    assert summary.total_investments == Decimal("2000")
    assert summary.net_balance == Decimal("4000")
    assert summary.last_updated == NOW


def test_expenses_section_splits_fixed_and_variable() -> None:
    expenses = [
        _expense("100"),
        _expense("40", expense_type="variable", name="Mercado"),
        _expense("60", expense_type="variable", name="Cinema"),
        _expense("500", expense_type="investment", name="CDB"),
    ]

    section = build_expenses_section(expenses, NOW)

    assert [item.name for item in section.fixed] == ["Aluguel"]
    assert [item.name for item in section.variable] == ["Mercado", "Cinema"]
    assert section.total_fixed == Decimal("100")
    assert section.total_variable == Decimal("100")


def test_investments_section_total_is_raw_sum() -> None:
    expenses = [
        _expense("100", expense_type="investment", name="CDB"),
        _expense("50", expense_type="investment", name="cdb"),
        _expense("10"),
    ]

    section = build_investments_section(expenses, NOW)

    assert section.total_invested == Decimal("150")
    assert len(section.transactions) == 2
    assert len(section.consolidated) == 1


def test_yearly_totals_group_months_by_year() -> None:
    months = [
        MonthlyData(
            month="novembro",
            year=2023,
            income=Income(salary=Decimal("3000")),
            expenses=[_expense("300", expense_type="investment")],
            total_income=Decimal("3000"),
            total_expenses=Decimal("1000"),
            remaining_income=Decimal("2000"),
        ),
        MonthlyData(
            month="janeiro",
            year=2024,
            income=Income(salary=Decimal("4000")),
            total_income=Decimal("4000"),
            total_expenses=Decimal("1500"),
            remaining_income=Decimal("2500"),
        ),
        MonthlyData(
            month="dezembro",
            year=2023,
            income=Income(salary=Decimal("3000")),
            total_income=Decimal("3000"),
            total_expenses=Decimal("500"),
            remaining_income=Decimal("2500"),
        ),
    ]

    totals = calculate_yearly_totals(months)

    assert [item.year for item in totals] == [2023, 2024]
    assert totals[0].total_income == Decimal("6000")
    assert totals[0].total_expenses == Decimal("1500")
    assert totals[0].total_investments == Decimal("300")
    assert totals[0].net_balance == Decimal("4500")
    assert totals[1].net_balance == Decimal("2500")


def test_monthly_snapshot_excludes_investments_from_totals() -> None:
    income = Income(salary=Decimal("3000"), extra_income=Decimal("500"))
    expenses = [
        _expense("1200"),
        _expense("800", expense_type="investment", name="CDB"),
    ]

    snapshot = build_monthly_snapshot("maio", 2024, income, expenses)

    assert snapshot.total_income == Decimal("3500")
    assert snapshot.total_expenses == Decimal("1200")
    assert snapshot.remaining_income == Decimal("2300")
    assert len(snapshot.expenses) == 2


def test_budget_usage_splits_by_payment_method() -> None:
    income = Income(salary=Decimal("4000"), extra_income=Decimal("1000"))
    expenses = [
        _expense("1000"),
        _expense("1000", expense_type="investment", name="CDB"),
        _expense("250", payment_method="extra", expense_type="variable"),
    ]

    usage = compute_budget_usage(income, expenses)

    assert usage.salary_spent == Decimal("2000")
    assert usage.extra_spent == Decimal("250")
    assert usage.remaining_salary == Decimal("2000")
    assert usage.remaining_extra == Decimal("750")
    assert usage.salary_usage_percent == Decimal("50")
    assert usage.extra_usage_percent == Decimal("25")


def test_budget_usage_is_zero_without_income() -> None:
    usage = compute_budget_usage(
        Income(),
        [_expense("100", payment_method="extra")],
    )

    assert usage.extra_usage_percent == Decimal("0")
    assert usage.remaining_extra == Decimal("-100")


def test_sum_by_category_keeps_first_seen_order() -> None:
    totals = sum_by_category(
        [
            _expense("10", category="Lazer"),
            _expense("20", category="Moradia"),
            _expense("5", category="Lazer"),
        ]
    )

    assert list(totals.items()) == [
        ("Lazer", Decimal("15")),
        ("Moradia", Decimal("20")),
    ]


def test_empty_spreadsheet_is_zeroed() -> None:
    snapshot = empty_spreadsheet(NOW)

    assert snapshot.summary.total_income == Decimal("0")
    assert snapshot.summary.net_balance == Decimal("0")
    assert snapshot.sections.monthly.current_month == "maio"
    assert snapshot.sections.monthly.current_year == 2024
    assert snapshot.logs == []
