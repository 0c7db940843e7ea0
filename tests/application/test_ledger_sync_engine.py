"""Tests for the LedgerSyncEngine."""

from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.ledger_sync import LedgerSyncEngine
from src.domain.models import (
    ChangeDescriptor,
    ChangeMetadata,
    Expense,
    Income,
    MonthlyData,
)

START = datetime(2024, 5, 10, 8, 0, 0)


class _Clock:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return START + timedelta(seconds=self.calls)


def _engine(**kwargs) -> LedgerSyncEngine:
    kwargs.setdefault("logger", MagicMock())
    kwargs.setdefault("clock", _Clock())
    return LedgerSyncEngine.create(**kwargs)


def _expense(
    name: str,
    amount: str,
    expense_type: str = "fixed",
    balance: str | None = None,
) -> Expense:
    return Expense(
        id=name,
        name=name,
        amount=Decimal(amount),
        category="Outros",
        payment_method="salary",
        type=expense_type,
        date=START,
        investment_balance=Decimal(balance) if balance else None,
    )


def _income_change(salary: str, description: str = "") -> ChangeDescriptor:
    return ChangeDescriptor(
        section="income",
        action="update",
        data=Income(salary=Decimal(salary)),
        metadata=ChangeMetadata(
            month_year="maio 2024",
            description=description,
            amount=Decimal(salary),
        ),
        related_sections=["monthly", "summary"],
    )


def test_snapshot_exposes_last_hundred_entries_in_order() -> None:
    """Recording 150 changes leaves the newest 100 visible, oldest first."""
    engine = _engine()

    for index in range(150):
        engine.record(_income_change(str(index + 1), f"change {index}"))

    logs = engine.get_consolidated_data().logs
    assert len(logs) == 100
    assert logs[0].metadata.description == "change 50"
    assert logs[-1].metadata.description == "change 149"
    assert [entry.timestamp for entry in logs] == sorted(
        entry.timestamp for entry in logs
    )
    assert len(engine.get_logs()) == 150


def test_every_subscriber_receives_the_same_recompute() -> None:
    engine = _engine()
    received: list[list] = [[], [], []]
    for bucket in received:
        engine.subscribe(bucket.append)

    engine.record(_income_change("5000"))

    assert [len(bucket) for bucket in received] == [1, 1, 1]
    stamps = {bucket[0].summary.last_updated for bucket in received}
    assert len(stamps) == 1
    assert received[0][0] is engine.get_consolidated_data()


def test_failing_subscriber_does_not_block_the_others() -> None:
    logger = MagicMock()
    engine = _engine(logger=logger)
    received = []

    def _broken(_snapshot):
        raise ValueError("boom")

    engine.subscribe(_broken)
    engine.subscribe(received.append)

    engine.record(_income_change("100"))

    assert len(received) == 1
    assert "boom" in logger.error.call_args[0][0]


def test_unsubscribe_twice_is_a_no_op() -> None:
    engine = _engine()
    first: list = []
    second: list = []
    unsubscribe = engine.subscribe(first.append)
    engine.subscribe(second.append)

    unsubscribe()
    unsubscribe()
    engine.record(_income_change("100"))

    assert first == []
    assert len(second) == 1


def test_initialize_twice_gives_identical_totals() -> None:
    engine = _engine()
    income = Income(salary=Decimal("5000"), extra_income=Decimal("500"))
    expenses = [
        _expense("Aluguel", "1500"),
        _expense("Mercado", "600", expense_type="variable"),
        _expense("CDB", "1000", expense_type="investment", balance="1100"),
    ]

    first = engine.initialize_with_data(income, expenses, [])
    second = engine.initialize_with_data(income, expenses, [])

    for field in (
        "total_income",
        "total_expenses",
        "total_investments",
        "net_balance",
    ):
        assert getattr(first.summary, field) == getattr(second.summary, field)
    assert second.summary.total_income == Decimal("5500")
    assert second.summary.total_expenses == Decimal("2100")
    assert second.summary.total_investments == Decimal("1000")
    assert second.summary.net_balance == Decimal("3400")


def test_initialize_records_one_change_per_section() -> None:
    engine = _engine()

    snapshot = engine.initialize_with_data(
        Income(salary=Decimal("1000")),
        [_expense("CDB", "100", expense_type="investment", balance="110")],
        [],
    )

    assert [entry.section for entry in snapshot.logs] == [
        "income",
        "expense",
        "investment",
        "history",
    ]
    assert {entry.action for entry in snapshot.logs} == {"update"}
    assert snapshot.logs[0].metadata.month_year == "maio 2024"
    consolidated = snapshot.sections.investments.consolidated
    assert consolidated[0].performance == Decimal("10")
    assert snapshot.sections.monthly.monthly_data.expenses == []


def test_monthly_reset_replaces_the_current_month() -> None:
    engine = _engine()
    engine.record(
        ChangeDescriptor(
            section="monthly",
            action="reset",
            data=MonthlyData(month="junho", year=2024, income=Income()),
            metadata=ChangeMetadata(month_year="maio 2024"),
        )
    )

    monthly = engine.get_consolidated_data().sections.monthly
    assert monthly.current_month == "junho"
    assert monthly.current_year == 2024


def test_unknown_section_only_refreshes_summary() -> None:
    logger = MagicMock()
    engine = _engine(logger=logger)
    before = engine.get_consolidated_data()

    engine.record(
        ChangeDescriptor(
            section="budget",
            action="update",
            data=None,
            metadata=ChangeMetadata(month_year="maio 2024"),
        )
    )

    after = engine.get_consolidated_data()
    assert after.sections == before.sections
    assert after.summary.last_updated > before.summary.last_updated
    logger.warning.assert_called_once()


def test_record_after_dispose_raises() -> None:
    engine = _engine()
    engine.dispose()
    engine.dispose()

    assert engine.disposed is True
    with pytest.raises(RuntimeError):
        engine.record(_income_change("1"))


def test_dispose_flushes_retained_entries_to_archive() -> None:
    archive = MagicMock()
    archive.archive.return_value = 2
    engine = _engine(archive=archive)
    engine.record(_income_change("1"))
    engine.record(_income_change("2"))

    engine.dispose()

    archived = archive.archive.call_args[0][0]
    assert [entry.data.salary for entry in archived] == [
        Decimal("1"),
        Decimal("2"),
    ]
    assert engine.get_logs() == []


def test_created_engines_are_isolated() -> None:
    first = _engine()
    second = _engine()

    first.record(_income_change("100"))

    assert second.get_logs() == []
    assert second.get_consolidated_data().summary.total_income == Decimal("0")


def test_export_to_csv_lists_retained_entries() -> None:
    engine = _engine()
    engine.record(_income_change("5000", "Salário de maio"))

    lines = engine.export_to_csv().split("\n")

    assert lines[0] == (
        "Timestamp,Section,Action,Description,Amount,Category,Month/Year"
    )
    assert lines[1] == (
        "10/05/2024 08:00:02,income,update,Salário de maio,5000,,maio 2024"
    )
