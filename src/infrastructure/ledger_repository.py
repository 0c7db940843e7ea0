"""SQLAlchemy-backed repository for ledger records."""

from collections import defaultdict
from datetime import datetime

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.constants import EXPENSE_TYPE_INVESTMENT
from src.domain.models import Expense, Income, MonthlyData
from src.domain.services.calendar import month_number
from src.domain.services.finance import (
    build_expenses_section,
    compute_budget_usage,
    filter_by_type,
    sum_amounts,
)
from src.domain.services.normalization import (
    normalize_expense_type,
    normalize_payment_method,
)
from src.utils.decimal_utils import coerce_decimal, coerce_optional_decimal

DELETE_MONTHLY_SUMMARY_SQL = """
DELETE FROM monthly_summary
WHERE month = :month AND year = :year
"""

INSERT_MONTHLY_SUMMARY_SQL = text(
    """
    INSERT INTO monthly_summary (
        user_id,
        month,
        year,
        total_income,
        total_expenses,
        total_fixed_expenses,
        total_variable_expenses,
        total_investment_expenses,
        remaining_income,
        salary_usage_percent,
        extra_usage_percent
    )
    VALUES (
        :user_id,
        :month,
        :year,
        :total_income,
        :total_expenses,
        :total_fixed_expenses,
        :total_variable_expenses,
        :total_investment_expenses,
        :remaining_income,
        :salary_usage_percent,
        :extra_usage_percent
    )
    """
)


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository backed by SQLAlchemy for income, expenses and history."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        user_id: str | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            user_id: Optional user whose rows are read and written.
        """
        self._db_port = db_port
        self._user_id = user_id

    def fetch_income(self, month: str, year: int) -> Income:
        query = self._build_query(
            """
            SELECT salary, extra_income
            FROM monthly_income
            WHERE month = :month AND year = :year
            """
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(
                query,
                self._build_params(month=month, year=year),
            ).first()
        if row is None:
            return Income()
        return Income(
            salary=coerce_decimal(row.salary),
            extra_income=coerce_decimal(row.extra_income),
        )

    def fetch_expenses(self, month: str, year: int) -> list[Expense]:
        query = self._build_query(
            """
            SELECT id, name, amount, category, payment_method, expense_type,
                   investment_balance, date
            FROM expenses
            WHERE month = :month AND year = :year
            """,
            order_by="date, created_at",
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                query,
                self._build_params(month=month, year=year),
            ).all()
        return [self._to_expense(row) for row in rows]

    def fetch_monthly_history(self) -> list[MonthlyData]:
        summaries_query = self._build_query(
            """
            SELECT s.month, s.year, s.total_income, s.total_expenses,
                   s.remaining_income,
                   COALESCE(i.salary, 0) AS salary,
                   COALESCE(i.extra_income, 0) AS extra_income
            FROM monthly_summary s
            LEFT JOIN monthly_income i
              ON i.month = s.month
             AND i.year = s.year
             AND i.user_id IS NOT DISTINCT FROM s.user_id
            WHERE 1=1
            """,
            user_column="s.user_id",
        )
        expenses_query = self._build_query(
            """
            SELECT id, name, amount, category, payment_method, expense_type,
                   investment_balance, date, month, year
            FROM expenses
            WHERE 1=1
            """,
            order_by="date, created_at",
        )
        params = self._build_params()
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            summary_rows = conn.execute(summaries_query, params).all()
            expense_rows = conn.execute(expenses_query, params).all()

        expenses_by_month: dict[tuple[str, int], list[Expense]] = (
            defaultdict(list)
        )
        for row in expense_rows:
            expenses_by_month[(row.month, row.year)].append(
                self._to_expense(row)
            )

        months = [
            MonthlyData(
                month=row.month,
                year=row.year,
                income=Income(
                    salary=coerce_decimal(row.salary),
                    extra_income=coerce_decimal(row.extra_income),
                ),
                expenses=expenses_by_month.get((row.month, row.year), []),
                total_income=coerce_decimal(row.total_income),
                total_expenses=coerce_decimal(row.total_expenses),
                remaining_income=coerce_decimal(row.remaining_income),
            )
            for row in summary_rows
        ]
        return sorted(
            months,
            key=lambda item: (item.year, month_number(item.month) or 0),
        )

    def save_monthly_summary(self, monthly_data: MonthlyData) -> None:
        expenses_section = build_expenses_section(
            monthly_data.expenses,
            datetime.now(),
        )
        investments = filter_by_type(
            monthly_data.expenses,
            EXPENSE_TYPE_INVESTMENT,
        )
        usage = compute_budget_usage(
            monthly_data.income,
            monthly_data.expenses,
        )
        delete_query = self._build_summary_delete()
        params = {
            "user_id": self._user_id,
            "month": monthly_data.month,
            "year": monthly_data.year,
            "total_income": monthly_data.total_income,
            "total_expenses": monthly_data.total_expenses,
            "total_fixed_expenses": expenses_section.total_fixed,
            "total_variable_expenses": expenses_section.total_variable,
            "total_investment_expenses": sum_amounts(investments),
            "remaining_income": monthly_data.remaining_income,
            "salary_usage_percent": usage.salary_usage_percent,
            "extra_usage_percent": usage.extra_usage_percent,
        }
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(
                delete_query,
                self._build_params(
                    month=monthly_data.month,
                    year=monthly_data.year,
                ),
            )
            conn.execute(INSERT_MONTHLY_SUMMARY_SQL, params)

    def _build_summary_delete(self):
        """Return the DELETE scoped to this repository's user.

        Without a configured user only rows without a user are replaced, so
        closing a month never removes another user's summary.
        """
        if self._user_id:
            return text(DELETE_MONTHLY_SUMMARY_SQL + " AND user_id = :user_id")
        return text(DELETE_MONTHLY_SUMMARY_SQL + " AND user_id IS NULL")

    def _build_query(
        self,
        base_sql: str,
        order_by: str | None = None,
        user_column: str = "user_id",
    ):
        if self._user_id:
            base_sql += f" AND {user_column} = :user_id"
        if order_by:
            base_sql += f" ORDER BY {order_by}"
        return text(base_sql)

    def _build_params(self, **params) -> dict[str, object]:
        if self._user_id:
            params["user_id"] = self._user_id
        return params

    @staticmethod
    def _to_expense(row) -> Expense:
        """Convert a database row into an Expense.

        Args:
            row: Row exposing the expenses table columns.

        Returns:
            Expense: Normalized expense record.
        """
        raw_date = row.date
        if isinstance(raw_date, str):
            raw_date = datetime.fromisoformat(raw_date)
        return Expense(
            id=str(row.id),
            name=row.name,
            amount=coerce_decimal(row.amount),
            category=row.category,
            payment_method=normalize_payment_method(row.payment_method),
            type=normalize_expense_type(row.expense_type),
            date=raw_date,
            investment_balance=coerce_optional_decimal(
                row.investment_balance
            ),
        )


__all__ = ["SqlAlchemyLedgerRepository"]
