"""Domain validation helpers."""

from logging import Logger

from src.domain.constants import (
    EXPENSE_TYPE_INVESTMENT,
    EXPENSE_TYPES,
    PAYMENT_METHODS,
)
from src.domain.models import Expense
from src.utils.decimal_utils import coerce_decimal


def validate_expense(expense: Expense, logger: Logger) -> bool:
    """Warn when an expense violates the ledger conventions.

    Nothing is rejected: aggregates are computed from whatever is given.

    Args:
        expense: Expense about to be recorded.
        logger: Logger used for warnings.

    Returns:
        bool: True when no convention was violated.
    """
    valid = True
    if coerce_decimal(expense.amount) <= 0:
        logger.warning(
            f"Expense amount is not positive for id={expense.id}: "
            f"{expense.amount}"
        )
        valid = False
    if expense.type not in EXPENSE_TYPES:
        logger.warning(
            f"Unknown expense type for id={expense.id}: {expense.type}"
        )
        valid = False
    if expense.payment_method not in PAYMENT_METHODS:
        logger.warning(
            f"Unknown payment method for id={expense.id}: "
            f"{expense.payment_method}"
        )
        valid = False
    if (
        expense.investment_balance is not None
        and expense.type != EXPENSE_TYPE_INVESTMENT
    ):
        logger.warning(
            f"Investment balance set on a {expense.type} expense "
            f"id={expense.id}"
        )
        valid = False
    return valid


def validate_expenses(expenses: list[Expense], logger: Logger) -> int:
    """Validate every expense and return how many violated a convention."""
    return sum(
        1 for expense in expenses if not validate_expense(expense, logger)
    )


__all__ = ["validate_expense", "validate_expenses"]
