"""Domain services consolidating investment transactions by name."""

from collections import OrderedDict
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from src.domain.models import ConsolidatedInvestment, Expense
from src.domain.services.normalization import normalize_investment_key
from src.utils.decimal_utils import coerce_decimal


@dataclass
class _InvestmentPosition:
    total_invested: Decimal
    current_balance: Decimal
    last_entry: Expense


def consolidate_investments(
    investments: Iterable[Expense],
) -> list[ConsolidatedInvestment]:
    """Fold investment transactions into one running position per name.

    Transactions are grouped by lower-cased name. Every amount adds to the
    invested total. The balance of a new group is seeded from its first
    entry (``investment_balance`` when set, otherwise ``amount``) and is only
    overwritten by later entries that carry an ``investment_balance``.

    Args:
        investments: Investment expenses in chronological order.

    Returns:
        list[ConsolidatedInvestment]: Positions in first-seen order.
    """
    positions: OrderedDict[str, _InvestmentPosition] = OrderedDict()
    for expense in investments:
        key = normalize_investment_key(expense.name)
        amount = coerce_decimal(expense.amount)
        position = positions.get(key)
        if position is None:
            seed = (
                coerce_decimal(expense.investment_balance)
                if expense.investment_balance is not None
                else amount
            )
            positions[key] = _InvestmentPosition(
                total_invested=amount,
                current_balance=seed,
                last_entry=expense,
            )
            continue
        position.total_invested += amount
        if expense.investment_balance is not None:
            position.current_balance = coerce_decimal(
                expense.investment_balance
            )
            position.last_entry = expense

    return [
        ConsolidatedInvestment(
            name=position.last_entry.name,
            total_invested=position.total_invested,
            current_balance=position.current_balance,
            performance=compute_performance(
                position.current_balance,
                position.total_invested,
            ),
        )
        for position in positions.values()
    ]


def compute_performance(
    current_balance: Decimal,
    total_invested: Decimal,
) -> Decimal:
    """Return the percentage gain of a position over what was invested.

    A zero invested total yields ``Infinity``, ``-Infinity`` or ``NaN``
    following the sign of the balance; the value is not clamped. A ``NaN``
    operand yields ``NaN``.
    """
    if current_balance.is_nan() or total_invested.is_nan():
        return Decimal("NaN")
    if total_invested == 0:
        if current_balance > 0:
            return Decimal("Infinity")
        if current_balance < 0:
            return Decimal("-Infinity")
        return Decimal("NaN")
    return (
        (current_balance - total_invested) / total_invested * Decimal("100")
    )


__all__ = ["consolidate_investments", "compute_performance"]
