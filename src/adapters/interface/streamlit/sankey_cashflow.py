"""Cashflow Sankey presentation logic for the Streamlit UI.

This module contains pure, testable transformations from a month of income
and expenses to a Sankey model and Plotly figure.

The Sankey layout is fixed to three columns:
    Fontes de renda -> Renda -> Destinos
where destinations are expense types (or categories) and investments, with
optional nodes for the leftover:
    - ``Saldo`` when income exceeds every outflow,
    - ``Déficit`` (optional) when outflows exceed income.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal
from typing import TYPE_CHECKING

from src.domain.constants import (
    EXPENSE_TYPE_FIXED,
    EXPENSE_TYPE_INVESTMENT,
    EXPENSE_TYPE_VARIABLE,
)
from src.domain.models import Expense, Income
from src.utils.decimal_utils import coerce_decimal

if TYPE_CHECKING:  # pragma: no cover
    import plotly.graph_objects as go


LEFT_PREFIX = "L:"
MIDDLE_PREFIX = "M:"
RIGHT_PREFIX = "R:"

SALARY_LABEL = "Salário"
EXTRA_LABEL = "Renda extra"
MIDDLE_LABEL = "Renda"
SAVINGS_LABEL = "Saldo"
DEFICIT_LABEL = "Déficit"

TYPE_LABELS = {
    EXPENSE_TYPE_FIXED: "Despesas fixas",
    EXPENSE_TYPE_VARIABLE: "Despesas variáveis",
    EXPENSE_TYPE_INVESTMENT: "Investimentos",
}

MIDDLE_KEY = f"{MIDDLE_PREFIX}INCOME"
SAVINGS_KEY = f"{RIGHT_PREFIX}SAVINGS"
DEFICIT_KEY = f"{LEFT_PREFIX}DEFICIT"

GroupBy = Literal["type", "category"]


@dataclass(frozen=True)
class SankeyLink:
    """Sankey link edge."""

    source: int
    target: int
    value: Decimal


@dataclass(frozen=True)
class SankeyModel:
    """Model used by the UI to render a Sankey with stable indices."""

    node_labels: list[str]
    node_keys: list[str]
    links: list[SankeyLink]
    side_by_key: dict[str, Literal["L", "M", "R"]]


def _group_outflows(
    expenses: list[Expense],
    group_by: GroupBy,
) -> list[tuple[str, Decimal]]:
    order: list[str] = []
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        amount = coerce_decimal(expense.amount)
        if amount == 0:
            continue
        if group_by == "category" and expense.type != EXPENSE_TYPE_INVESTMENT:
            group = expense.category
        else:
            group = TYPE_LABELS.get(expense.type, expense.type)
        if group not in totals:
            order.append(group)
            totals[group] = amount
        else:
            totals[group] += amount
    return [(group, totals[group]) for group in order]


def build_sankey_model(
    income: Income,
    expenses: list[Expense],
    group_by: GroupBy = "type",
    allow_negative_diff: bool = False,
) -> SankeyModel:
    """Build a stable Sankey model from a month of income and expenses.

    Args:
        income: Income of the month.
        expenses: Expenses of the month, investments included.
        group_by: Group outflows by expense type or by category.
            Investments always form a single node.
        allow_negative_diff: If true, show a "Déficit" node feeding the
            middle node when outflows exceed income.

    Returns:
        SankeyModel: Nodes and links in insertion order.
    """
    node_labels: list[str] = []
    node_keys: list[str] = []
    side_by_key: dict[str, Literal["L", "M", "R"]] = {}

    def add_node(key: str, label: str, side: Literal["L", "M", "R"]) -> int:
        if key in side_by_key:
            return node_keys.index(key)
        node_keys.append(key)
        node_labels.append(label)
        side_by_key[key] = side
        return len(node_keys) - 1

    links: list[SankeyLink] = []
    sources = [
        (f"{LEFT_PREFIX}SALARY", SALARY_LABEL, income.salary),
        (f"{LEFT_PREFIX}EXTRA", EXTRA_LABEL, income.extra_income),
    ]
    left_links: list[tuple[int, Decimal]] = []
    for key, label, amount in sources:
        if amount > 0:
            left_links.append((add_node(key, label, "L"), amount))

    middle_index = add_node(MIDDLE_KEY, MIDDLE_LABEL, "M")
    for source, amount in left_links:
        links.append(
            SankeyLink(source=source, target=middle_index, value=amount)
        )

    total_out = Decimal("0")
    for group, amount in _group_outflows(expenses, group_by):
        target = add_node(f"{RIGHT_PREFIX}{group}", group, "R")
        links.append(
            SankeyLink(source=middle_index, target=target, value=amount)
        )
        total_out += amount

    diff = income.total - total_out
    if diff > 0:
        savings_index = add_node(SAVINGS_KEY, SAVINGS_LABEL, "R")
        links.append(
            SankeyLink(source=middle_index, target=savings_index, value=diff)
        )
    if diff < 0 and allow_negative_diff:
        deficit_index = add_node(DEFICIT_KEY, DEFICIT_LABEL, "L")
        links.append(
            SankeyLink(
                source=deficit_index,
                target=middle_index,
                value=abs(diff),
            )
        )

    return SankeyModel(
        node_labels=node_labels,
        node_keys=node_keys,
        links=links,
        side_by_key=side_by_key,
    )


def build_plotly_figure(model: SankeyModel) -> "go.Figure":
    """Build a Plotly Sankey figure from a Sankey model.

    Args:
        model: Precomputed Sankey model.

    Returns:
        Plotly figure ready to be displayed in Streamlit.
    """
    node_x: list[float] = []
    node_y: list[float] = []
    left_count = sum(1 for side in model.side_by_key.values() if side == "L")
    right_count = sum(
        1 for side in model.side_by_key.values() if side == "R"
    )

    left_seen = 0
    right_seen = 0
    for key in model.node_keys:
        side = model.side_by_key.get(key, "M")
        if side == "L":
            node_x.append(0.02)
            node_y.append((left_seen + 1) / (left_count + 1))
            left_seen += 1
        elif side == "R":
            node_x.append(0.98)
            node_y.append((right_seen + 1) / (right_count + 1))
            right_seen += 1
        else:
            node_x.append(0.5)
            node_y.append(0.5)

    import plotly.graph_objects as go

    fig = go.Figure(
        data=[
            go.Sankey(
                arrangement="snap",
                node=dict(
                    pad=10,
                    thickness=12,
                    label=model.node_labels,
                    x=node_x,
                    y=node_y,
                    line=dict(color="rgba(0,0,0,0.25)", width=0.5),
                ),
                link=dict(
                    source=[link.source for link in model.links],
                    target=[link.target for link in model.links],
                    value=[float(link.value) for link in model.links],
                ),
                textfont=dict(size=12),
            )
        ]
    )
    fig.update_layout(
        margin=dict(l=8, r=8, t=8, b=8),
        height=520,
    )
    return fig


__all__ = [
    "SankeyLink",
    "SankeyModel",
    "build_sankey_model",
    "build_plotly_figure",
]
