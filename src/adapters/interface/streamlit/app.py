"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

import streamlit as st
import altair as alt

from src.adapters.interface.streamlit.sankey_cashflow import (
    build_plotly_figure,
    build_sankey_model,
)
from src.application.use_cases.load_ledger import LoadLedgerUseCase
from src.domain.constants import MONTH_NAMES
from src.domain.models import (
    ChangeLogEntry,
    ConsolidatedInvestment,
    ConsolidatedSpreadsheet,
    YearlyTotals,
)
from src.domain.services.calendar import month_name
from src.domain.services.finance import compute_budget_usage, sum_by_category
from src.infrastructure.container import (
    build_ledger_repository,
    build_ledger_sync_engine,
)
from src.infrastructure.logging.logger import get_usage_logger
from src.utils.currency import (
    format_currency,
    format_datetime,
    format_percentage,
)

SECTION_LABELS = {
    "income": "Renda",
    "expense": "Despesas",
    "investment": "Investimentos",
    "monthly": "Mês",
    "history": "Histórico",
}


def _fetch_ledger(
    month: str,
    year: int,
) -> tuple[ConsolidatedSpreadsheet, str]:
    """Load a month through a fresh engine and collect its last snapshot."""
    engine = build_ledger_sync_engine(with_archive=False)
    repository = build_ledger_repository()
    received: list[ConsolidatedSpreadsheet] = []
    unsubscribe = engine.subscribe(received.append)
    try:
        use_case = LoadLedgerUseCase(
            ledger_repository=repository,
            engine=engine,
        )
        use_case.execute(month=month, year=year)
        csv_text = engine.export_to_csv()
    finally:
        unsubscribe()
        engine.dispose()
    snapshot = received[-1] if received else engine.get_consolidated_data()
    return snapshot, csv_text


@st.cache_data(show_spinner=False, ttl=60)
def _load_ledger(
    month: str,
    year: int,
) -> tuple[ConsolidatedSpreadsheet, str]:
    """Cached wrapper around _fetch_ledger for Streamlit sessions."""
    return _fetch_ledger(month, year)


def _prepare_donut_chart_data(
    totals: dict[str, Decimal],
    max_categories: int = 6,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Outros grouping.

    Args:
        totals: Amount per category.
        max_categories: Maximum categories to keep before grouping.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    sorted_items = sorted(
        totals.items(),
        key=lambda item: item[1],
        reverse=True,
    )
    top_items = sorted_items[:max_categories]
    other_amount = sum(
        (amount for _category, amount in sorted_items[max_categories:]),
        start=Decimal("0"),
    )
    if other_amount != 0:
        top_items = [*top_items, ("Outros", other_amount)]
    total_amount = sum(
        (amount for _category, amount in sorted_items),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for category, amount in top_items:
        share = (
            (amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": category,
                "amount": float(amount),
                "amount_label": format_currency(amount),
                "share_label": format_percentage(share),
            }
        )
    return data, total_amount


def _investments_table(
    investments: Sequence[ConsolidatedInvestment],
) -> list[dict[str, str]]:
    """Return display rows for consolidated investments."""
    return [
        {
            "Investimento": item.name,
            "Total investido": format_currency(item.total_invested),
            "Saldo atual": format_currency(item.current_balance),
            "Rentabilidade": format_percentage(item.performance),
        }
        for item in investments
    ]


def _history_table(totals: Sequence[YearlyTotals]) -> list[dict[str, str]]:
    """Return display rows for yearly totals."""
    return [
        {
            "Ano": str(item.year),
            "Renda": format_currency(item.total_income),
            "Despesas": format_currency(item.total_expenses),
            "Investimentos": format_currency(item.total_investments),
            "Saldo": format_currency(item.net_balance),
        }
        for item in totals
    ]


def _logs_table(logs: Sequence[ChangeLogEntry]) -> list[dict[str, str]]:
    """Return display rows for the change log, newest first."""
    return [
        {
            "Data": format_datetime(entry.timestamp),
            "Seção": SECTION_LABELS.get(entry.section, entry.section),
            "Ação": entry.action,
            "Descrição": entry.metadata.description or "",
            "Valor": (
                format_currency(entry.metadata.amount)
                if entry.metadata.amount is not None
                else ""
            ),
        }
        for entry in reversed(logs)
    ]


def _progress_value(percent: Decimal) -> float:
    """Clamp a usage percentage to the 0..1 range of a progress bar."""
    return max(0.0, min(float(percent), 100.0)) / 100


def _render_summary(snapshot: ConsolidatedSpreadsheet) -> None:
    """Render the headline metrics and budget usage."""
    summary = snapshot.summary
    income_col, expenses_col, investments_col, balance_col = st.columns(4)
    income_col.metric("Renda total", format_currency(summary.total_income))
    expenses_col.metric(
        "Despesas totais",
        format_currency(summary.total_expenses),
    )
    investments_col.metric(
        "Investimentos",
        format_currency(summary.total_investments),
    )
    balance_col.metric("Saldo restante", format_currency(summary.net_balance))

    monthly = snapshot.sections.monthly.monthly_data
    expenses = [
        *monthly.expenses,
        *snapshot.sections.investments.transactions,
    ]
    usage = compute_budget_usage(monthly.income, expenses)
    st.subheader("Uso da renda")
    salary_col, extra_col = st.columns(2)
    salary_col.caption(
        f"Salário: {format_percentage(usage.salary_usage_percent)} usado, "
        f"restam {format_currency(usage.remaining_salary)}"
    )
    salary_col.progress(_progress_value(usage.salary_usage_percent))
    extra_col.caption(
        f"Renda extra: {format_percentage(usage.extra_usage_percent)} usado, "
        f"restam {format_currency(usage.remaining_extra)}"
    )
    extra_col.progress(_progress_value(usage.extra_usage_percent))


def _render_category_chart(
    totals: dict[str, Decimal],
    title: str,
    chart_size: int = 320,
) -> None:
    """Render a donut chart of expense amounts by category."""
    if not totals:
        st.info("Nenhuma despesa registrada neste mês.")
        return
    data, _total = _prepare_donut_chart_data(totals)
    chart = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=6,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            legend=alt.Legend(orient="bottom", title=None, columns=3),
        ),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    ).properties(
        width=chart_size,
        height=chart_size,
    )
    st.subheader(title)
    st.altair_chart(chart, width="stretch")


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Controle Financeiro", layout="wide")
    st.title("Controle Financeiro")

    today = date.today()
    month = st.sidebar.selectbox(
        "Mês",
        list(MONTH_NAMES),
        index=MONTH_NAMES.index(month_name(today)),
    )
    year = int(
        st.sidebar.number_input(
            "Ano",
            min_value=2000,
            max_value=2100,
            value=today.year,
            step=1,
        )
    )
    page = st.sidebar.selectbox(
        "Página",
        ["Resumo", "Investimentos", "Histórico", "Registro"],
    )
    get_usage_logger().info(f"Dashboard page={page} month={month} {year}")

    try:
        snapshot, csv_text = _load_ledger(month, year)
    except RuntimeError as exc:
        st.error(f"Não foi possível carregar os dados: {exc}")
        return

    if page == "Resumo":
        _render_summary(snapshot)
        monthly = snapshot.sections.monthly.monthly_data
        chart_col, flow_col = st.columns(2)
        with chart_col:
            _render_category_chart(
                sum_by_category(monthly.expenses),
                "Despesas por categoria",
            )
        with flow_col:
            st.subheader("Fluxo da renda")
            model = build_sankey_model(
                monthly.income,
                [
                    *monthly.expenses,
                    *snapshot.sections.investments.transactions,
                ],
                allow_negative_diff=True,
            )
            st.plotly_chart(build_plotly_figure(model), width="stretch")
    elif page == "Investimentos":
        consolidated = snapshot.sections.investments.consolidated
        st.caption(f"{len(consolidated)} investimentos consolidados")
        if not consolidated:
            st.warning("Nenhum investimento registrado.")
            return
        st.dataframe(
            _investments_table(consolidated),
            width="stretch",
            hide_index=True,
        )
    elif page == "Histórico":
        yearly_totals = snapshot.sections.history.yearly_totals
        if not yearly_totals:
            st.warning("Nenhum mês fechado ainda.")
            return
        st.dataframe(
            _history_table(yearly_totals),
            width="stretch",
            hide_index=True,
        )
    else:
        st.caption(f"{len(snapshot.logs)} alterações recentes")
        st.dataframe(
            _logs_table(snapshot.logs),
            width="stretch",
            hide_index=True,
        )
        st.download_button(
            "Exportar CSV",
            data=csv_text,
            file_name=f"registro_{month}_{year}.csv",
            mime="text/csv",
        )


if __name__ == "__main__":  # pragma: no cover
    main()
