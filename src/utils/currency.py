"""Brazilian currency, percentage and date formatting helpers."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
import re

from src.utils.decimal_utils import coerce_decimal

_SEPARATORS = str.maketrans({",": ".", ".": ","})
_THOUSANDS_ONLY = re.compile(r"^-?\d{1,3}(\.\d{3})+$")

_ENGLISH_MONTHS = {
    "january": "Janeiro",
    "february": "Fevereiro",
    "march": "Março",
    "april": "Abril",
    "may": "Maio",
    "june": "Junho",
    "july": "Julho",
    "august": "Agosto",
    "september": "Setembro",
    "october": "Outubro",
    "november": "Novembro",
    "december": "Dezembro",
}


def format_number(value, decimals: int = 2) -> str:
    """Format a number with Brazilian separators (``1.234,56``)."""
    amount = coerce_decimal(value)
    return f"{amount:,.{decimals}f}".translate(_SEPARATORS)


def format_currency(value) -> str:
    """Format an amount as Brazilian reais.

    Args:
        value: Amount to format.

    Returns:
        str: Value such as ``R$ 1.234,56`` or ``-R$ 10,00``.
    """
    amount = coerce_decimal(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}R$ {format_number(abs(amount))}"


def parse_currency(value: str | None) -> Decimal:
    """Parse a Brazilian formatted amount.

    Dots are read as thousands separators when a decimal comma is present
    or when they split the digits into groups of three (``1.234``).
    Unparseable input yields zero.

    Args:
        value: Raw user input such as ``R$ 1.234,56``.

    Returns:
        Decimal: Parsed amount.
    """
    if not value or not value.strip():
        return Decimal("0")
    cleaned = value.replace("R$", "").replace(" ", "").replace("\xa0", "")
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif _THOUSANDS_ONLY.match(cleaned):
        cleaned = cleaned.replace(".", "")
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return Decimal("0")


def format_percentage(value) -> str:
    """Format a percentage value (``10`` becomes ``10,0%``)."""
    amount = coerce_decimal(value)
    if not amount.is_finite():
        return "—"
    return f"{format_number(amount, decimals=1)}%"


def format_date(value: date | datetime) -> str:
    """Format a date as ``dd/mm/YYYY``."""
    return value.strftime("%d/%m/%Y")


def format_datetime(value: datetime) -> str:
    """Format a timestamp as ``dd/mm/YYYY HH:MM:SS``."""
    return value.strftime("%d/%m/%Y %H:%M:%S")


def translate_month(month: str) -> str:
    """Translate an English month name to Portuguese, else return it."""
    return _ENGLISH_MONTHS.get(month.lower(), month)


__all__ = [
    "format_number",
    "format_currency",
    "parse_currency",
    "format_percentage",
    "format_date",
    "format_datetime",
    "translate_month",
]
