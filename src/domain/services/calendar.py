"""Month naming helpers shared by the ledger sections."""

from datetime import date, datetime

from src.domain.constants import MONTH_NAMES


def month_name(value: date | datetime) -> str:
    """Return the lower-case Portuguese month name of a date."""
    return MONTH_NAMES[value.month - 1]


def month_year_label(value: date | datetime) -> str:
    """Return the ``"<month> <year>"`` label used in change metadata."""
    return f"{month_name(value)} {value.year}"


def month_number(name: str) -> int | None:
    """Return the 1-based month number for a Portuguese month name.

    Args:
        name: Month name, case-insensitive.

    Returns:
        int | None: Month number, or None for unknown names.
    """
    cleaned = name.strip().lower()
    if cleaned not in MONTH_NAMES:
        return None
    return MONTH_NAMES.index(cleaned) + 1


def previous_month(value: date) -> date:
    """Return the first day of the month preceding ``value``."""
    if value.month == 1:
        return date(value.year - 1, 12, 1)
    return date(value.year, value.month - 1, 1)


def next_month(month: str, year: int) -> tuple[str, int]:
    """Return the month name and year following a named month.

    Unknown month names are returned unchanged.
    """
    number = month_number(month)
    if number is None:
        return month, year
    if number == 12:
        return MONTH_NAMES[0], year + 1
    return MONTH_NAMES[number], year


__all__ = [
    "month_name",
    "month_year_label",
    "month_number",
    "previous_month",
    "next_month",
]
