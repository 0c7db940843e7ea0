"""CSV export of the change log.

Cells are joined with plain commas and never quoted, so a comma inside a
description shifts the following columns.
"""

from collections.abc import Iterable

from src.domain.models import ChangeLogEntry
from src.utils.currency import format_datetime

CSV_HEADERS = (
    "Timestamp",
    "Section",
    "Action",
    "Description",
    "Amount",
    "Category",
    "Month/Year",
)


def change_log_row(entry: ChangeLogEntry) -> list[str]:
    """Return the CSV cells of a single change log entry."""
    metadata = entry.metadata
    return [
        format_datetime(entry.timestamp),
        entry.section,
        entry.action,
        metadata.description or "",
        str(metadata.amount) if metadata.amount is not None else "",
        metadata.category or "",
        metadata.month_year,
    ]


def build_change_log_csv(entries: Iterable[ChangeLogEntry]) -> str:
    """Render change log entries as CSV text.

    Args:
        entries: Entries to export, oldest first.

    Returns:
        str: Header line followed by one line per entry.
    """
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(change_log_row(entry)) for entry in entries)
    return "\n".join(lines)


__all__ = ["CSV_HEADERS", "change_log_row", "build_change_log_csv"]
