"""SQLAlchemy-backed archive for change log entries evicted from memory."""

import json

from sqlalchemy import text

from src.application.ports.change_log_archive import ChangeLogArchivePort
from src.application.ports.database import DatabaseEnginePort
from src.domain.models import ChangeLogEntry
from src.domain.services.calendar import month_number

INSERT_ACTIVITY_LOG_SQL = text(
    """
    INSERT INTO activity_logs (
        user_id,
        section,
        action,
        description,
        amount,
        category,
        month,
        year,
        metadata,
        created_at
    )
    VALUES (
        :user_id,
        :section,
        :action,
        :description,
        :amount,
        :category,
        :month,
        :year,
        CAST(:metadata AS JSONB),
        :created_at
    )
    """
)


class SqlAlchemyChangeLogArchive(ChangeLogArchivePort):
    """Write change log entries to the activity_logs table."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        user_id: str | None = None,
    ) -> None:
        """Initialize the archive.

        Args:
            db_port: Port providing access to the ledger engine.
            user_id: Fallback user for entries without one.
        """
        self._db_port = db_port
        self._user_id = user_id

    def archive(self, entries: list[ChangeLogEntry]) -> int:
        if not entries:
            return 0
        rows = [self._to_row(entry) for entry in entries]
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(INSERT_ACTIVITY_LOG_SQL, rows)
        return len(rows)

    def _to_row(self, entry: ChangeLogEntry) -> dict[str, object]:
        metadata = entry.metadata
        month, year = _split_month_year(metadata.month_year)
        return {
            "user_id": metadata.user_id or self._user_id,
            "section": entry.section,
            "action": entry.action,
            "description": metadata.description or "",
            "amount": metadata.amount,
            "category": metadata.category,
            "month": month,
            "year": year,
            "metadata": json.dumps(
                {
                    "entry_id": entry.id,
                    "month_year": metadata.month_year,
                    "related_sections": list(entry.related_sections),
                }
            ),
            "created_at": entry.timestamp,
        }


def _split_month_year(label: str) -> tuple[str | None, int | None]:
    """Split a ``"<month> <year>"`` label into its parts."""
    month, _, raw_year = label.strip().rpartition(" ")
    if not month or month_number(month) is None or not raw_year.isdigit():
        return None, None
    return month, int(raw_year)


__all__ = ["SqlAlchemyChangeLogArchive"]
