"""Bounded change log for ledger mutations.

Entries live in a ring buffer of fixed capacity. Snapshots only expose the
most recent ``view_limit`` entries; entries pushed out of the buffer are
handed to an optional archive instead of being kept in memory.
"""

from collections import deque
from datetime import datetime
from typing import Callable
import uuid

from src.application.ports.change_log_archive import ChangeLogArchivePort
from src.domain.constants import DEFAULT_LOG_CAPACITY, DEFAULT_LOG_VIEW_LIMIT
from src.domain.models import ChangeDescriptor, ChangeLogEntry
from src.infrastructure.logging.logger import get_app_logger


def local_now() -> datetime:
    """Return the current local time as an aware datetime."""
    return datetime.now().astimezone()


def new_entry_id() -> str:
    """Return an identifier unique for the process lifetime."""
    return uuid.uuid4().hex


class ChangeLogRecorder:
    """Stamp changes and keep the most recent ones in a ring buffer."""

    def __init__(
        self,
        capacity: int = DEFAULT_LOG_CAPACITY,
        view_limit: int = DEFAULT_LOG_VIEW_LIMIT,
        archive: ChangeLogArchivePort | None = None,
        logger=None,
        clock: Callable[[], datetime] = local_now,
        id_factory: Callable[[], str] = new_entry_id,
    ) -> None:
        """Initialize the recorder.

        Args:
            capacity: Maximum entries kept in memory, raised to
                ``view_limit`` when smaller.
            view_limit: Number of most recent entries exposed by ``view``.
            archive: Optional sink for entries evicted from the buffer.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Callable returning the record timestamp.
            id_factory: Callable returning unique entry identifiers.
        """
        self._view_limit = view_limit
        self._entries: deque[ChangeLogEntry] = deque(
            maxlen=max(capacity, view_limit)
        )
        self._archive = archive
        self._pending_archive: list[ChangeLogEntry] = []
        self._logger = logger or get_app_logger()
        self._clock = clock
        self._id_factory = id_factory

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def record(self, change: ChangeDescriptor) -> ChangeLogEntry:
        """Stamp a change with an id and timestamp and append it.

        Args:
            change: Change reported by the caller.

        Returns:
            ChangeLogEntry: The appended entry.
        """
        entry = ChangeLogEntry(
            id=self._id_factory(),
            timestamp=self._clock(),
            section=change.section,
            action=change.action,
            data=change.data,
            metadata=change.metadata,
            related_sections=list(change.related_sections),
        )
        if len(self._entries) == self._entries.maxlen:
            self._evict(self._entries[0])
        self._entries.append(entry)
        return entry

    def view(self) -> list[ChangeLogEntry]:
        """Return the most recent entries, oldest first."""
        entries = list(self._entries)
        return entries[-self._view_limit:]

    def entries(self) -> list[ChangeLogEntry]:
        """Return every retained entry, oldest first."""
        return list(self._entries)

    def flush(self) -> int:
        """Archive every retained and pending entry, then clear the buffer.

        Returns:
            int: Number of entries handed to the archive.
        """
        if self._archive is None:
            self._entries.clear()
            return 0
        self._pending_archive.extend(self._entries)
        self._entries.clear()
        return self._archive_pending()

    def _evict(self, entry: ChangeLogEntry) -> None:
        if self._archive is None:
            return
        self._pending_archive.append(entry)
        self._archive_pending()

    def _archive_pending(self) -> int:
        if not self._pending_archive:
            return 0
        try:
            written = self._archive.archive(list(self._pending_archive))
        except Exception as exc:
            overflow = len(self._pending_archive) - self.capacity
            if overflow > 0:
                del self._pending_archive[:overflow]
                self._logger.warning(
                    f"Dropped {overflow} change log entries waiting "
                    f"for the archive"
                )
            self._logger.error(
                f"Failed to archive {len(self._pending_archive)} change log "
                f"entries: {exc}"
            )
            return 0
        self._pending_archive.clear()
        return written


__all__ = ["ChangeLogRecorder", "local_now", "new_entry_id"]
