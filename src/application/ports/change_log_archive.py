"""Port receiving change log entries evicted from memory."""

from typing import Protocol

from src.domain.models import ChangeLogEntry


class ChangeLogArchivePort(Protocol):
    """Port exposing durable storage for evicted change log entries."""

    def archive(self, entries: list[ChangeLogEntry]) -> int:
        """Store entries and return how many were written."""


__all__ = ["ChangeLogArchivePort"]
