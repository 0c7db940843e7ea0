"""Synchronous fan-out of ledger snapshots to subscribers."""

from typing import Callable

from src.domain.models import ConsolidatedSpreadsheet
from src.infrastructure.logging.logger import get_app_logger

SnapshotCallback = Callable[[ConsolidatedSpreadsheet], None]


class SnapshotNotifier:
    """Ordered list of subscribers notified with the full snapshot.

    Each callback runs inside its own failure boundary: an exception is
    logged and the remaining subscribers are still notified.
    """

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()
        self._subscriptions: list[tuple[object, SnapshotCallback]] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Register a callback.

        Args:
            callback: Called with every new snapshot.

        Returns:
            Callable[[], None]: Removes this registration; later calls are
            no-ops.
        """
        token = object()
        self._subscriptions.append((token, callback))

        def unsubscribe() -> None:
            for index, (registered, _callback) in enumerate(
                self._subscriptions
            ):
                if registered is token:
                    del self._subscriptions[index]
                    return

        return unsubscribe

    def notify(self, snapshot: ConsolidatedSpreadsheet) -> int:
        """Call every subscriber in subscription order.

        Args:
            snapshot: Snapshot passed to each subscriber.

        Returns:
            int: Number of subscribers that completed without raising.
        """
        delivered = 0
        for _token, callback in list(self._subscriptions):
            try:
                callback(snapshot)
            except Exception as exc:
                name = getattr(callback, "__qualname__", repr(callback))
                self._logger.error(f"Subscriber {name} failed: {exc}")
                continue
            delivered += 1
        return delivered

    def clear(self) -> None:
        """Drop every subscriber."""
        self._subscriptions.clear()


__all__ = ["SnapshotNotifier", "SnapshotCallback"]
