"""Tests for the SnapshotNotifier fan-out."""

from unittest.mock import MagicMock

from src.application.use_cases.notifications import SnapshotNotifier


def test_notify_calls_subscribers_in_order() -> None:
    notifier = SnapshotNotifier(logger=MagicMock())
    calls: list[tuple[str, object]] = []
    notifier.subscribe(lambda snapshot: calls.append(("a", snapshot)))
    notifier.subscribe(lambda snapshot: calls.append(("b", snapshot)))

    delivered = notifier.notify("snapshot")

    assert delivered == 2
    assert calls == [("a", "snapshot"), ("b", "snapshot")]


def test_failures_are_logged_and_not_counted() -> None:
    logger = MagicMock()
    notifier = SnapshotNotifier(logger=logger)
    good = MagicMock()
    notifier.subscribe(MagicMock(side_effect=KeyError("missing")))
    notifier.subscribe(good)

    delivered = notifier.notify("snapshot")

    assert delivered == 1
    good.assert_called_once_with("snapshot")
    logger.error.assert_called_once()


def test_unsubscribe_removes_only_its_registration() -> None:
    notifier = SnapshotNotifier(logger=MagicMock())
    callback = MagicMock()
    first = notifier.subscribe(callback)
    notifier.subscribe(callback)

    first()
    first()

    assert len(notifier) == 1
    notifier.notify("snapshot")
    callback.assert_called_once_with("snapshot")


def test_subscriber_may_unsubscribe_during_notify() -> None:
    notifier = SnapshotNotifier(logger=MagicMock())
    later = MagicMock()
    handles = {}

    def _once(_snapshot) -> None:
        handles["self"]()

    handles["self"] = notifier.subscribe(_once)
    notifier.subscribe(later)

    assert notifier.notify("snapshot") == 2
    assert len(notifier) == 1
    later.assert_called_once()


def test_clear_drops_every_subscriber() -> None:
    notifier = SnapshotNotifier(logger=MagicMock())
    notifier.subscribe(MagicMock())

    notifier.clear()

    assert len(notifier) == 0
    assert notifier.notify("snapshot") == 0
