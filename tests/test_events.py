# tests/test_events.py

from __future__ import annotations

from taskboard.core.events import InvalidationSignal


def test_emit_reaches_only_subscribers_of_the_path() -> None:
    signal = InvalidationSignal()
    seen: list[str] = []
    signal.subscribe("/", lambda path: seen.append(f"list:{path}"))
    signal.subscribe("/other", lambda path: seen.append(f"other:{path}"))

    signal.emit("/")

    assert seen == ["list:/"]


def test_unsubscribe_stops_notifications() -> None:
    signal = InvalidationSignal()
    seen: list[str] = []
    unsubscribe = signal.subscribe("/", seen.append)

    signal.emit("/")
    unsubscribe()
    unsubscribe()
    signal.emit("/")

    assert seen == ["/"]


def test_failing_listener_does_not_block_others() -> None:
    signal = InvalidationSignal()
    seen: list[str] = []

    def broken(path: str) -> None:
        raise RuntimeError("boom")

    signal.subscribe("/", broken)
    signal.subscribe("/", seen.append)

    signal.emit("/")

    assert seen == ["/"]
