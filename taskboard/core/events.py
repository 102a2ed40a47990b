"""
View invalidation signal
The task service emits a path whenever the task collection changes;
views subscribed to that path refetch on their next render.
"""
import logging
from collections import defaultdict
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class InvalidationSignal:
    """
    Explicit publish/subscribe channel for view invalidation

    Usage:
        signal = InvalidationSignal()
        unsubscribe = signal.subscribe("/", lambda path: ...)
        signal.emit("/")
    """

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, path: str, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for a view path

        Returns:
            Callable that removes the listener again
        """
        self._listeners[path].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[path]:
                self._listeners[path].remove(listener)

        return unsubscribe

    def emit(self, path: str) -> None:
        """
        Notify every listener of path, in registration order

        A failing listener is logged and skipped; the mutation that
        triggered the signal has already been committed.
        """
        logger.debug(f"Invalidating view {path}")
        for listener in list(self._listeners[path]):
            try:
                listener(path)
            except Exception as e:
                logger.error(f"Invalidation listener failed for {path}: {e}", exc_info=True)
