"""FaultChannel — a thread-safe subscribe/unsubscribe/emit event hook."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class FaultChannel:
    """A named list of handlers that a fault-signal source emits to.

    Handlers are invoked in subscription order on the emitting thread.
    ``emit`` iterates over a snapshot, so a handler may unsubscribe
    itself (or others) while the event is being delivered.

    Parameters
    ----------
    name:
        Used in log messages.
    on_change:
        Called with the new subscriber count after every successful
        subscribe or unsubscribe, outside the channel lock.
    """

    def __init__(
        self,
        name: str,
        on_change: Callable[[int], None] | None = None,
    ) -> None:
        self.name = name
        self._handlers: list[Handler] = []
        self._lock = threading.Lock()
        self._on_change = on_change

    def subscribe(self, handler: Handler) -> None:
        with self._lock:
            self._handlers.append(handler)
            count = len(self._handlers)
        self._changed(count)

    def unsubscribe(self, handler: Handler) -> None:
        """Remove one registration of *handler*; unknown handlers are ignored."""
        with self._lock:
            try:
                self._handlers.remove(handler)
            except ValueError:
                return
            count = len(self._handlers)
        self._changed(count)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)

    def emit(self, event: Any) -> None:
        """Invoke every handler with *event*.

        A raising handler is logged and does not stop the others.
        """
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(event)
            except Exception:  # noqa: BLE001
                logger.exception("Handler on channel %s raised", self.name)

    def _changed(self, count: int) -> None:
        if self._on_change is not None:
            self._on_change(count)
