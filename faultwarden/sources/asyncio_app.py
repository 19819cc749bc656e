"""AsyncioApplication — an event loop as an application-level fault source.

The loop's exception handler receives errors that escaped callbacks and
tasks.  While ``fault_occurred`` has subscribers this source installs its
own handler on the loop; when no subscriber marks the fault as handled,
the handler that was there before (or the loop's default handler) runs
as usual.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any

from faultwarden.models.events import FaultEvent
from faultwarden.sources.channel import FaultChannel

logger = logging.getLogger(__name__)


class AsyncioApplication:
    """Application-level fault source for one asyncio event loop.

    Parameters
    ----------
    loop:
        The loop to watch.  The reporter never owns its lifetime.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop
        self._lock = threading.Lock()
        self._installed = False
        self._previous_handler: Any = None
        self.fault_occurred = FaultChannel("fault_occurred", on_change=self._sync_handler)

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def handler_installed(self) -> bool:
        return self._installed

    def _sync_handler(self, _count: int) -> None:
        with self._lock:
            count = self.fault_occurred.subscriber_count
            if count and not self._installed:
                self._previous_handler = self._loop.get_exception_handler()
                self._loop.set_exception_handler(self._handle)
                self._installed = True
                logger.debug("AsyncioApplication: exception handler installed")
            elif not count and self._installed:
                if self._loop.get_exception_handler() == self._handle:
                    self._loop.set_exception_handler(self._previous_handler)
                self._previous_handler = None
                self._installed = False
                logger.debug("AsyncioApplication: exception handler restored")

    def _handle(self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        message = context.get("message", "Unhandled exception in event loop")
        exception = context.get("exception")
        if exception is None:
            exception = RuntimeError(message)

        metadata: dict[str, Any] = {"message": message}
        for key in ("task", "future", "handle"):
            if key in context:
                metadata[key] = repr(context[key])

        event = FaultEvent(exception=exception, metadata=metadata)
        self.fault_occurred.emit(event)
        if event.handled:
            return

        if self._previous_handler is not None:
            self._previous_handler(loop, context)
        else:
            loop.default_exception_handler(context)
