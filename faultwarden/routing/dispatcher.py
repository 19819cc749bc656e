"""SinkDispatcher — routes a fault record to every configured sink.

Sinks are called in registration order.  A sink that raises despite the
``BaseSink`` contract is logged and skipped; the remaining sinks still
receive the record and ``dispatch`` itself never raises.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from faultwarden.models.fault import FaultRecord

if TYPE_CHECKING:
    from faultwarden.routing.sinks import BaseSink

logger = logging.getLogger(__name__)


class SinkDispatcher:
    """Fans a fault record out to all registered sinks.

    Usage
    -----
    >>> dispatcher = SinkDispatcher()
    >>> dispatcher.register_sink(console_sink)
    >>> dispatcher.register_sink(remote_sink)
    >>> dispatcher.dispatch(record)
    ['console', 'remote']
    """

    def __init__(self, sinks: list[BaseSink] | None = None) -> None:
        self._sinks: list[BaseSink] = []
        for sink in sinks or []:
            self.register_sink(sink)

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    def register_sink(self, sink: BaseSink) -> None:
        """Register a sink.  Duplicate registration of one instance is ignored."""
        if sink not in self._sinks:
            self._sinks.append(sink)
            logger.debug("Registered sink: %s", sink.sink_name)

    def unregister_sink(self, sink: BaseSink) -> None:
        """Remove a previously registered sink."""
        try:
            self._sinks.remove(sink)
            logger.debug("Unregistered sink: %s", sink.sink_name)
        except ValueError:
            pass

    @property
    def registered_sinks(self) -> list[BaseSink]:
        """Return a copy of the registered sink list."""
        return list(self._sinks)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, record: FaultRecord) -> list[str]:
        """Deliver *record* to every sink.

        Returns the names of the sinks whose ``deliver`` returned normally.
        """
        if not self._sinks:
            logger.debug("No sinks registered — fault %s not delivered", record.fault_id)
            return []

        delivered: list[str] = []
        for sink in list(self._sinks):
            try:
                sink.deliver(record)
                delivered.append(sink.sink_name)
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "Sink %s failed for fault %s: %s",
                    sink.sink_name,
                    record.fault_id,
                    exc,
                )
        return delivered
