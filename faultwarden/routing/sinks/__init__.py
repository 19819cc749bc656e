"""Fault sinks: the destinations a captured fault can be delivered to.

A sink turns a ``FaultRecord`` into output somewhere, either text on the
diagnostic stream or a JSON body posted to a collector.  The reporter
hands every record to each active sink in turn.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from faultwarden.models.fault import FaultRecord


@runtime_checkable
class BaseSink(Protocol):
    """Shape shared by every fault destination.

    ``sink_name`` labels the sink in logs and in the list of sinks that
    took a record (``"console"``, ``"remote"``, ...).
    """

    @property
    def sink_name(self) -> str:
        ...

    def deliver(self, record: FaultRecord) -> None:
        """Push *record* to this destination.

        A sink that cannot deliver keeps the failure to itself (renders or
        logs it) and returns; the fault being reported must never be
        replaced by a new one raised from here.
        """
        ...
