"""Fault-signal sources — the external collaborators a reporter attaches to.

A source is anything exposing ``FaultChannel`` attributes:

* an *application* source has a single ``fault_occurred`` channel whose
  ``FaultEvent`` carries a writable ``handled`` flag;
* a *domain* source has a ``fault_observed`` channel (no acknowledgment)
  and a ``fault_terminal`` channel (``FaultEvent`` with ``handled``).

``RuntimeDomain`` and ``AsyncioApplication`` adapt the Python process and
an asyncio event loop to these shapes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from faultwarden.sources.channel import FaultChannel


@runtime_checkable
class ApplicationFaultSource(Protocol):
    """A source whose faults can be acknowledged as handled."""

    fault_occurred: FaultChannel


@runtime_checkable
class DomainFaultSource(Protocol):
    """A source with an observation channel and a terminal channel."""

    fault_observed: FaultChannel
    fault_terminal: FaultChannel


__all__ = ["ApplicationFaultSource", "DomainFaultSource", "FaultChannel"]
