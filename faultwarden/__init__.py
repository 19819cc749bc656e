"""Faultwarden: unhandled-exception interception and reporting.

Attach a ``FaultReporter`` to the process (``RuntimeDomain``) or to an
asyncio event loop (``AsyncioApplication``); every fault that reaches
them is rendered to stderr and/or POSTed as versioned JSON to a
collector, and the reporter can tell the source to treat it as handled.
"""

__version__ = "0.2.0"
__description__ = "Process-wide unhandled-exception interception and reporting"

from faultwarden.core.reporter import FaultReporter
from faultwarden.models import (
    AttachmentKind,
    FaultEvent,
    FaultObservedEvent,
    FaultRecord,
    HandledHint,
    ReporterConfiguration,
)
from faultwarden.sources.asyncio_app import AsyncioApplication
from faultwarden.sources.runtime import RuntimeDomain

__all__ = [
    "AsyncioApplication",
    "AttachmentKind",
    "FaultEvent",
    "FaultObservedEvent",
    "FaultRecord",
    "FaultReporter",
    "HandledHint",
    "ReporterConfiguration",
    "RuntimeDomain",
    "__version__",
]
