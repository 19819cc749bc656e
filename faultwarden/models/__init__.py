"""Faultwarden data models — Pydantic v2, frozen unless an event needs acknowledging."""

from faultwarden.models.config import HandledHint, ReporterConfiguration
from faultwarden.models.events import AttachmentKind, FaultEvent, FaultObservedEvent
from faultwarden.models.fault import (
    SCHEMA_VERSION,
    FaultCause,
    FaultRecord,
    StackFrame,
)

__all__ = [
    # fault
    "SCHEMA_VERSION",
    "FaultCause",
    "FaultRecord",
    "StackFrame",
    # config
    "HandledHint",
    "ReporterConfiguration",
    # events
    "AttachmentKind",
    "FaultEvent",
    "FaultObservedEvent",
]
