"""Exception hierarchy for Faultwarden."""

from __future__ import annotations


class FaultwardenError(Exception):
    """Base class for errors raised by Faultwarden itself."""


class RecordDecodeError(FaultwardenError, ValueError):
    """Raised when a serialized fault record cannot be decoded."""
