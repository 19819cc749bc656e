"""Captured fault records — the unit every sink delivers.

A ``FaultRecord`` is built once, at the moment a fault signal fires, and is
never mutated afterwards.  It carries the exception's message, its traceback
frames, the ordered causal chain and an open metadata mapping.
"""

from __future__ import annotations

import json
import traceback
import uuid
from datetime import datetime, timezone
from types import TracebackType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SCHEMA_VERSION = 1


def _qualified_name(exc_type: type) -> str:
    module = exc_type.__module__
    if module in ("builtins", "__main__"):
        return exc_type.__qualname__
    return f"{module}.{exc_type.__qualname__}"


def _json_safe(value: Any) -> Any:
    """Return *value* if it survives a JSON round-trip, else its ``repr``."""
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
    return value


def _coerce_metadata(value: dict[str, Any]) -> dict[str, Any]:
    return {str(key): _json_safe(item) for key, item in value.items()}


class StackFrame(BaseModel):
    """One traceback frame."""

    model_config = ConfigDict(frozen=True)

    filename: str
    lineno: int | None = None
    name: str
    line: str = ""


class FaultCause(BaseModel):
    """A nested fault in the causal chain of a ``FaultRecord``.

    ``relation`` is ``"cause"`` for ``raise ... from ...`` and ``"context"``
    for an exception raised while handling another.
    """

    model_config = ConfigDict(frozen=True)

    relation: Literal["cause", "context"]
    exc_type: str
    message: str
    frames: list[StackFrame] = []


def _extract_frames(tb: TracebackType | None) -> list[StackFrame]:
    if tb is None:
        return []
    return [
        StackFrame(
            filename=summary.filename,
            lineno=summary.lineno,
            name=summary.name,
            line=(summary.line or "").strip(),
        )
        for summary in traceback.extract_tb(tb)
    ]


def _walk_causes(exc: BaseException) -> list[FaultCause]:
    """Walk ``__cause__``/``__context__`` links, nearest cause first."""
    causes: list[FaultCause] = []
    seen = {id(exc)}
    current = exc
    while True:
        if current.__cause__ is not None:
            nested, relation = current.__cause__, "cause"
        elif current.__context__ is not None and not current.__suppress_context__:
            nested, relation = current.__context__, "context"
        else:
            break
        if id(nested) in seen:
            break
        seen.add(id(nested))
        causes.append(
            FaultCause(
                relation=relation,
                exc_type=_qualified_name(type(nested)),
                message=str(nested),
                frames=_extract_frames(nested.__traceback__),
            )
        )
        current = nested
    return causes


class FaultRecord(BaseModel):
    """An immutable snapshot of one fault.

    Build it with :meth:`from_exception` for a live exception or with
    :meth:`from_message` when there is no exception object (diagnostic
    notices, synthetic test faults).
    """

    model_config = ConfigDict(frozen=True)

    schema_version: int = SCHEMA_VERSION
    fault_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    captured_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    exc_type: str
    message: str
    frames: list[StackFrame] = []
    causes: list[FaultCause] = []
    metadata: dict[str, Any] = {}

    @field_validator("metadata")
    @classmethod
    def _json_safe_metadata(cls, value: dict[str, Any]) -> dict[str, Any]:
        return _coerce_metadata(value)

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        metadata: dict[str, Any] | None = None,
    ) -> FaultRecord:
        """Capture *exc*, its traceback and its causal chain."""
        return cls(
            exc_type=_qualified_name(type(exc)),
            message=str(exc),
            frames=_extract_frames(exc.__traceback__),
            causes=_walk_causes(exc),
            metadata=metadata or {},
        )

    @classmethod
    def from_message(
        cls,
        message: str,
        exc_type: str = "Fault",
        metadata: dict[str, Any] | None = None,
    ) -> FaultRecord:
        return cls(exc_type=exc_type, message=message, metadata=metadata or {})

    def with_metadata(self, **extra: Any) -> FaultRecord:
        """Return a copy whose metadata is merged with *extra*."""
        merged = {**self.metadata, **extra}
        return self.model_copy(update={"metadata": _coerce_metadata(merged)})

    @property
    def chain(self) -> list[str]:
        """``"Type: message"`` for the fault followed by each cause."""
        head = [f"{self.exc_type}: {self.message}"]
        return head + [f"{c.exc_type}: {c.message}" for c in self.causes]
