"""Event payloads carried by fault-signal channels."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class AttachmentKind(str, Enum):
    """The two independent source categories a reporter can bind to."""

    APPLICATION = "application"
    DOMAIN = "domain"


class FaultObservedEvent(BaseModel):
    """A fault seen before (or instead of) normal handling.

    Carries no acknowledgment field.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    exception: BaseException
    metadata: dict[str, Any] = {}


class FaultEvent(BaseModel):
    """A fault that may be acknowledged by a subscriber.

    Subscribers set ``handled`` to tell the source whether its default
    behaviour (printing a traceback, terminating) should be suppressed.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    exception: BaseException
    metadata: dict[str, Any] = {}
    handled: bool = False
