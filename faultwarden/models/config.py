"""Reporter configuration and the tri-state handled hint."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HandledHint(str, Enum):
    """Whether a reported fault should be considered resolved.

    ``UNSET`` means no policy was applied, which is distinct from
    ``NOT_HANDLED`` (a policy explicitly said the fault stays unhandled).
    """

    UNSET = "unset"
    HANDLED = "handled"
    NOT_HANDLED = "not_handled"

    @property
    def is_set(self) -> bool:
        return self is not HandledHint.UNSET

    def as_bool(self) -> bool | None:
        """Return ``True``/``False`` for a set hint, ``None`` for ``UNSET``."""
        if self is HandledHint.UNSET:
            return None
        return self is HandledHint.HANDLED

    @classmethod
    def from_bool(cls, value: bool | None) -> HandledHint:
        if value is None:
            return cls.UNSET
        return cls.HANDLED if value else cls.NOT_HANDLED


class ReporterConfiguration(BaseModel):
    """Immutable settings for a ``FaultReporter``.

    The default instance logs to the diagnostic stream only.

    Attributes
    ----------
    console_enabled:
        Render each fault to the diagnostic stream (stderr by default).
    remote_enabled:
        POST each fault to ``remote_endpoint``.
    remote_endpoint:
        The collector URL.  Only used when ``remote_enabled`` is true.
    http_method:
        The HTTP method used for remote delivery.
    credentials:
        Opaque value handed to httpx as ``auth`` (a ``(user, password)``
        tuple or an ``httpx.Auth``).  Never rendered or dumped.
    force_handled:
        When set, overrides the hint returned by ``FaultReporter.report``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    console_enabled: bool = True
    remote_enabled: bool = False
    remote_endpoint: str | None = None
    http_method: str = "POST"
    credentials: Any = Field(default=None, repr=False, exclude=True)
    force_handled: HandledHint = HandledHint.UNSET

    @field_validator("remote_endpoint")
    @classmethod
    def _check_endpoint(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"remote_endpoint must be an http(s) URL, got {value!r}")
        return value

    @field_validator("http_method")
    @classmethod
    def _normalize_method(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("http_method must not be empty")
        return value

    @field_validator("force_handled", mode="before")
    @classmethod
    def _coerce_hint(cls, value: Any) -> Any:
        if value is None or isinstance(value, bool):
            return HandledHint.from_bool(value)
        return value

    @classmethod
    def console_only(cls) -> ReporterConfiguration:
        return cls()

    @classmethod
    def remote(
        cls,
        endpoint: str,
        *,
        console_enabled: bool = True,
        http_method: str = "POST",
        credentials: Any = None,
        force_handled: HandledHint | bool | None = None,
    ) -> ReporterConfiguration:
        """Build a configuration that delivers to *endpoint*."""
        return cls(
            console_enabled=console_enabled,
            remote_enabled=True,
            remote_endpoint=endpoint,
            http_method=http_method,
            credentials=credentials,
            force_handled=force_handled,
        )

    @property
    def has_credentials(self) -> bool:
        return self.credentials is not None
