"""AttachmentSlot — the bound/unbound state machine for one source kind.

A slot holds at most one source.  Binding subscribes the reporter's
handlers to the source's channels; unbinding removes exactly those
subscriptions.  Each slot has its own lock, so attach/detach calls for
one kind are serialized without blocking the other kind.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any

from faultwarden.models.events import AttachmentKind
from faultwarden.sources.channel import FaultChannel

logger = logging.getLogger(__name__)

Subscription = tuple[FaultChannel, Callable[[Any], None]]


class SlotState(str, Enum):
    UNBOUND = "unbound"
    BOUND = "bound"


class AttachmentSlot:
    """Binding between a reporter and one fault-signal source.

    The slot keeps a non-owning reference to the source plus the
    subscriptions it made, and nothing else.
    """

    def __init__(self, kind: AttachmentKind) -> None:
        self.kind = kind
        self._lock = threading.Lock()
        self._source: Any = None
        self._subscriptions: list[Subscription] = []

    @property
    def state(self) -> SlotState:
        with self._lock:
            return SlotState.BOUND if self._source is not None else SlotState.UNBOUND

    @property
    def is_bound(self) -> bool:
        return self.state is SlotState.BOUND

    @property
    def source(self) -> Any:
        with self._lock:
            return self._source

    def bind(self, source: Any, subscriptions: list[Subscription]) -> bool:
        """Subscribe every ``(channel, handler)`` pair and remember *source*.

        Returns ``False`` without subscribing anything when the slot is
        already bound.
        """
        with self._lock:
            if self._source is not None:
                logger.debug("%s slot already bound; attach ignored", self.kind.value)
                return False
            done: list[Subscription] = []
            try:
                for channel, handler in subscriptions:
                    channel.subscribe(handler)
                    done.append((channel, handler))
            except Exception:
                for channel, handler in done:
                    channel.unsubscribe(handler)
                raise
            self._source = source
            self._subscriptions = done
        logger.debug("%s slot bound to %r", self.kind.value, source)
        return True

    def unbind(self) -> bool:
        """Remove the subscriptions made by :meth:`bind`.

        Returns ``True`` if a source was detached, ``False`` if the slot
        was already unbound.
        """
        with self._lock:
            if self._source is None:
                return False
            for channel, handler in self._subscriptions:
                channel.unsubscribe(handler)
            source = self._source
            self._source = None
            self._subscriptions = []
        logger.debug("%s slot unbound from %r", self.kind.value, source)
        return True
