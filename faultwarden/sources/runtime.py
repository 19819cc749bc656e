"""RuntimeDomain — the Python process as a domain-level fault source.

While at least one handler is subscribed to either channel, the domain
owns three interpreter hooks:

* ``sys.excepthook`` and ``threading.excepthook`` feed ``fault_terminal``;
* ``sys.unraisablehook`` feeds ``fault_observed``.

Each hook chains to the hook it replaced.  For terminal faults the
previous hook (which prints the traceback) is skipped when a subscriber
marks the event as handled.  When the last handler unsubscribes, the
previous hooks are restored.
"""

from __future__ import annotations

import logging
import sys
import threading
from types import TracebackType
from typing import Any

from faultwarden.models.events import FaultEvent, FaultObservedEvent
from faultwarden.sources.channel import FaultChannel

logger = logging.getLogger(__name__)


def _safe_repr(obj: Any) -> str:
    try:
        return repr(obj)
    except Exception:  # noqa: BLE001
        return f"<{type(obj).__name__} object (repr failed)>"


def _exception_from(
    exc_type: type[BaseException],
    exc_value: BaseException | None,
    exc_tb: TracebackType | None,
) -> BaseException:
    if exc_value is None:
        try:
            exc_value = exc_type()
        except Exception:  # noqa: BLE001
            # Constructor needs arguments; build the instance without __init__.
            try:
                exc_value = exc_type.__new__(exc_type)
            except Exception:  # noqa: BLE001
                exc_value = RuntimeError(exc_type.__name__)
    if exc_tb is not None and exc_value.__traceback__ is None:
        exc_value = exc_value.with_traceback(exc_tb)
    return exc_value


class RuntimeDomain:
    """Domain-level fault source backed by the interpreter's hooks.

    Construction has no side effects; hooks are installed on first
    subscription and removed when the channels are empty again.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._installed = False
        self._previous_excepthook: Any = None
        self._previous_threading_excepthook: Any = None
        self._previous_unraisablehook: Any = None
        self.fault_observed = FaultChannel("fault_observed", on_change=self._sync_hooks)
        self.fault_terminal = FaultChannel("fault_terminal", on_change=self._sync_hooks)

    @property
    def hooks_installed(self) -> bool:
        return self._installed

    # ------------------------------------------------------------------
    # Host entry points
    # ------------------------------------------------------------------

    def observe(self, exc: BaseException, **metadata: Any) -> None:
        """Report a first-chance fault the host has already caught."""
        self.fault_observed.emit(FaultObservedEvent(exception=exc, metadata=metadata))

    def signal_terminal(self, exc: BaseException, **metadata: Any) -> bool:
        """Emit a terminal fault and return the subscribers' ``handled`` verdict."""
        event = FaultEvent(exception=exc, metadata=metadata)
        self.fault_terminal.emit(event)
        return event.handled

    # ------------------------------------------------------------------
    # Hook management
    # ------------------------------------------------------------------

    def _sync_hooks(self, _count: int) -> None:
        with self._lock:
            # Counts must be read under the lock.
            active = (
                self.fault_observed.subscriber_count
                + self.fault_terminal.subscriber_count
            )
            if active and not self._installed:
                self._install()
            elif not active and self._installed:
                self._uninstall()

    def _install(self) -> None:
        self._previous_excepthook = sys.excepthook
        self._previous_threading_excepthook = threading.excepthook
        self._previous_unraisablehook = sys.unraisablehook
        sys.excepthook = self._excepthook
        threading.excepthook = self._threading_excepthook
        sys.unraisablehook = self._unraisablehook
        self._installed = True
        logger.debug("RuntimeDomain: interpreter hooks installed")

    def _uninstall(self) -> None:
        # A hook replaced after ours belongs to someone else; leave it alone.
        if sys.excepthook == self._excepthook:
            sys.excepthook = self._previous_excepthook
        if threading.excepthook == self._threading_excepthook:
            threading.excepthook = self._previous_threading_excepthook
        if sys.unraisablehook == self._unraisablehook:
            sys.unraisablehook = self._previous_unraisablehook
        self._previous_excepthook = None
        self._previous_threading_excepthook = None
        self._previous_unraisablehook = None
        self._installed = False
        logger.debug("RuntimeDomain: interpreter hooks restored")

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _excepthook(
        self,
        exc_type: type[BaseException],
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        previous = self._previous_excepthook or sys.__excepthook__
        if issubclass(exc_type, KeyboardInterrupt):
            previous(exc_type, exc_value, exc_tb)
            return
        event = FaultEvent(
            exception=_exception_from(exc_type, exc_value, exc_tb),
            metadata={"hook": "sys.excepthook"},
        )
        self.fault_terminal.emit(event)
        if not event.handled:
            previous(exc_type, exc_value, exc_tb)

    def _threading_excepthook(self, args: Any) -> None:
        previous = self._previous_threading_excepthook or threading.__excepthook__
        if issubclass(args.exc_type, SystemExit):
            previous(args)
            return
        thread = args.thread
        event = FaultEvent(
            exception=_exception_from(args.exc_type, args.exc_value, args.exc_traceback),
            metadata={
                "hook": "threading.excepthook",
                "thread": thread.name if thread is not None else None,
            },
        )
        self.fault_terminal.emit(event)
        if not event.handled:
            previous(args)

    def _unraisablehook(self, args: Any) -> None:
        previous = self._previous_unraisablehook or sys.__unraisablehook__
        try:
            self.fault_observed.emit(
                FaultObservedEvent(
                    exception=_exception_from(
                        args.exc_type, args.exc_value, args.exc_traceback
                    ),
                    metadata={
                        "hook": "sys.unraisablehook",
                        "err_msg": args.err_msg,
                        "object": _safe_repr(args.object),
                    },
                )
            )
        finally:
            previous(args)
