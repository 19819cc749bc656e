"""FaultReporter — attaches to fault-signal sources and reports faults.

The reporter owns two attachment slots (application, domain), an
immutable configuration and a sink dispatcher built from it.  Fault
signals flow::

    source channel -> handler adapter -> report() -> sinks
                                    <- handled hint

``report`` never raises; error reporting must not crash the host.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, TextIO

import httpx

from faultwarden.core.attachment import AttachmentSlot
from faultwarden.models.config import HandledHint, ReporterConfiguration
from faultwarden.models.events import AttachmentKind, FaultEvent, FaultObservedEvent
from faultwarden.models.fault import FaultRecord
from faultwarden.routing.dispatcher import SinkDispatcher
from faultwarden.routing.sinks.console import ConsoleSink
from faultwarden.routing.sinks.http import RemoteSink
from faultwarden.sources import ApplicationFaultSource, DomainFaultSource

if TYPE_CHECKING:
    from faultwarden.config import ReporterSettings
    from faultwarden.routing.sinks import BaseSink

logger = logging.getLogger(__name__)


class FaultReporter:
    """Captures faults from attached sources and delivers them to sinks.

    Parameters
    ----------
    configuration:
        Which sinks are active and the handled-hint policy.  Defaults to
        console-only.
    stream:
        Diagnostic stream for the console sink.  Defaults to ``sys.stderr``.
    http_client:
        Borrowed ``httpx.Client`` for remote delivery (not closed by the
        reporter).
    sinks:
        Extra sinks that receive every fault after the configured ones.

    Usage
    -----
    >>> with FaultReporter(ReporterConfiguration.remote("https://errors.example/api")) as reporter:
    ...     reporter.attach(RuntimeDomain())
    ...     run_application()
    """

    def __init__(
        self,
        configuration: ReporterConfiguration | None = None,
        *,
        stream: TextIO | None = None,
        http_client: httpx.Client | None = None,
        sinks: list[BaseSink] | None = None,
    ) -> None:
        self._config = configuration or ReporterConfiguration()
        self._slots = {
            AttachmentKind.APPLICATION: AttachmentSlot(AttachmentKind.APPLICATION),
            AttachmentKind.DOMAIN: AttachmentSlot(AttachmentKind.DOMAIN),
        }
        self._local = threading.local()
        self._dispatcher = SinkDispatcher()

        console = ConsoleSink(stream) if self._config.console_enabled else None
        if console is not None:
            self._dispatcher.register_sink(console)
        if self._config.remote_enabled:
            self._dispatcher.register_sink(
                RemoteSink(self._config, diagnostics=console, client=http_client)
            )
        for sink in sinks or []:
            self._dispatcher.register_sink(sink)

    @classmethod
    def from_settings(
        cls,
        settings: ReporterSettings | None = None,
        **kwargs: Any,
    ) -> FaultReporter:
        """Build a reporter from ``FAULTWARDEN_*`` environment settings."""
        from faultwarden.config import load_settings

        settings = settings or load_settings()
        return cls(settings.to_configuration(), **kwargs)

    @property
    def configuration(self) -> ReporterConfiguration:
        return self._config

    @property
    def sinks(self) -> list[BaseSink]:
        return self._dispatcher.registered_sinks

    # ------------------------------------------------------------------
    # Attachment
    # ------------------------------------------------------------------

    def attach_application(self, source: ApplicationFaultSource) -> bool:
        """Bind to an application-level source.

        Returns ``False`` (and changes nothing) if an application source
        is already bound.
        """
        return self._slots[AttachmentKind.APPLICATION].bind(
            source,
            [(source.fault_occurred, self._on_application_fault)],
        )

    def detach_application(self) -> None:
        self._slots[AttachmentKind.APPLICATION].unbind()

    def attach_domain(self, source: DomainFaultSource) -> bool:
        """Bind to a domain-level source.

        Returns ``False`` (and changes nothing) if a domain source is
        already bound.
        """
        return self._slots[AttachmentKind.DOMAIN].bind(
            source,
            [
                (source.fault_observed, self._on_domain_observed),
                (source.fault_terminal, self._on_domain_terminal),
            ],
        )

    def detach_domain(self) -> None:
        self._slots[AttachmentKind.DOMAIN].unbind()

    def attach(self, source: Any) -> bool:
        """Bind *source* to the slot matching its shape.

        Raises
        ------
        TypeError
            If *source* is neither an application nor a domain source.
        """
        if isinstance(source, DomainFaultSource):
            return self.attach_domain(source)
        if isinstance(source, ApplicationFaultSource):
            return self.attach_application(source)
        raise TypeError(
            f"{type(source).__name__} exposes neither 'fault_occurred' nor "
            "'fault_observed'/'fault_terminal' channels"
        )

    def detach(self, kind: AttachmentKind | None = None) -> None:
        """Detach *kind*, or both kinds when *kind* is ``None``."""
        kinds = [kind] if kind is not None else list(self._slots)
        for k in kinds:
            self._slots[k].unbind()

    def is_attached(self, kind: AttachmentKind) -> bool:
        return self._slots[kind].is_bound

    def bound_source(self, kind: AttachmentKind) -> Any:
        return self._slots[kind].source

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def report(
        self,
        fault: BaseException | FaultRecord,
        metadata: dict[str, Any] | None = None,
    ) -> HandledHint:
        """Deliver *fault* to every active sink and return the handled hint.

        The hint is ``UNSET`` unless the configuration forces a value.
        A fault reported while the same thread is already inside
        ``report`` (a sink faulting during delivery) is dropped.
        """
        if getattr(self._local, "reporting", False):
            logger.warning(
                "Fault raised while reporting on this thread; dropped: %r", fault
            )
            return HandledHint.UNSET

        self._local.reporting = True
        try:
            record = self._capture(fault, metadata)
            if record is not None:
                self._dispatcher.dispatch(record)
        finally:
            self._local.reporting = False

        hint = HandledHint.UNSET
        if self._config.force_handled.is_set:
            hint = self._config.force_handled
        return hint

    def _capture(
        self,
        fault: BaseException | FaultRecord,
        metadata: dict[str, Any] | None,
    ) -> FaultRecord | None:
        try:
            if isinstance(fault, FaultRecord):
                return fault.with_metadata(**metadata) if metadata else fault
            return FaultRecord.from_exception(fault, metadata)
        except Exception:  # noqa: BLE001
            logger.exception("Could not capture fault %r", fault)
            return None

    # ------------------------------------------------------------------
    # Channel adapters
    # ------------------------------------------------------------------

    def _on_domain_observed(self, event: FaultObservedEvent) -> None:
        self.report(event.exception, event.metadata)

    def _on_domain_terminal(self, event: FaultEvent) -> None:
        self._acknowledge(event, self.report(event.exception, event.metadata))

    def _on_application_fault(self, event: FaultEvent) -> None:
        self._acknowledge(event, self.report(event.exception, event.metadata))

    @staticmethod
    def _acknowledge(event: FaultEvent, hint: HandledHint) -> None:
        if hint.is_set:
            event.handled = hint.as_bool()

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Detach both source kinds.  Safe to call more than once."""
        self.detach()

    def __enter__(self) -> FaultReporter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
