"""Remote sink — POSTs fault records to an HTTP collector.

Delivery is synchronous and best-effort: one request per fault, no
retries, no queueing.  Every failure is contained here; when console
logging is enabled the failure is rendered to the diagnostic stream,
otherwise it is only logged.
"""

from __future__ import annotations

import logging

import httpx

from faultwarden.core.codec import CONTENT_TYPE, encode_record
from faultwarden.errors import FaultwardenError
from faultwarden.models.config import ReporterConfiguration
from faultwarden.models.fault import FaultRecord
from faultwarden.routing.sinks.console import ConsoleSink

logger = logging.getLogger(__name__)


class UnexpectedStatusError(FaultwardenError):
    """The collector answered with a non-2xx status code."""

    def __init__(self, status_code: int, endpoint: str) -> None:
        super().__init__(
            f"Fault collector {endpoint} returned unexpected status code {status_code}"
        )
        self.status_code = status_code
        self.endpoint = endpoint


class RemoteSink:
    """Sends fault records to ``configuration.remote_endpoint``.

    Parameters
    ----------
    configuration:
        Supplies endpoint, method and credentials.
    diagnostics:
        Console sink for secondary notices (unexpected status, delivery
        failure).  ``None`` keeps those notices out of the diagnostic
        stream; they are still logged.
    client:
        An ``httpx.Client`` to send through.  It is borrowed, not closed.
        Without one, a client is opened and closed per delivery.
    """

    def __init__(
        self,
        configuration: ReporterConfiguration,
        diagnostics: ConsoleSink | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = configuration
        self._diagnostics = diagnostics
        self._client = client

    @property
    def sink_name(self) -> str:
        return "remote"

    def deliver(self, record: FaultRecord) -> None:
        """Send *record* to the collector; never raises."""
        endpoint = self._config.remote_endpoint
        if endpoint is None:
            logger.warning(
                "RemoteSink: remote delivery enabled without an endpoint; fault %s skipped",
                record.fault_id,
            )
            self._notice(
                FaultRecord.from_message(
                    "Remote fault delivery is enabled but no endpoint is configured",
                    exc_type="faultwarden.ConfigurationWarning",
                    metadata={"fault_id": record.fault_id},
                )
            )
            return

        try:
            response = self._send(endpoint, encode_record(record))
            if not response.is_success:
                error = UnexpectedStatusError(response.status_code, endpoint)
                logger.warning("RemoteSink: %s", error)
                self._notice(
                    FaultRecord.from_exception(
                        error, metadata={"status_code": response.status_code}
                    )
                )
                return
            logger.debug(
                "RemoteSink: delivered fault %s to %s (%d)",
                record.fault_id,
                endpoint,
                response.status_code,
            )
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "RemoteSink: delivery of fault %s to %s failed: %s",
                record.fault_id,
                endpoint,
                exc,
            )
            self._notice(FaultRecord.from_exception(exc))

    def _send(self, endpoint: str, body: bytes) -> httpx.Response:
        headers = {"Content-Type": CONTENT_TYPE}
        auth = (
            self._config.credentials
            if self._config.has_credentials
            else httpx.USE_CLIENT_DEFAULT
        )
        if self._client is not None:
            return self._client.request(
                self._config.http_method,
                endpoint,
                content=body,
                headers=headers,
                auth=auth,
            )
        with httpx.Client() as client:
            return client.request(
                self._config.http_method,
                endpoint,
                content=body,
                headers=headers,
                auth=auth,
            )

    def _notice(self, record: FaultRecord) -> None:
        # Secondary notices stay local; they are never sent to the collector.
        if self._diagnostics is not None:
            self._diagnostics.notice(record)
