"""Console sink — renders fault records to the diagnostic stream.

Each record becomes one multi-line block written with a single ``write``
call so concurrent reports from different threads do not interleave
line by line.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from faultwarden.models.fault import FaultRecord
from faultwarden.routing.sinks._formatting import render_record

logger = logging.getLogger(__name__)


class ConsoleSink:
    """Writes fault records to a text stream.

    Parameters
    ----------
    stream:
        The diagnostic stream.  Defaults to ``sys.stderr`` looked up at
        write time, so stream redirection done after construction is
        honoured.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def sink_name(self) -> str:
        return "console"

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def deliver(self, record: FaultRecord) -> None:
        """Render *record* to the diagnostic stream."""
        self._write(render_record(record))
        logger.debug("ConsoleSink: wrote fault %s", record.fault_id)

    def notice(self, record: FaultRecord) -> None:
        """Write a secondary diagnostic produced while delivering elsewhere."""
        self._write(render_record(record))

    def _write(self, text: str) -> None:
        stream = self.stream
        if stream is None:
            logger.warning("ConsoleSink: no diagnostic stream available")
            return
        try:
            stream.write(text)
            stream.flush()
        except (OSError, ValueError) as exc:
            # Closed or broken stream; nothing left to render to.
            logger.error("ConsoleSink: diagnostic stream unavailable: %s", exc)
