"""Versioned JSON wire format for fault records.

Records are written as canonical JSON (sorted keys, compact separators,
UTF-8) so two encodings of the same record are byte-identical.  The
``schema_version`` field lets collectors reject payloads they do not
understand.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from faultwarden.errors import RecordDecodeError
from faultwarden.models.fault import SCHEMA_VERSION, FaultRecord

CONTENT_TYPE = "application/json"


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes — deterministic, sorted, compact."""
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def encode_record(record: FaultRecord) -> bytes:
    """Serialize *record* to the wire format."""
    return canonical_json_bytes(record.model_dump(mode="json"))


def decode_record(data: bytes | str) -> FaultRecord:
    """Parse wire-format *data* back into a ``FaultRecord``.

    Raises
    ------
    RecordDecodeError
        If *data* is not JSON, is not an object, carries an unsupported
        ``schema_version`` or fails validation.
    """
    try:
        payload = json.loads(data)
    except (TypeError, ValueError) as exc:
        raise RecordDecodeError(f"Fault record is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise RecordDecodeError(
            f"Fault record must be a JSON object, got {type(payload).__name__}"
        )

    version = payload.get("schema_version")
    if version != SCHEMA_VERSION:
        raise RecordDecodeError(
            f"Unsupported fault record schema_version {version!r} "
            f"(expected {SCHEMA_VERSION})"
        )

    try:
        return FaultRecord.model_validate(payload)
    except ValidationError as exc:
        raise RecordDecodeError(f"Invalid fault record: {exc}") from exc
