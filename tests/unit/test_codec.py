"""Unit tests for the versioned fault-record wire format."""

from __future__ import annotations

import json

import pytest

from faultwarden.core.codec import decode_record, encode_record
from faultwarden.errors import RecordDecodeError
from faultwarden.models.fault import SCHEMA_VERSION, FaultRecord


class TestEncodeRecord:
    def test_encoding_is_canonical_json(self, fault):
        record = FaultRecord.from_exception(fault, metadata={"b": 1, "a": 2})
        data = encode_record(record)

        payload = json.loads(data)
        assert list(payload) == sorted(payload)
        assert data == json.dumps(
            payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")
        assert encode_record(record) == data

    def test_payload_carries_schema_fields(self, fault):
        payload = json.loads(encode_record(FaultRecord.from_exception(fault)))
        assert payload["schema_version"] == SCHEMA_VERSION
        assert payload["message"] == "outer failure"
        assert payload["causes"][0]["exc_type"] == "ValueError"
        assert {"filename", "lineno", "name", "line"} <= set(payload["frames"][0])

    def test_decoded_record_equals_encoded(self, fault):
        record = FaultRecord.from_exception(fault, metadata={"status_code": 502})
        decoded = decode_record(encode_record(record))

        assert decoded == record
        assert decoded.chain == record.chain
        assert decoded.metadata == {"status_code": 502}

    def test_non_ascii_message_survives(self):
        record = FaultRecord.from_message("échec — 失败")
        assert decode_record(encode_record(record)).message == "échec — 失败"


class TestDecodeRecord:
    def test_rejects_invalid_json(self):
        with pytest.raises(RecordDecodeError, match="not valid JSON"):
            decode_record(b"{not json")

    def test_rejects_non_object(self):
        with pytest.raises(RecordDecodeError, match="JSON object"):
            decode_record(b"[1, 2]")

    def test_rejects_unknown_schema_version(self):
        payload = json.loads(encode_record(FaultRecord.from_message("m")))
        payload["schema_version"] = SCHEMA_VERSION + 1
        with pytest.raises(RecordDecodeError, match="schema_version"):
            decode_record(json.dumps(payload))

    def test_rejects_missing_fields(self):
        with pytest.raises(RecordDecodeError, match="Invalid fault record"):
            decode_record(json.dumps({"schema_version": SCHEMA_VERSION}))

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode_record("")
