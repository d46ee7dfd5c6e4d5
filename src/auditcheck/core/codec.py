"""Avro binary codec for audit events.

Payloads are schemaless Avro: the bare binary encoding of a single
``audit_event`` record, with no object container header and no schema
registry prefix.
"""

import io
from collections.abc import Mapping
from dataclasses import asdict
from typing import Any

import fastavro

from auditcheck.core.errors import DecodeError
from auditcheck.core.models import AuditEvent

AUDIT_EVENT_SCHEMA: dict[str, Any] = {
    "type": "record",
    "name": "audit_event",
    "fields": [
        {"name": "created", "type": "string", "default": ""},
        {"name": "service", "type": "string", "default": ""},
        {"name": "request_id", "type": "string", "default": ""},
        {"name": "user", "type": "string", "default": ""},
        {"name": "attempted_action", "type": "string", "default": ""},
        {"name": "action_result", "type": "string", "default": ""},
        {"name": "params", "type": {"type": "map", "values": "string"}, "default": {}},
    ],
}

_PARSED_SCHEMA = fastavro.parse_schema(AUDIT_EVENT_SCHEMA)


def _to_event(record: Mapping[str, Any]) -> AuditEvent:
    """Build an AuditEvent from a decoded record, defaulting absent fields."""
    params = record.get("params") or {}
    return AuditEvent(
        created=record.get("created") or "",
        service=record.get("service") or "",
        request_id=record.get("request_id") or "",
        user=record.get("user") or "",
        attempted_action=record.get("attempted_action") or "",
        action_result=record.get("action_result") or "",
        params={str(k): str(v) for k, v in params.items()},
    )


def decode(data: bytes, writer_schema: Mapping[str, Any] | None = None) -> AuditEvent:
    """Decode an Avro-encoded audit event.

    Args:
        data: Encoded payload.
        writer_schema: Schema the payload was written with, when it differs
            from AUDIT_EVENT_SCHEMA. Fields unknown to AUDIT_EVENT_SCHEMA are
            skipped and fields it declares but the writer lacks take their
            defaults.

    Returns:
        The decoded AuditEvent.

    Raises:
        DecodeError: If the payload is truncated, corrupted or does not match
            the schema.
    """
    try:
        if writer_schema is None:
            record = fastavro.schemaless_reader(io.BytesIO(data), _PARSED_SCHEMA)
        else:
            record = fastavro.schemaless_reader(
                io.BytesIO(data),
                fastavro.parse_schema(dict(writer_schema)),
                _PARSED_SCHEMA,
            )
    except Exception as exc:
        raise DecodeError(f"failed to decode audit event: {exc!r}") from exc

    if not isinstance(record, Mapping):
        raise DecodeError(f"expected a record, decoded {type(record).__name__}")
    return _to_event(record)


def encode(event: AuditEvent) -> bytes:
    """Encode an audit event as schemaless Avro binary."""
    buffer = io.BytesIO()
    fastavro.schemaless_writer(buffer, _PARSED_SCHEMA, asdict(event))
    return buffer.getvalue()
