"""Shared test fixtures for all test modules."""

import logging
from collections.abc import Callable, Generator

import pytest

from auditcheck.adapters.logging import ROOT_LOGGER_NAME, configure_logging
from auditcheck.adapters.sinks import InMemoryLogSink
from auditcheck.core.codec import encode
from auditcheck.core.models import AuditEvent


@pytest.fixture
def log_sink() -> Generator[InMemoryLogSink, None, None]:
    """Route the auditcheck logger namespace to an in-memory sink at DEBUG."""
    sink = InMemoryLogSink()
    handler = configure_logging(sink, "DEBUG")
    yield sink
    logging.getLogger(ROOT_LOGGER_NAME).removeHandler(handler)


@pytest.fixture
def make_event() -> Callable[..., AuditEvent]:
    """Factory fixture for AuditEvents with realistic defaults.

    Usage:
        event = make_event(attempted_action="login", action_result="successful")
    """

    def _event(**overrides: object) -> AuditEvent:
        fields: dict[str, object] = {
            "created": "2024-03-01T10:15:00Z",
            "service": "dp-frontend-router",
            "request_id": "req-123",
            "user": "user@example.com",
            "attempted_action": "login",
            "action_result": "successful",
            "params": {"path": "/login"},
        }
        fields.update(overrides)
        return AuditEvent(**fields)  # type: ignore[arg-type]

    return _event


@pytest.fixture
def make_payload(make_event: Callable[..., AuditEvent]) -> Callable[..., bytes]:
    """Factory fixture returning Avro payloads for make_event(**overrides)."""

    def _payload(**overrides: object) -> bytes:
        return encode(make_event(**overrides))

    return _payload

