"""Log sink adapters implementing LogSinkPort."""

from auditcheck.adapters.sinks.in_memory import InMemoryLogSink
from auditcheck.adapters.sinks.stream import StreamLogSink

__all__ = [
    "InMemoryLogSink",
    "StreamLogSink",
]
