"""In-memory log sink."""

from auditcheck.core.models import LogEntry


class InMemoryLogSink:
    """In-memory implementation of LogSinkPort.

    Stores log entries in a list. Suitable for testing and for embedding
    the consumer where the caller inspects the output directly.
    """

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    def write(self, entry: LogEntry) -> None:
        """Write a log entry to the sink."""
        self._entries.append(entry)

    @property
    def entries(self) -> list[LogEntry]:
        """Copy of every entry written so far, in write order."""
        return list(self._entries)

    def find(self, message: str) -> list[LogEntry]:
        """Return entries whose message equals ``message``, in write order."""
        return [e for e in self._entries if e.message == message]
