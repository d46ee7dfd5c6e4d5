"""NDJSON stream log sink."""

import sys
import threading
from typing import TextIO

from auditcheck.core.encoding.ndjson import encode_logs
from auditcheck.core.models import LogEntry


class StreamLogSink:
    """LogSinkPort implementation that writes NDJSON lines to a text stream.

    Each entry is written as one line and the stream is flushed immediately,
    so the final report reaches the terminal or collector before exit.

    Args:
        stream: Target stream. Defaults to the current ``sys.stdout``.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, entry: LogEntry) -> None:
        """Write a log entry as a single NDJSON line."""
        line = encode_logs([entry])
        with self._lock:
            self.stream.write(line)
            self.stream.flush()
