"""Python logging handler adapter for auditcheck.

This adapter bridges Python's standard library logging module to a
LogSinkPort, so every record logged under the ``auditcheck`` namespace is
emitted as a structured LogEntry.
"""

import logging
import traceback
from typing import Any

from auditcheck.core.models import LogEntry
from auditcheck.core.ports import LogSinkPort

ROOT_LOGGER_NAME = "auditcheck"

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# Default attributes to extract from LogRecord
_DEFAULT_INCLUDE_ATTRS = ["module", "funcName", "lineno"]

_EXTRA_VALUE_TYPES = (str, int, float, bool, dict, list, tuple)


class AuditCheckHandler(logging.Handler):
    """Logging handler that writes log records to a LogSinkPort.

    Example:
        ```python
        from auditcheck.adapters.logging import AuditCheckHandler
        from auditcheck.adapters.sinks import StreamLogSink

        handler = AuditCheckHandler(StreamLogSink())
        logging.getLogger("auditcheck").addHandler(handler)
        ```
    """

    def __init__(
        self,
        sink: LogSinkPort,
        include_attrs: list[str] | None = None,
    ) -> None:
        """Initialize the handler with a log sink.

        Args:
            sink: Sink adapter implementing LogSinkPort.
            include_attrs: List of LogRecord attributes to include. Defaults to
                ["module", "funcName", "lineno"].
        """
        super().__init__()
        self._sink = sink
        self._include_attrs = (
            include_attrs if include_attrs is not None else _DEFAULT_INCLUDE_ATTRS
        )

    @property
    def sink(self) -> LogSinkPort:
        return self._sink

    def to_entry(self, record: logging.LogRecord) -> LogEntry:
        """Convert a LogRecord into a LogEntry."""
        attr_mapping: dict[str, Any] = {
            "module": record.name,
            "funcName": record.funcName or "",
            "lineno": record.lineno,
            "pathname": record.pathname,
        }

        attributes: dict[str, Any] = {
            key: attr_mapping[key] for key in self._include_attrs if key in attr_mapping
        }

        # Structured fields passed via ``extra=``
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                value, _EXTRA_VALUE_TYPES
            ):
                attributes[key] = value

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                attributes["exc_type"] = exc_type.__name__
            if exc_value is not None:
                attributes["exc_message"] = str(exc_value)
                if exc_value.__cause__ is not None:
                    attributes["exc_cause"] = repr(exc_value.__cause__)
            if exc_tb is not None:
                attributes["exc_traceback"] = "".join(
                    traceback.format_exception(exc_type, exc_value, exc_tb)
                )

        return LogEntry(
            timestamp=record.created,
            level=record.levelname,
            message=record.getMessage(),
            attributes=attributes,
        )

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record to the sink.

        Sink failures are routed to ``handleError`` and never raised.
        """
        try:
            self._sink.write(self.to_entry(record))
        except Exception:
            self.handleError(record)


def configure_logging(
    sink: LogSinkPort,
    level: int | str = logging.INFO,
) -> AuditCheckHandler:
    """Route the ``auditcheck`` logger namespace to a sink.

    Replaces any AuditCheckHandler installed by a previous call and stops
    propagation to the root logger so each record is written once.

    Args:
        sink: Where log entries are written.
        level: Minimum level, as a number or a name such as "DEBUG".

    Returns:
        The installed handler.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(logger.handlers):
        if isinstance(existing, AuditCheckHandler):
            logger.removeHandler(existing)

    handler = AuditCheckHandler(sink)
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False
    return handler
