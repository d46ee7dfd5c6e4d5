"""Core domain models for audit event consumption."""

from dataclasses import dataclass, field
from typing import Any

# Result labels that map onto a dedicated tally counter
ATTEMPTED = "attempted"
SUCCESSFUL = "successful"
UNSUCCESSFUL = "unsuccessful"


@dataclass(frozen=True)
class AuditEvent:
    """A decoded audit event.

    Attributes:
        created: Creation timestamp as written by the producing service.
        service: Name of the originating service.
        request_id: Identifier of the request that triggered the event.
        user: Identifier of the acting user.
        attempted_action: Label of the action the event reports on.
        action_result: Outcome label (attempted, successful, unsuccessful or other).
        params: Free-form string parameters.
    """

    created: str = ""
    service: str = ""
    request_id: str = ""
    user: str = ""
    attempted_action: str = ""
    action_result: str = ""
    params: dict[str, str] = field(default_factory=dict)


@dataclass
class ActionTally:
    """Running counters for a single action label.

    ``total`` counts every recorded event, so it can exceed the sum of the
    three named counters when unrecognized result labels are seen.
    """

    attempted: int = 0
    successful: int = 0
    unsuccessful: int = 0
    total: int = 0


@dataclass(frozen=True)
class RawMessage:
    """An undecoded message delivered by a message source.

    Attributes:
        value: Encoded event payload.
        topic: Topic the message was read from.
        partition: Partition the message was read from.
        offset: Offset of the message within its partition.
        key: Optional message key.
        timestamp: Broker timestamp in milliseconds, if known.
    """

    value: bytes
    topic: str = ""
    partition: int = 0
    offset: int = 0
    key: bytes | None = None
    timestamp: int | None = None


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry.

    Attributes:
        timestamp: Unix timestamp in seconds.
        level: Log level (e.g., INFO, ERROR, DEBUG).
        message: The log message.
        attributes: Additional structured fields.
    """

    timestamp: float
    level: str
    message: str
    attributes: dict[str, Any] = field(default_factory=dict)
