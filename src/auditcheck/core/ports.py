"""Port interfaces for message sources and log sinks.

These protocols define the contracts that adapters must implement.
The core and runtime depend only on these interfaces, not concrete
implementations.
"""

from typing import Protocol, runtime_checkable

from auditcheck.core.models import LogEntry, RawMessage


@runtime_checkable
class MessageSourcePort(Protocol):
    """Port for consuming messages from an event log.

    Adapters implementing this protocol deliver RawMessage instances and
    accept acknowledgments. Examples: KafkaMessageSource, InMemoryMessageSource.
    """

    async def start(self) -> None:
        """Establish the source.

        Raises:
            SourceEstablishmentError: If the source cannot be established.
        """
        ...

    async def receive(self) -> RawMessage:
        """Wait for and return the next message. Blocks while the source is empty."""
        ...

    async def acknowledge(self, message: RawMessage) -> None:
        """Commit a message so its offset can advance. Called at most once per message."""
        ...

    async def stop(self) -> None:
        """Release the source."""
        ...


@runtime_checkable
class LogSinkPort(Protocol):
    """Port for log output.

    Writes are synchronous so they can be made from logging handlers while
    an event loop is running. Examples: StreamLogSink, InMemoryLogSink.
    """

    def write(self, entry: LogEntry) -> None:
        """Write a log entry to the sink."""
        ...
