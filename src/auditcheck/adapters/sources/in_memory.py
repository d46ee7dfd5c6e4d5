"""In-memory message source."""

import asyncio
from collections.abc import Iterable

from auditcheck.core.models import RawMessage


class InMemoryMessageSource:
    """In-memory implementation of MessageSourcePort.

    Serves queued payloads in order and blocks once drained, the way a
    broker client does on an idle topic. Acknowledgments are recorded and
    each message may be acknowledged only once. Suitable for testing and
    replaying captured payloads.

    Args:
        payloads: Initial payloads, assigned consecutive offsets on partition 0.
        topic: Topic name stamped on generated messages.
    """

    def __init__(self, payloads: Iterable[bytes] = (), topic: str = "audit-events") -> None:
        self._topic = topic
        self._queue: asyncio.Queue[RawMessage] = asyncio.Queue()
        self._next_offset = 0
        self._acknowledged: list[RawMessage] = []
        self._started = False
        self._stopped = False
        for payload in payloads:
            self.push(payload)

    @property
    def acknowledged(self) -> list[RawMessage]:
        """Messages acknowledged so far, in acknowledgment order."""
        return list(self._acknowledged)

    @property
    def started(self) -> bool:
        return self._started

    @property
    def stopped(self) -> bool:
        return self._stopped

    def pending(self) -> int:
        """Number of messages not yet received."""
        return self._queue.qsize()

    def push(self, payload: bytes) -> RawMessage:
        """Queue a payload as the next message on partition 0."""
        message = RawMessage(
            value=payload,
            topic=self._topic,
            partition=0,
            offset=self._next_offset,
        )
        self._next_offset += 1
        self._queue.put_nowait(message)
        return message

    async def start(self) -> None:
        self._started = True

    async def receive(self) -> RawMessage:
        """Return the next queued message, waiting while none is queued."""
        if not self._started:
            raise RuntimeError("source has not been started")
        return await self._queue.get()

    async def acknowledge(self, message: RawMessage) -> None:
        """Record an acknowledgment.

        Raises:
            ValueError: If the message was already acknowledged.
        """
        if message in self._acknowledged:
            raise ValueError(
                f"message {message.topic}/{message.partition}@{message.offset} "
                "already acknowledged"
            )
        self._acknowledged.append(message)

    async def stop(self) -> None:
        self._stopped = True
