"""Async helpers shared by loop and CLI tests."""

import asyncio
from collections.abc import Callable

from auditcheck.adapters.sources import InMemoryMessageSource
from auditcheck.core.models import RawMessage


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Yield to the event loop until ``predicate()`` holds or ``timeout`` expires."""

    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0)

    await asyncio.wait_for(_poll(), timeout)


class FailingSource(InMemoryMessageSource):
    """Message source whose start() always raises the given exception."""

    def __init__(self, error: Exception) -> None:
        super().__init__()
        self._error = error

    async def start(self) -> None:
        raise self._error


class RaisingReceiveSource(InMemoryMessageSource):
    """Message source whose receive() raises once its payloads are drained."""

    def __init__(self, payloads: list[bytes], error: Exception) -> None:
        super().__init__(payloads)
        self._error = error

    async def receive(self) -> RawMessage:
        if not self.pending():
            raise self._error
        return await super().receive()
