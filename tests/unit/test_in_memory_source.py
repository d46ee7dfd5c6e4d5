"""Tests for InMemoryMessageSource."""

import asyncio

import pytest

from auditcheck.adapters.sources import InMemoryMessageSource

pytestmark = [pytest.mark.sources, pytest.mark.tier(1)]


class TestInMemoryMessageSource:
    """Tests for InMemoryMessageSource adapter."""

    async def test_receives_payloads_in_order_with_offsets(self) -> None:
        source = InMemoryMessageSource([b"a", b"b"], topic="audit-events")
        await source.start()

        first = await source.receive()
        second = await source.receive()

        assert (first.value, first.offset) == (b"a", 0)
        assert (second.value, second.offset) == (b"b", 1)
        assert first.topic == "audit-events"

    async def test_receive_blocks_when_drained(self) -> None:
        """receive() waits until a payload is pushed."""
        source = InMemoryMessageSource()
        await source.start()

        pending = asyncio.ensure_future(source.receive())
        await asyncio.sleep(0)
        assert not pending.done()

        pushed = source.push(b"late")
        assert await asyncio.wait_for(pending, 1.0) == pushed

    async def test_receive_before_start_raises(self) -> None:
        with pytest.raises(RuntimeError, match="not been started"):
            await InMemoryMessageSource([b"a"]).receive()

    async def test_acknowledge_records_message(self) -> None:
        source = InMemoryMessageSource([b"a"])
        await source.start()
        message = await source.receive()

        await source.acknowledge(message)

        assert source.acknowledged == [message]

    async def test_double_acknowledge_raises(self) -> None:
        """An acknowledgment can only be used once per message."""
        source = InMemoryMessageSource([b"a"])
        await source.start()
        message = await source.receive()
        await source.acknowledge(message)

        with pytest.raises(ValueError, match="already acknowledged"):
            await source.acknowledge(message)

    async def test_stop_marks_source_stopped(self) -> None:
        source = InMemoryMessageSource()
        await source.start()

        await source.stop()

        assert source.started and source.stopped
