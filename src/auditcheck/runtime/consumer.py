"""Event consumption loop.

The loop waits on two sources at once, the next message and the shutdown
event, and handles whichever completes first. Message handling and shutdown
reporting run on the same task, so the tally table is never read while it is
being updated and needs no lock.
"""

import asyncio
import contextlib
import enum
import signal
from dataclasses import asdict, dataclass

from auditcheck import get_logger
from auditcheck.core.codec import decode
from auditcheck.core.errors import DecodeError
from auditcheck.core.models import RawMessage
from auditcheck.core.ports import MessageSourcePort
from auditcheck.core.tally import TallyTable, record
from auditcheck.runtime.reporter import report

logger = get_logger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class LoopState(enum.Enum):
    """Lifecycle of a ConsumptionLoop."""

    IDLE = "idle"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"


@dataclass
class LoopStats:
    """Message counts for a single loop run."""

    received: int = 0
    recorded: int = 0
    decode_failures: int = 0


async def _cancel(task: "asyncio.Future[object] | None") -> None:
    """Cancel a pending task and wait for it to finish."""
    if task is None or task.done():
        return
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


class ConsumptionLoop:
    """Consume audit events from a message source and tally them per action.

    Args:
        source: Message source to consume from. Started by ``run``.
        table: Tally table to update. A new empty table is used by default.
    """

    def __init__(self, source: MessageSourcePort, table: TallyTable | None = None) -> None:
        self._source = source
        self._table: TallyTable = table if table is not None else {}
        self._shutdown = asyncio.Event()
        self._state = LoopState.IDLE
        self.stats = LoopStats()

    @property
    def table(self) -> TallyTable:
        return self._table

    @property
    def state(self) -> LoopState:
        return self._state

    def request_shutdown(self) -> None:
        """Ask the loop to report and stop. Only the first request has an effect."""
        if not self._shutdown.is_set():
            logger.debug("Shutdown requested")
        self._shutdown.set()

    def install_signal_handlers(self, signals: tuple[int, ...] = SHUTDOWN_SIGNALS) -> None:
        """Turn the given process signals into shutdown requests.

        Must be called from the thread running the event loop. Platforms
        without loop signal support are left with default signal handling.
        """
        loop = asyncio.get_running_loop()
        for sig in signals:
            try:
                loop.add_signal_handler(sig, self.request_shutdown)
            except NotImplementedError:
                logger.warning(
                    "Signal handlers are not supported on this platform",
                    extra={"signal": int(sig)},
                )
                return

    def remove_signal_handlers(self, signals: tuple[int, ...] = SHUTDOWN_SIGNALS) -> None:
        loop = asyncio.get_running_loop()
        for sig in signals:
            with contextlib.suppress(NotImplementedError):
                loop.remove_signal_handler(sig)

    async def handle(self, message: RawMessage) -> bool:
        """Decode one message, record it and acknowledge it.

        A message that fails to decode is logged and neither recorded nor
        acknowledged.

        Returns:
            True if the message was recorded and acknowledged.
        """
        self.stats.received += 1
        try:
            event = decode(message.value)
        except DecodeError as exc:
            self.stats.decode_failures += 1
            logger.error(
                "failed to unmarshal event",
                exc_info=exc,
                extra={
                    "topic": message.topic,
                    "partition": message.partition,
                    "offset": message.offset,
                },
            )
            return False

        record(self._table, event.attempted_action, event.action_result)
        self.stats.recorded += 1
        logger.info("Received message", extra={"audit_event": asdict(event)})
        await self._source.acknowledge(message)
        return True

    async def run(self) -> int:
        """Start the source and consume until shutdown is requested.

        Once the report has been written, a failure to stop the source is
        logged and the run still ends with status 0.

        Returns:
            Process exit status, 0 after a requested shutdown.

        Raises:
            SourceEstablishmentError: If the source cannot be started.
        """
        await self._source.start()
        self._state = LoopState.RUNNING
        try:
            await self._consume()
        except BaseException:
            await self._source.stop()
            raise

        self._state = LoopState.SHUTTING_DOWN
        report(self._table)
        logger.debug("Consumption stats", extra=asdict(self.stats))
        try:
            await self._source.stop()
        except Exception as exc:
            logger.warning("could not stop message source", exc_info=exc)
        return 0

    async def _consume(self) -> None:
        shutdown = asyncio.ensure_future(self._shutdown.wait())
        receive: asyncio.Future[RawMessage] | None = None
        try:
            while True:
                if receive is None:
                    receive = asyncio.ensure_future(self._source.receive())
                done, _ = await asyncio.wait(
                    {receive, shutdown}, return_when=asyncio.FIRST_COMPLETED
                )
                # A message that arrived together with the signal is still handled
                if receive in done:
                    message = receive.result()
                    receive = None
                    await self.handle(message)
                if shutdown in done:
                    return
        finally:
            await _cancel(receive)
            await _cancel(shutdown)
