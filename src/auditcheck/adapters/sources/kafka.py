"""Kafka message source backed by aiokafka."""

from collections.abc import Callable
from typing import Any

from aiokafka import AIOKafkaConsumer
from aiokafka.errors import KafkaError
from aiokafka.structs import TopicPartition

from auditcheck import get_logger
from auditcheck.core.config import ConsumerConfig
from auditcheck.core.errors import SourceEstablishmentError
from auditcheck.core.models import RawMessage

logger = get_logger(__name__)


async def _close_quietly(consumer: Any) -> None:
    """Stop a consumer whose start failed, logging any error from stop."""
    try:
        await consumer.stop()
    except Exception as exc:
        logger.debug("Closing half-started consumer failed", exc_info=exc)


class KafkaMessageSource:
    """MessageSourcePort implementation consuming one topic as a consumer group.

    Auto-commit is disabled: offsets only advance through ``acknowledge``,
    which commits ``offset + 1`` for the message's partition.

    Args:
        config: Broker list, topic, group and offset reset policy.
        consumer_factory: Callable building the underlying consumer; takes the
            topic positionally and aiokafka keyword arguments.
    """

    def __init__(
        self,
        config: ConsumerConfig,
        consumer_factory: Callable[..., Any] = AIOKafkaConsumer,
    ) -> None:
        self._config = config
        self._consumer_factory = consumer_factory
        self._consumer: Any = None

    @property
    def config(self) -> ConsumerConfig:
        return self._config

    async def start(self) -> None:
        """Create the consumer, join the group and fetch metadata.

        Raises:
            SourceEstablishmentError: If the consumer cannot be created or
                the brokers cannot be reached.
        """
        consumer = None
        try:
            consumer = self._consumer_factory(
                self._config.topic,
                bootstrap_servers=self._config.brokers,
                group_id=self._config.group_id,
                auto_offset_reset=self._config.auto_offset_reset,
                enable_auto_commit=False,
            )
            await consumer.start()
        except (KafkaError, OSError, ValueError) as exc:
            if consumer is not None:
                await _close_quietly(consumer)
            raise SourceEstablishmentError(
                f"could not obtain consumer: {exc}"
            ) from exc

        self._consumer = consumer
        logger.debug(
            "Kafka consumer started",
            extra={
                "list_of_kafka_brokers": self._config.brokers,
                "topic": self._config.topic,
                "group_id": self._config.group_id,
            },
        )

    def _require_consumer(self) -> Any:
        if self._consumer is None:
            raise RuntimeError("source has not been started")
        return self._consumer

    async def receive(self) -> RawMessage:
        """Wait for the next record and wrap it as a RawMessage."""
        record = await self._require_consumer().getone()
        return RawMessage(
            value=record.value if record.value is not None else b"",
            topic=record.topic,
            partition=record.partition,
            offset=record.offset,
            key=record.key,
            timestamp=record.timestamp,
        )

    async def acknowledge(self, message: RawMessage) -> None:
        """Commit the message so the group resumes after it."""
        partition = TopicPartition(message.topic, message.partition)
        await self._require_consumer().commit({partition: message.offset + 1})

    async def stop(self) -> None:
        """Leave the group and close connections. Safe to call when not started."""
        if self._consumer is None:
            return
        consumer, self._consumer = self._consumer, None
        await consumer.stop()
