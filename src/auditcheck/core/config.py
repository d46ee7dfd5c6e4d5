"""Runtime configuration for the audit consumer."""

from dataclasses import dataclass

from auditcheck.core.errors import ConfigurationError

DEFAULT_TOPIC = "audit-events"
DEFAULT_GROUP_ID = "check-audit"


@dataclass(frozen=True)
class ConsumerConfig:
    """Connection settings for the audit event consumer."""

    # Kafka bootstrap addresses, host:port
    brokers: list[str]
    topic: str = DEFAULT_TOPIC
    group_id: str = DEFAULT_GROUP_ID
    # Where a group with no committed offset starts reading
    auto_offset_reset: str = "earliest"

    @classmethod
    def from_brokers(
        cls,
        raw: str | None,
        topic: str = DEFAULT_TOPIC,
        group_id: str = DEFAULT_GROUP_ID,
    ) -> "ConsumerConfig":
        """Build a config from a comma-separated broker list.

        Args:
            raw: Broker addresses, comma separated (e.g. "k1:9092,k2:9092").
            topic: Topic to consume.
            group_id: Consumer group to join.

        Raises:
            ConfigurationError: If no broker address is given.
        """
        brokers = parse_brokers(raw)
        if not brokers:
            raise ConfigurationError("missing kafka brokers, must be comma separated")
        return cls(brokers=brokers, topic=topic, group_id=group_id)


def parse_brokers(raw: str | None) -> list[str]:
    """Split a comma-separated broker list, dropping blank items."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]
