"""Message source adapters implementing MessageSourcePort."""

from auditcheck.adapters.sources.in_memory import InMemoryMessageSource
from auditcheck.adapters.sources.kafka import KafkaMessageSource

__all__ = [
    "InMemoryMessageSource",
    "KafkaMessageSource",
]
