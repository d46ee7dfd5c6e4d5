"""auditcheck CLI -- consume audit events and report per-action tallies on exit."""

import asyncio

import click

from auditcheck import __version__, get_logger
from auditcheck.adapters.logging import configure_logging
from auditcheck.adapters.sinks import StreamLogSink
from auditcheck.adapters.sources import KafkaMessageSource
from auditcheck.core.config import DEFAULT_GROUP_ID, DEFAULT_TOPIC, ConsumerConfig
from auditcheck.core.errors import ConfigurationError, SourceEstablishmentError
from auditcheck.core.ports import MessageSourcePort
from auditcheck.runtime.consumer import ConsumptionLoop

logger = get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


async def run_consumer(source: MessageSourcePort) -> int:
    """Run a consumption loop over ``source`` until SIGINT or SIGTERM."""
    loop = ConsumptionLoop(source)
    loop.install_signal_handlers()
    try:
        return await loop.run()
    finally:
        loop.remove_signal_handlers()


@click.command()
@click.option(
    "--kafka-brokers",
    default="",
    envvar="KAFKA_BROKERS",
    help="Kafka broker addresses, comma separated.",
)
@click.option(
    "--topic",
    default=DEFAULT_TOPIC,
    show_default=True,
    envvar="AUDIT_TOPIC",
    help="Topic carrying audit events.",
)
@click.option(
    "--group",
    "group_id",
    default=DEFAULT_GROUP_ID,
    show_default=True,
    envvar="AUDIT_CONSUMER_GROUP",
    help="Consumer group to join.",
)
@click.option(
    "--log-level",
    default="INFO",
    show_default=True,
    envvar="AUDIT_LOG_LEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Minimum level of log lines written to stdout.",
)
@click.version_option(__version__, prog_name="auditcheck")
def main(kafka_brokers: str, topic: str, group_id: str, log_level: str) -> None:
    """Tally audit events per action until interrupted, then print the totals."""
    configure_logging(StreamLogSink(), log_level)

    try:
        config = ConsumerConfig.from_brokers(kafka_brokers, topic=topic, group_id=group_id)
    except ConfigurationError as exc:
        logger.error(str(exc), extra={"kafka_brokers": kafka_brokers})
        return

    source = KafkaMessageSource(config)
    try:
        status = asyncio.run(run_consumer(source))
    except SourceEstablishmentError as exc:
        logger.error(
            "could not obtain consumer",
            exc_info=exc,
            extra={"list_of_kafka_brokers": config.brokers},
        )
        raise SystemExit(1) from None

    if status:
        raise SystemExit(status)
