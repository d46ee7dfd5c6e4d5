"""Final tally report emitted on shutdown."""

import logging

from auditcheck import get_logger
from auditcheck.core.tally import TallyTable, snapshot, tally_to_dict

logger = get_logger(__name__)

REPORT_MESSAGE = "Audit stats"


def report(table: TallyTable, log: logging.Logger | None = None) -> None:
    """Log the complete tally table as a single record.

    The table is snapshotted first, so the record reflects its state at the
    moment of the call. Output failures are left to the logging handlers.

    Args:
        table: Tallies accumulated by the consumption loop.
        log: Logger to report through. Defaults to this module's logger.
    """
    (log or logger).info(
        REPORT_MESSAGE,
        extra={"audit": tally_to_dict(snapshot(table))},
    )
