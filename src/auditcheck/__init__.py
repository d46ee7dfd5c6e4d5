"""auditcheck - tally audit events consumed from Kafka.

Example:
    ```python
    from auditcheck import ActionTally, record

    table = {}
    record(table, "login", "successful")
    assert table["login"] == ActionTally(successful=1, total=1)
    ```
"""

import logging

__version__ = "0.1.0"


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``auditcheck`` namespace.

    Names outside the namespace are nested under it, so every logger
    returned here is routed by ``configure_logging``.
    """
    if name != "auditcheck" and not name.startswith("auditcheck."):
        name = f"auditcheck.{name}"
    return logging.getLogger(name)


from auditcheck.core.codec import decode, encode  # noqa: E402
from auditcheck.core.errors import (  # noqa: E402
    AuditCheckError,
    ConfigurationError,
    DecodeError,
    SourceEstablishmentError,
)
from auditcheck.core.models import ActionTally, AuditEvent, RawMessage  # noqa: E402
from auditcheck.core.tally import TallyTable, record, snapshot  # noqa: E402

__all__ = [
    "ActionTally",
    "AuditCheckError",
    "AuditEvent",
    "ConfigurationError",
    "DecodeError",
    "RawMessage",
    "SourceEstablishmentError",
    "TallyTable",
    "decode",
    "encode",
    "get_logger",
    "record",
    "snapshot",
]
