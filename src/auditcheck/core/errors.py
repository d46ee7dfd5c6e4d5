"""auditcheck-specific exceptions."""


class AuditCheckError(Exception):
    """Base class for all errors raised by auditcheck."""


class ConfigurationError(AuditCheckError):
    """Raised when required startup configuration is missing or empty.

    The CLI logs it and returns without starting a consumer.
    """


class SourceEstablishmentError(AuditCheckError):
    """Raised when the message source cannot be created or connected.

    Fatal: the CLI logs it and exits with status 1.
    """


class DecodeError(AuditCheckError):
    """Raised when a message payload cannot be decoded into an AuditEvent.

    The underlying codec exception is chained as ``__cause__``.
    """
