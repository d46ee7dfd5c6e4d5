"""Domain models, ports and pure functions for audit event tallying."""
