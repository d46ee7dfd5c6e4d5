"""Adapters connecting the core ports to brokers, sinks and logging."""
