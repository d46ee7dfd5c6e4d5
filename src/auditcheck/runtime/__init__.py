"""Consumption loop and shutdown reporting."""
