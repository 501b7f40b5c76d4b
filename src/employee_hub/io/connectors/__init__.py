"""Connectors to external services."""
