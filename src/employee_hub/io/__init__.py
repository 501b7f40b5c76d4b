"""I/O layer: connectors to external systems."""
