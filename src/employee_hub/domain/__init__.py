"""Domain layer: employee models, validation, aggregation and the service facade."""
