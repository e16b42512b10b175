"""Domain layer: entities and value objects."""
