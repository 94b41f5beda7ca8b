"""Domain layer: contracts, value objects and exceptions."""
