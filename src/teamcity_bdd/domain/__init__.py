"""Domain layer: events, value objects, ports and exceptions."""
