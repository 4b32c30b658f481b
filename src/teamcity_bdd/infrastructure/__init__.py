"""Infrastructure layer: clocks and timestamp formatting."""
