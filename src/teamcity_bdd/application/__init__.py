"""Application layer: service message encoding and lifecycle tracking."""
