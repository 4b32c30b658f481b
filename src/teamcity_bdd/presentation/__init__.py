"""Presentation layer: host adapters (behave, pytest)."""
