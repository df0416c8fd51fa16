"""Deterministic, human-readable filesystem inventories."""

__version__ = "0.1.0"
