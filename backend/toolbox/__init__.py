"""Persistence and insert-validation layer for the developer toolbox backend."""

__version__ = "0.1.0"
