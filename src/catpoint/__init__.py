"""Catpoint - home security alarm engine."""

__version__ = "1.0.0"
