"""Polygonal map graph generation."""

__version__ = "0.1.0"
