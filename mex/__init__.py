"""Normalize multi-volume image book archives into a canonical layout."""

__version__ = "0.1.0"
