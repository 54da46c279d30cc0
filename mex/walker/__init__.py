"""Filesystem walking with transparent archive expansion."""

from .tree_walker import walk

__all__ = ["walk"]
