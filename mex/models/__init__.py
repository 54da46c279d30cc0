"""Data models for the book normalizer."""

from .book import Book
from .node import Node
from .page import Page
from .volume import Volume

__all__ = ["Book", "Node", "Page", "Volume"]
