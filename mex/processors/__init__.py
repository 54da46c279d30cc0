"""Run orchestration."""

from .book_processor import BookProcessor

__all__ = ["BookProcessor"]
