"""Volume data model."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .node import Node
from .page import Page

if TYPE_CHECKING:
    from .book import Book

# Read size used when streaming page bytes through the hasher
CHUNK_SIZE = 1024 * 1024


@dataclass(eq=False)
class Volume:
    """An ordered collection of pages read from one directory.

    ``avg_size`` and ``digest`` are filled by :meth:`measure` and drive the
    tie-break in :meth:`compare`.
    """

    node: Node
    book: Book
    pages: list[Page] = field(default_factory=list)
    index: int | None = None
    avg_size: int = 0
    digest: bytes = b""

    @property
    def name(self) -> str:
        return self.node.name

    def measure(self) -> None:
        """Stream every page through SHA-256 and record the average page size.

        Raises:
            OSError: If a page file cannot be read
        """
        hasher = hashlib.sha256()
        total_size = 0

        for page in self.pages:
            with open(page.node.path, "rb") as f:
                for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                    hasher.update(chunk)
                    total_size += len(chunk)

        self.avg_size = total_size // len(self.pages) if self.pages else 0
        self.digest = hasher.digest()

    def compare(self, other: Volume) -> int:
        """Order two volumes by page count, then average size, then digest.

        Returns:
            1 if self wins, -1 if other wins, 0 if they are indistinguishable
        """
        if len(self.pages) != len(other.pages):
            return 1 if len(self.pages) > len(other.pages) else -1

        if self.avg_size != other.avg_size:
            return 1 if self.avg_size > other.avg_size else -1

        if self.digest != other.digest:
            return 1 if self.digest > other.digest else -1

        return 0
