"""Book and volume discovery over a walked tree."""

from __future__ import annotations

from collections.abc import Iterable
from typing import final

from rich.console import Console

from mex.errors import NoVolumesFound
from mex.models.book import Book
from mex.models.node import Node
from mex.models.page import Page
from mex.models.volume import Volume
from mex.parsers.image_collector import collect_image_nodes
from mex.parsers.volume_index import (
    DEFAULT_VOLUME_PATTERNS,
    compile_patterns,
    parse_volume_index,
)

console = Console()


@final
class VolumeParser:
    """Builds a Book from a node tree and resolves volume numbering."""

    def __init__(self, patterns: Iterable[str] = DEFAULT_VOLUME_PATTERNS) -> None:
        """Initialize the parser.

        Args:
            patterns: Volume index regular expressions, tried in order
        """
        self.patterns = compile_patterns(patterns)

    def parse_book(self, root: Node) -> Book:
        """Scan the tree for volumes and build a resolved Book.

        Unindexed volumes and collision losers are numbered after the highest
        accepted index, in ascending order of their directory names.

        Args:
            root: Root of the walked tree

        Returns:
            Book with at least one accepted volume

        Raises:
            NoVolumesFound: If the tree contains no image-bearing directory
            OSError: If a page file cannot be read
        """
        book = Book(node=root)
        self._parse_volumes(book, root)

        if book.orphans:
            console.print(
                f"[yellow]Warning: Renumbering {len(book.orphans)} unindexed or conflicting volume(s)[/yellow]"
            )
            book.resolve_orphans()

        if not book.volumes:
            raise NoVolumesFound(f"no volumes found in {root.path}")

        return book

    def _parse_volumes(self, book: Book, node: Node) -> None:
        if not node.is_dir:
            return

        for child in node.children:
            if child.is_dir:
                self._parse_volumes(book, child)

        images = collect_image_nodes(node)
        if not images:
            return

        volume = Volume(node=node, book=book)
        volume.pages = [Page(node=image, volume=volume, index=i) for i, image in enumerate(images)]
        volume.measure()

        index = parse_volume_index(node.name, self.patterns)
        if index is None:
            book.add_orphan(volume)
        else:
            volume.index = index
            book.add_volume(volume)


def parse_book(root: Node, patterns: Iterable[str] = DEFAULT_VOLUME_PATTERNS) -> Book:
    """Parse a Book from a walked tree using the given index patterns."""
    return VolumeParser(patterns).parse_book(root)
