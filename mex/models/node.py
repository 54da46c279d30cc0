"""Filesystem tree node data model."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Node:
    """A directory or file in the walked tree.

    A node produced from an extracted archive carries the archive's file name
    while its path points at the extraction directory.
    """

    name: str
    path: Path
    is_dir: bool
    children: list[Node] = field(default_factory=list)

    def iter_files(self) -> Iterator[Node]:
        """Yield every non-directory node in this subtree, depth first."""
        for child in self.children:
            if child.is_dir:
                yield from child.iter_files()
            else:
                yield child
