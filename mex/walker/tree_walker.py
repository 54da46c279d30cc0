"""Recursive tree walk that expands archives in place."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from mex.archives.collaborator import ArchiveCollaborator
from mex.archives.temp_dirs import TempDirAllocator
from mex.errors import UnsupportedArchiveFormat
from mex.models.node import Node


def walk(
    path: Path,
    allocator: TempDirAllocator,
    collaborator: ArchiveCollaborator | None = None,
) -> Node:
    """
    Build an in-memory tree mirroring the filesystem under path.

    Any file the collaborator can decompress is replaced by the tree of its
    extracted contents, relabelled with the archive's file name so it looks
    like a directory of the same name. Children keep the order the directory
    listing yields them in.

    Args:
        path: Root file or directory to walk
        allocator: Owner of extraction directories
        collaborator: Archive tool runner; a default one is created if None

    Returns:
        Node: Root of the walked tree

    Raises:
        OSError: If a path cannot be stat'ed or listed
        ToolNotInstalled: If an archive needs a tool that is missing
        ToolExecutionFailed: If an archive fails to extract
    """
    collaborator = collaborator or ArchiveCollaborator()
    path = Path(path)
    node = Node(name=path.name or path.resolve().name, path=path, is_dir=stat.S_ISDIR(path.stat().st_mode))

    if node.is_dir:
        with os.scandir(path) as entries:
            names = [entry.name for entry in entries]
        for name in names:
            node.children.append(walk(path / name, allocator, collaborator))
        return node

    try:
        content_dir = collaborator.decompress(path, allocator)
    except UnsupportedArchiveFormat:
        return node

    archive_name = node.name
    node = walk(content_dir, allocator, collaborator)
    node.name = archive_name
    return node
