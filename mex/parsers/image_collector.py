"""Image file recognition utilities."""

from __future__ import annotations

from pathlib import PurePath

from mex.models.node import Node

# Supported image file extensions
IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.webp', '.bmp', '.gif'}


def is_image_name(name: str) -> bool:
    """
    Check whether a file name has a recognized image extension.

    Args:
        name: File name or path

    Returns:
        bool: True if the extension (case-insensitive) is an image extension
    """
    return PurePath(name).suffix.lower() in IMAGE_EXTENSIONS


def collect_image_nodes(node: Node) -> list[Node]:
    """
    Collect the image leaves directly inside a directory node.

    Args:
        node: Directory node to scan

    Returns:
        list[Node]: Image leaves, sorted by name (stable)
    """
    images = [child for child in node.children if not child.is_dir and is_image_name(child.name)]
    images.sort(key=lambda child: child.name)
    return images
