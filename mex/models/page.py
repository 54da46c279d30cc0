"""Page data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .node import Node

if TYPE_CHECKING:
    from .volume import Volume


@dataclass(eq=False)
class Page:
    """A single image file belonging to a volume."""

    node: Node
    volume: Volume
    index: int
