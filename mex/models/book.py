"""Book data model and volume numbering conflict resolution."""

from __future__ import annotations

from dataclasses import dataclass, field

from .node import Node
from .volume import Volume


@dataclass(eq=False)
class Book:
    """The top-level title, mapping volume indices to accepted volumes."""

    node: Node
    volumes: dict[int, Volume] = field(default_factory=dict)
    volume_count: int = 0
    orphans: list[Volume] = field(default_factory=list)

    def _insert(self, volume: Volume) -> None:
        if volume.index is None:
            raise ValueError(f"volume '{volume.name}' has no index")
        self.volumes[volume.index] = volume
        if volume.index >= self.volume_count:
            self.volume_count = volume.index + 1

    def add_volume(self, volume: Volume) -> None:
        """Insert an indexed volume, resolving a collision with the occupant.

        The loser of a collision is moved to the orphan list. An incoming
        volume identical to the occupant is discarded.

        Args:
            volume: Volume with an assigned index
        """
        if volume.index is None:
            raise ValueError(f"volume '{volume.name}' has no index")

        current = self.volumes.get(volume.index)
        if current is None:
            self._insert(volume)
            return

        result = current.compare(volume)
        if result > 0:
            self.add_orphan(volume)
        elif result < 0:
            self.add_orphan(current)
            self._insert(volume)

    def add_orphan(self, volume: Volume) -> None:
        """Queue a volume for renumbering unless an identical orphan is queued."""
        for orphan in self.orphans:
            if orphan.compare(volume) == 0:
                return

        self.orphans.append(volume)

    def resolve_orphans(self) -> None:
        """Number queued orphans past the highest accepted index, by name."""
        orphans = sorted(self.orphans, key=lambda v: v.name)
        self.orphans = []

        for volume in orphans:
            volume.index = self.volume_count
            self.add_volume(volume)

    def sorted_volumes(self) -> list[Volume]:
        """Accepted volumes in ascending index order."""
        return [self.volumes[index] for index in sorted(self.volumes)]
