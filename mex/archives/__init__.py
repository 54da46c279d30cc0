"""Archive tool invocation and temporary directory management."""

from .collaborator import ArchiveCollaborator
from .temp_dirs import TempDirAllocator

__all__ = ["ArchiveCollaborator", "TempDirAllocator"]
