"""Console output and progress display."""

from .tracker import ProgressTracker, VolumeProgressContext

__all__ = ["ProgressTracker", "VolumeProgressContext"]
