"""Temporary directory tracking for a single run."""

from __future__ import annotations

import shutil
import tempfile
import threading
from pathlib import Path
from types import TracebackType
from typing import final


@final
class TempDirAllocator:
    """Creates temporary directories and removes all of them at end of run.

    Directories may be requested from several export workers at once, so the
    list of allocated directories is guarded by a lock.
    """

    prefix: str = "mex_"

    def __init__(self, base_dir: Path | None = None) -> None:
        """Initialize the allocator.

        Args:
            base_dir: Parent directory for new temp directories. If None, the
                system default temp location is used.
        """
        self.base_dir = base_dir
        self._lock = threading.Lock()
        self._dirs: list[Path] = []

    @property
    def dirs(self) -> list[Path]:
        """Snapshot of the directories allocated so far."""
        with self._lock:
            return list(self._dirs)

    def temp_dir(self) -> Path:
        """Create and record a fresh temporary directory.

        Returns:
            Path to the new, empty directory

        Raises:
            OSError: If the directory cannot be created
        """
        if self.base_dir is not None:
            self.base_dir.mkdir(parents=True, exist_ok=True)

        path = Path(tempfile.mkdtemp(prefix=self.prefix, dir=self.base_dir))
        with self._lock:
            self._dirs.append(path)
        return path

    def cleanup(self) -> None:
        """Remove every recorded directory, ignoring removal errors."""
        with self._lock:
            dirs, self._dirs = self._dirs, []

        for path in dirs:
            shutil.rmtree(path, ignore_errors=True)

    def __enter__(self) -> TempDirAllocator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()
