from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from mex.archives.collaborator import ARCHIVE_EXTENSION, ArchiveCollaborator
from mex.archives.temp_dirs import TempDirAllocator


class ZipfileCollaborator(ArchiveCollaborator):
    """Collaborator that uses zipfile instead of external tools."""

    def __init__(self) -> None:
        super().__init__(which=lambda name: f"/usr/bin/{name}")
        self.compressed: list[Path] = []

    def decompress(self, archive_path: Path, allocator: TempDirAllocator) -> Path:
        self.tools_for(Path(archive_path))
        content_dir = allocator.temp_dir()
        with zipfile.ZipFile(archive_path) as zf:
            zf.extractall(content_dir)
        return content_dir

    def compress(self, archive_path: Path, source_dir: Path) -> Path:
        archive_path = Path(archive_path)
        if archive_path.suffix != ARCHIVE_EXTENSION:
            archive_path = archive_path.with_name(archive_path.name + ARCHIVE_EXTENSION)
        with zipfile.ZipFile(archive_path, "w") as zf:
            for path in sorted(Path(source_dir).rglob("*")):
                zf.write(path, path.relative_to(source_dir).as_posix())
        self.compressed.append(archive_path)
        return archive_path


def write_pages(directory: Path, pages: dict[str, bytes]) -> Path:
    """Create directory and write each named page into it."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, data in pages.items():
        (directory / name).write_bytes(data)
    return directory


def write_zip(path: Path, entries: dict[str, bytes]) -> Path:
    """Write a zip archive holding the given relative paths."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return path


@pytest.fixture
def collaborator():
    return ZipfileCollaborator()


@pytest.fixture
def allocator(tmp_path):
    allocator = TempDirAllocator(tmp_path / "tmp")
    yield allocator
    allocator.cleanup()
