"""Archive extraction and packing through external command-line tools."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from rich.console import Console

from mex.archives.temp_dirs import TempDirAllocator
from mex.errors import ToolExecutionFailed, ToolNotInstalled, UnsupportedArchiveFormat

default_console = Console()

# Extension written by compress()
ARCHIVE_EXTENSION = ".cbz"

RAR_TOOL_NAMES: tuple[str, ...] = ("unrar",)
ZIP_TOOL_NAMES: tuple[str, ...] = ("7za", "7z")

RAR_EXTENSIONS = {".rar", ".cbr"}
ZIP_EXTENSIONS = {".zip", ".cbz", ".7z"}


class ArchiveCollaborator:
    """Resolves archive tools on the search path and runs them."""

    def __init__(
        self,
        rar_tools: Sequence[str] = RAR_TOOL_NAMES,
        zip_tools: Sequence[str] = ZIP_TOOL_NAMES,
        which: Callable[[str], str | None] = shutil.which,
        console: Console | None = None,
    ) -> None:
        """Initialize the collaborator.

        Args:
            rar_tools: Candidate tool names for rar-family archives, in order
            zip_tools: Candidate tool names for zip-family archives, in order
            which: Function resolving a tool name to an executable path
            console: Rich console for progress lines. Pass the console that
                owns any live progress display so output does not interleave.
        """
        self.rar_tools = tuple(rar_tools)
        self.zip_tools = tuple(zip_tools)
        self._which = which
        self.console = console or default_console

    def find_tool(self, names: Sequence[str]) -> str:
        """Return the path of the first tool in names found on the search path.

        Raises:
            ToolNotInstalled: If none of the names resolve
        """
        for name in names:
            path = self._which(name)
            if path:
                return path

        raise ToolNotInstalled(f"required tool not installed (tried: {', '.join(names)})")

    def tools_for(self, archive_path: Path) -> tuple[str, ...]:
        """Map an archive path to its tool family by extension.

        Raises:
            UnsupportedArchiveFormat: If the extension is not a known archive type
        """
        ext = archive_path.suffix.lower()
        if ext in RAR_EXTENSIONS:
            return self.rar_tools
        if ext in ZIP_EXTENSIONS:
            return self.zip_tools

        raise UnsupportedArchiveFormat(f"unsupported archive format: {archive_path.name}")

    def decompress(self, archive_path: Path, allocator: TempDirAllocator) -> Path:
        """Extract an archive into a fresh temporary directory.

        Args:
            archive_path: Path to the archive file
            allocator: Allocator that owns the extraction directory

        Returns:
            Path to the directory holding the extracted contents

        Raises:
            UnsupportedArchiveFormat: If the file is not a recognized archive
            ToolNotInstalled: If no extraction tool is available
            ToolExecutionFailed: If the tool fails
        """
        archive_path = Path(archive_path).absolute()
        tool = self.find_tool(self.tools_for(archive_path))
        content_dir = allocator.temp_dir()

        self.console.print(f"[dim]decompressing {archive_path}...[/dim]")
        self._run([tool, "x", str(archive_path)], cwd=content_dir, action=f"decompression of {archive_path}")
        return content_dir

    def compress(self, archive_path: Path, source_dir: Path) -> Path:
        """Pack every immediate entry of source_dir into a zip-family archive.

        Args:
            archive_path: Destination path; ".cbz" is appended if missing
            source_dir: Directory whose entries become the archive's top level

        Returns:
            Path of the written archive

        Raises:
            ToolNotInstalled: If no compression tool is available
            ToolExecutionFailed: If the tool fails
        """
        archive_path = Path(archive_path)
        if archive_path.suffix != ARCHIVE_EXTENSION:
            archive_path = archive_path.with_name(archive_path.name + ARCHIVE_EXTENSION)
        archive_path = archive_path.absolute()

        tool = self.find_tool(self.zip_tools)
        entries = sorted(entry.name for entry in Path(source_dir).iterdir())

        self.console.print(f"[dim]compressing {archive_path}...[/dim]")
        self._run([tool, "a", str(archive_path), *entries], cwd=Path(source_dir), action=f"compression of {archive_path}")
        return archive_path

    def _run(self, args: list[str], cwd: Path, action: str) -> None:
        result = subprocess.run(
            args,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
        if result.returncode != 0:
            raise ToolExecutionFailed(
                f"{action} failed (exit status {result.returncode})", result.stdout or ""
            )
