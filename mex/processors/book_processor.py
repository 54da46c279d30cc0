"""Main book processing orchestration."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import final

from rich.console import Console

from mex.archives.collaborator import ArchiveCollaborator
from mex.archives.temp_dirs import TempDirAllocator
from mex.exporters.export_pipeline import ExportConfig, export_book
from mex.models.book import Book
from mex.parsers.volume_index import DEFAULT_VOLUME_PATTERNS
from mex.parsers.volume_parser import VolumeParser
from mex.progress.tracker import ProgressTracker
from mex.walker.tree_walker import walk


@final
class BookProcessor:
    """Runs walk, parse and export for one input path."""

    def __init__(
        self,
        config: ExportConfig | None = None,
        console: Console | None = None,
        collaborator: ArchiveCollaborator | None = None,
        patterns: Iterable[str] = DEFAULT_VOLUME_PATTERNS,
        temp_root: Path | None = None,
    ) -> None:
        """Initialize the book processor.

        Args:
            config: Export options
            console: Rich console instance
            collaborator: Archive tool runner
            patterns: Volume index regular expressions, in priority order
            temp_root: Parent directory for temporary directories
        """
        self.config = config or ExportConfig()
        self.console = console or Console()
        self.collaborator = collaborator or ArchiveCollaborator(console=self.console)
        self.parser = VolumeParser(patterns)
        self.temp_root = temp_root

        self.progress_tracker = ProgressTracker(self.console)

    def scan(self, input_path: Path, allocator: TempDirAllocator) -> Book:
        """Walk input_path and resolve it into a Book.

        The returned book references files inside allocator's directories,
        so it is only usable until the allocator is cleaned up.
        """
        self.progress_tracker.display_info(f"Scanning {input_path}")
        root = walk(input_path, allocator, self.collaborator)
        self.progress_tracker.display_info(f"Indexed {sum(1 for _ in root.iter_files())} files")

        book = self.parser.parse_book(root)
        self.progress_tracker.display_info(
            f"Resolved {len(book.volumes)} volume(s) for '{book.node.name}'"
        )
        return book

    def process(self, input_path: Path, output_dir: Path | None = None, dry_run: bool = False) -> Path | None:
        """Normalize input_path into output_dir.

        Temporary directories are removed before returning, whether or not
        processing succeeded.

        Args:
            input_path: Book directory or archive
            output_dir: Destination; defaults to the current directory
            dry_run: Only scan and display the resolved volumes

        Returns:
            Path of the exported book directory or archive, or None on dry run
        """
        output_dir = output_dir or Path.cwd()

        with TempDirAllocator(self.temp_root) as allocator:
            book = self.scan(input_path, allocator)
            self.progress_tracker.display_book_summary(book)

            if dry_run:
                return None

            with self.progress_tracker.track_volume_export(book.node.name, len(book.volumes)) as progress:
                result = export_book(
                    book,
                    self.config,
                    output_dir,
                    allocator,
                    self.collaborator,
                    on_volume_exported=progress.update,
                )

        self.progress_tracker.display_success(f"Wrote {result}")
        return result
