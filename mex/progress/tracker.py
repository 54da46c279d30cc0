"""Progress tracking with Rich progress bars."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import final

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from mex.models.book import Book
from mex.models.volume import Volume


@final
class ProgressTracker:
    """Reports run status and export progress on a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the progress tracker.

        Args:
            console: Rich console instance. If None, creates a new one.
        """
        self.console = console or Console()

    @contextmanager
    def track_volume_export(self, book_name: str, total_volumes: int) -> Iterator[VolumeProgressContext]:
        """Context manager for tracking volume export progress.

        Args:
            book_name: Name of the book being exported
            total_volumes: Total number of volumes to export

        Yields:
            Context whose update() advances the bar
        """
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
        ) as progress:
            task_id = progress.add_task(f"Exporting {book_name}...", total=total_volumes)
            yield VolumeProgressContext(progress, task_id)

    def display_book_summary(self, book: Book) -> None:
        """Display a table of the book's accepted volumes in index order.

        Args:
            book: Resolved book
        """
        table = Table(title=f"Volumes of {book.node.name}")
        table.add_column("Index", style="cyan", justify="right")
        table.add_column("Directory", style="white")
        table.add_column("Pages", style="green", justify="right")
        table.add_column("Avg. page size", style="magenta", justify="right")

        for volume in book.sorted_volumes():
            table.add_row(str(volume.index), volume.name, str(len(volume.pages)), f"{volume.avg_size:,} B")

        self.console.print(table)

    def display_error(self, message: str, exception: Exception | None = None) -> None:
        """Display an error message with optional exception details.

        Args:
            message: Error message to display
            exception: Optional exception for additional context
        """
        self.console.print(f"[red]Error: {message}[/red]")
        if exception:
            self.console.print(f"[dim]Details: {exception}[/dim]")

    def display_warning(self, message: str) -> None:
        """Display a warning message."""
        self.console.print(f"[yellow]Warning: {message}[/yellow]")

    def display_success(self, message: str) -> None:
        """Display a success message."""
        self.console.print(f"[green]Success: {message}[/green]")

    def display_info(self, message: str) -> None:
        """Display an info message."""
        self.console.print(f"[blue]Info: {message}[/blue]")


@final
class VolumeProgressContext:
    """Context for tracking volume export progress."""

    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        self.progress = progress
        self.task_id = task_id

    def update(self, volume: Volume | None = None, advance: int = 1) -> None:
        """Advance the bar, showing the finished volume's directory name.

        Safe to call from export worker threads.
        """
        description = f"Exported {volume.name}" if volume is not None else None
        self.progress.update(self.task_id, advance=advance, description=description)
