"""Concurrent export of a resolved Book to an output directory."""

from __future__ import annotations

import queue
import shutil
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from mex.archives.collaborator import ArchiveCollaborator
from mex.archives.temp_dirs import TempDirAllocator
from mex.errors import NoVolumesFound
from mex.exporters.naming import render_name, strip_ext
from mex.models.book import Book
from mex.models.page import Page
from mex.models.volume import Volume

DEFAULT_PAGE_TEMPLATE = "page_{{Index}}{{Ext}}"
DEFAULT_VOLUME_TEMPLATE = "vol_{{Index}}"
DEFAULT_BOOK_TEMPLATE = "{{Name}}"
DEFAULT_WORKERS = 4

# How often a blocked producer rechecks whether any worker is still alive
_SUBMIT_POLL_SECONDS = 0.05


@dataclass(frozen=True)
class ExportConfig:
    """Options controlling how a book is written out."""

    compress_book: bool = False
    compress_volumes: bool = True
    page_template: str = DEFAULT_PAGE_TEMPLATE
    volume_template: str = DEFAULT_VOLUME_TEMPLATE
    book_template: str = DEFAULT_BOOK_TEMPLATE
    workers: int = DEFAULT_WORKERS


class _ErrorSlot:
    """Lock-guarded cell holding the most recently recorded worker error."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._error: BaseException | None = None

    def set(self, error: BaseException) -> None:
        with self._lock:
            self._error = error

    def get(self) -> BaseException | None:
        with self._lock:
            return self._error


def export_page(page: Page, output_dir: Path, config: ExportConfig) -> Path:
    """Copy a page's bytes to its templated name inside output_dir."""
    name = render_name(config.page_template, page.node.name, page.index + 1, len(page.volume.pages) - 1)
    target = output_dir / name
    shutil.copyfile(page.node.path, target)
    return target


def export_volume(
    volume: Volume,
    book_dir: Path,
    config: ExportConfig,
    allocator: TempDirAllocator,
    collaborator: ArchiveCollaborator,
) -> Path:
    """Write a volume's pages as a directory, or as an archive when compressing.

    Returns:
        Path of the written volume directory or archive
    """
    if volume.index is None:
        raise ValueError(f"volume '{volume.name}' has no index")
    name = render_name(config.volume_template, strip_ext(volume.node.name), volume.index, volume.book.volume_count - 1)

    if config.compress_volumes:
        output_dir = allocator.temp_dir()
    else:
        output_dir = book_dir / name
        output_dir.mkdir(parents=True, exist_ok=True)

    for page in volume.pages:
        export_page(page, output_dir, config)

    if config.compress_volumes:
        return collaborator.compress(book_dir / name, output_dir)
    return output_dir


def export_book(
    book: Book,
    config: ExportConfig,
    output_dir: Path,
    allocator: TempDirAllocator,
    collaborator: ArchiveCollaborator | None = None,
    on_volume_exported: Callable[[Volume], None] | None = None,
) -> Path:
    """
    Render a resolved book under output_dir using a pool of worker threads.

    Volumes are handed to ``config.workers`` threads through one bounded
    queue. A worker that fails records its error and leaves the pool; the
    remaining workers keep draining the queue. Once every worker has failed
    the producer stops submitting. The recorded error is whichever failing
    worker wrote last, and is raised only once every worker has finished.

    Args:
        book: Book with at least one accepted volume
        config: Export options
        output_dir: Directory receiving the book directory or archive
        allocator: Owner of intermediate directories
        collaborator: Archive tool runner; a default one is created if None
        on_volume_exported: Called from a worker thread after each volume

    Returns:
        Path: The book directory, or the book archive when compressing

    Raises:
        NoVolumesFound: If the book has no accepted volumes
        TemplateError: If a naming template is invalid
        ToolNotInstalled: If compression is requested without a zip tool
        ToolExecutionFailed: If an archive tool fails
        OSError: If files cannot be written
    """
    if not book.volumes:
        raise NoVolumesFound(f"book '{book.node.name}' has no volumes to export")

    collaborator = collaborator or ArchiveCollaborator()
    output_dir = Path(output_dir)
    workers = max(1, config.workers)
    name = render_name(config.book_template, strip_ext(book.node.name), 0, 0)

    if config.compress_book:
        book_dir = allocator.temp_dir()
    else:
        book_dir = output_dir / name
        book_dir.mkdir(parents=True, exist_ok=True)

    volume_queue: queue.Queue[Volume | None] = queue.Queue(maxsize=workers)
    error_slot = _ErrorSlot()

    live_lock = threading.Lock()
    live_workers = workers
    all_failed = threading.Event()

    def worker() -> None:
        nonlocal live_workers
        while True:
            volume = volume_queue.get()
            if volume is None:
                return
            try:
                export_volume(volume, book_dir, config, allocator, collaborator)
                if on_volume_exported is not None:
                    on_volume_exported(volume)
            except Exception as e:
                error_slot.set(e)
                with live_lock:
                    live_workers -= 1
                    if live_workers == 0:
                        all_failed.set()
                return

    def submit(item: Volume | None) -> bool:
        while not all_failed.is_set():
            try:
                volume_queue.put(item, timeout=_SUBMIT_POLL_SECONDS)
                return True
            except queue.Full:
                continue
        return False

    threads = [
        threading.Thread(target=worker, name=f"mex-export-{i}", daemon=True)
        for i in range(workers)
    ]
    for thread in threads:
        thread.start()

    for volume in book.volumes.values():
        if not submit(volume):
            break
    for _ in threads:
        if not submit(None):
            break

    for thread in threads:
        thread.join()

    error = error_slot.get()
    if error is not None:
        raise error

    if config.compress_book:
        output_dir.mkdir(parents=True, exist_ok=True)
        return collaborator.compress(output_dir / name, book_dir)
    return book_dir
