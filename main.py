#!/usr/bin/env python3
"""
mex - manga/comic book extractor

A command-line tool that normalizes multi-volume image books scattered across
nested directories and archives into one consistently-named output layout,
renumbering ambiguous or duplicated volumes and optionally re-compressing
the result as .cbz archives.

Usage:
    uv run main.py <input_path> [<output_dir>]
"""

from __future__ import annotations

import argparse
import sys
import traceback
from pathlib import Path

from rich.console import Console

from mex.config import Settings
from mex.errors import MexError, ToolExecutionFailed
from mex.processors.book_processor import BookProcessor

# Initialize Rich console for output
console = Console()

TEMPLATE_HELP = """
Templates:
  {{Index}} - index of current volume or page
  {{Name}}  - original filename and extension
  {{Ext}}   - original extension only

Environment variables (also read from a .env file):
  MEX_ZIP_BOOK, MEX_ZIP_VOLUME, MEX_LABEL_PAGE, MEX_LABEL_VOLUME,
  MEX_LABEL_BOOK, MEX_WORKERS, MEX_TEMP_DIR
"""


def _worker_count(value: str) -> int:
    try:
        workers = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid worker count: {value!r}") from e
    if workers < 1:
        raise argparse.ArgumentTypeError("worker count must be at least 1")
    return workers


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Build the argument parser with defaults taken from settings.

    Args:
        settings: Environment-derived defaults

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="mex",
        usage="mex [options] <input_path> [<output_dir>]",
        description="Normalize multi-volume image books into a canonical layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=TEMPLATE_HELP,
    )

    _ = parser.add_argument(
        "paths",
        nargs="*",
        metavar="path",
        help="input path followed by an optional output directory (default: current directory)",
    )

    _ = parser.add_argument(
        "--zip-book",
        action=argparse.BooleanOptionalAction,
        default=settings.zip_book,
        help="compress book as a cbz archive",
    )

    _ = parser.add_argument(
        "--zip-volume",
        action=argparse.BooleanOptionalAction,
        default=settings.zip_volume,
        help="compress volumes as cbz archives",
    )

    _ = parser.add_argument("--label-page", default=settings.label_page, help="page name template")
    _ = parser.add_argument("--label-volume", default=settings.label_volume, help="volume name template")
    _ = parser.add_argument("--label-book", default=settings.label_book, help="book name template")

    _ = parser.add_argument(
        "--workers",
        type=_worker_count,
        default=settings.workers,
        help="number of simultaneous workers",
    )

    _ = parser.add_argument(
        "--dry-run",
        action="store_true",
        help="scan and show the resolved volumes without writing anything",
    )

    _ = parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="enable verbose output for debugging",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the mex command.

    Returns:
        Process exit status
    """
    try:
        settings = Settings.from_env()
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if not 1 <= len(args.paths) <= 2:
        parser.print_usage(sys.stderr)
        return 2

    input_path = Path(args.paths[0])
    output_dir = Path(args.paths[1]) if len(args.paths) == 2 else None

    settings.zip_book = args.zip_book
    settings.zip_volume = args.zip_volume
    settings.label_page = args.label_page
    settings.label_volume = args.label_volume
    settings.label_book = args.label_book
    settings.workers = args.workers

    processor = BookProcessor(
        config=settings.export_config(),
        console=console,
        temp_root=settings.temp_dir,
    )

    try:
        processor.process(input_path, output_dir, dry_run=args.dry_run)
    except KeyboardInterrupt:
        console.print("\n[yellow]Processing interrupted by user.[/yellow]")
        return 1
    except (MexError, OSError) as e:
        processor.progress_tracker.display_error(f"Processing {input_path} failed", e)
        if args.verbose:
            if isinstance(e, ToolExecutionFailed) and e.output:
                console.print(e.output, style="dim", markup=False)
            console.print(traceback.format_exc(), style="dim", markup=False)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
