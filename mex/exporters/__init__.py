"""Rendering of resolved books to directories and archives."""

from .export_pipeline import ExportConfig, export_book
from .naming import render_name, strip_ext

__all__ = ["ExportConfig", "export_book", "render_name", "strip_ext"]
