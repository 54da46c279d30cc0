"""Volume discovery and index parsing utilities."""

from .image_collector import IMAGE_EXTENSIONS, is_image_name
from .volume_index import DEFAULT_VOLUME_PATTERNS, compile_patterns, parse_volume_index
from .volume_parser import VolumeParser, parse_book

__all__ = [
    "DEFAULT_VOLUME_PATTERNS",
    "IMAGE_EXTENSIONS",
    "VolumeParser",
    "compile_patterns",
    "is_image_name",
    "parse_book",
    "parse_volume_index",
]
