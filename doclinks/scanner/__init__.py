"""Document discovery and link extraction."""

from .extractor import (
    LinkExtractor,
    classify_link,
    extract_links,
    extract_links_from_file,
)
from .files import FileScanner

__all__ = [
    "FileScanner",
    "LinkExtractor",
    "classify_link",
    "extract_links",
    "extract_links_from_file",
]
