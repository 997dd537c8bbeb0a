"""Link extraction from Markdown/MDX documentation sources."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Pattern, Sequence

from ..models import ANCHOR, ASSET, EXTERNAL, INTERNAL, ExtractedLink

SPECIAL_PROTOCOLS = ("mailto:", "tel:", "javascript:", "data:", "ftp:", "file:")
EXTERNAL_PREFIXES = ("http://", "https://")
ASSET_EXTENSIONS = (
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".svg",
    ".webp",
    ".ico",
    ".mp4",
    ".webm",
    ".mp3",
    ".wav",
    ".pdf",
)

_FENCE_MARKERS = ("```", "~~~")
_COMMENT_OPENER = "<!--"


@dataclass(frozen=True)
class LineMatcher:
    """A single per-line pattern and the group holding the link target."""

    name: str
    pattern: Pattern[str]
    group: int
    strip: bool = False

    def scan(self, line: str) -> Iterator[tuple[str, int, str]]:
        for match in self.pattern.finditer(line):
            href = match.group(self.group)
            if self.strip:
                href = href.strip()
            yield href, match.start() + 1, match.group(0)


MARKDOWN_LINK = LineMatcher(
    "markdown", re.compile(r"\[([^\]]*)\]\(([^)]+)\)"), group=2, strip=True
)
MARKDOWN_IMAGE = LineMatcher(
    "image", re.compile(r"!\[([^\]]*)\]\(([^)]+)\)"), group=2, strip=True
)
HTML_ANCHOR = LineMatcher(
    "anchor-tag",
    re.compile(r"""<a\s+[^>]*href=["']([^"']+)["'][^>]*>""", re.IGNORECASE),
    group=1,
)


def component_matcher(name: str) -> LineMatcher:
    """Build a matcher for ``<Name ... href="...">`` JSX-style components."""
    pattern = re.compile(
        rf"""<{re.escape(name)}\s+[^>]*href=["']([^"']+)["'][^>]*/?>"""
    )
    return LineMatcher(f"component:{name}", pattern, group=1)


def build_matchers(custom_components: Iterable[str]) -> List[LineMatcher]:
    matchers = [MARKDOWN_LINK, MARKDOWN_IMAGE]
    matchers.extend(component_matcher(name) for name in custom_components if name)
    matchers.append(HTML_ANCHOR)
    return matchers


def is_special_protocol(href: str) -> bool:
    return href.startswith(SPECIAL_PROTOCOLS)


def is_external_url(href: str) -> bool:
    return href.startswith(EXTERNAL_PREFIXES)


def classify_link(href: str) -> str:
    """Return the link type for ``href``; depends on the href alone."""
    if is_external_url(href):
        return EXTERNAL
    if href.startswith("#"):
        return ANCHOR
    bare = href.lower().split("#", 1)[0].split("?", 1)[0]
    if bare.endswith(ASSET_EXTENSIONS):
        return ASSET
    return INTERNAL


class LinkExtractor:
    """Scans document text line by line, suppressing fenced code and comments."""

    def __init__(self, custom_components: Sequence[str] = ()) -> None:
        self.custom_components = tuple(custom_components)
        self._matchers = build_matchers(self.custom_components)

    def extract(self, text: str, source_file: str) -> List[ExtractedLink]:
        """Return every checkable link found in ``text``."""
        links: List[ExtractedLink] = []
        for line_number, line in self._scannable_lines(text):
            for matcher in self._matchers:
                for href, column, context in matcher.scan(line):
                    if not href.strip() or is_special_protocol(href):
                        continue
                    links.append(
                        ExtractedLink(
                            type=classify_link(href),
                            href=href,
                            source_file=source_file,
                            line=line_number,
                            column=column,
                            context=context,
                        )
                    )
        return links

    def extract_file(self, path: Path | str) -> List[ExtractedLink]:
        """Read ``path`` as UTF-8 and extract its links.

        Unreadable files raise ``OSError`` or ``UnicodeDecodeError``; the caller
        decides how to report them.
        """
        file_path = Path(path).resolve()
        text = file_path.read_text(encoding="utf-8")
        return self.extract(text, str(file_path))

    @staticmethod
    def _scannable_lines(text: str) -> Iterator[tuple[int, str]]:
        in_fence = False
        for index, line in enumerate(text.split("\n")):
            stripped = line.strip()
            if stripped.startswith(_FENCE_MARKERS):
                in_fence = not in_fence
                continue
            if in_fence:
                continue
            # Single-line comments only; multi-line comment bodies are scanned.
            if stripped.startswith(_COMMENT_OPENER):
                continue
            yield index + 1, line


def extract_links(
    text: str, source_file: str, custom_components: Sequence[str] = ()
) -> List[ExtractedLink]:
    """Convenience wrapper around :class:`LinkExtractor`."""
    return LinkExtractor(custom_components).extract(text, source_file)


def extract_links_from_file(
    path: Path | str, custom_components: Sequence[str] = ()
) -> List[ExtractedLink]:
    return LinkExtractor(custom_components).extract_file(path)


__all__ = [
    "ASSET_EXTENSIONS",
    "SPECIAL_PROTOCOLS",
    "LineMatcher",
    "LinkExtractor",
    "build_matchers",
    "classify_link",
    "component_matcher",
    "extract_links",
    "extract_links_from_file",
    "is_external_url",
    "is_special_protocol",
]
