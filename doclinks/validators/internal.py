"""Validation of internal, anchor and asset links against the filesystem."""

from __future__ import annotations

import os
from typing import Iterable, List, Optional, Sequence

from ..config import LinkCheckConfig
from ..logging import get_logger
from ..models import BROKEN, REDIRECTED, VALID, ExtractedLink, LinkCheckResult
from ..redirects import RedirectMap, lookup_redirect
from ..suggester import suggest_paths

# Tried in order, appended to the resolved path, when it does not exist as written.
FALLBACK_SUFFIXES = (
    ".mdx",
    ".md",
    "/index.mdx",
    "/index.md",
    ".tsx",
    ".ts",
    ".jsx",
    ".js",
)

NOT_FOUND = "File not found"


def resolve_internal_path(href: str, source_file: str, base_dir: str) -> str:
    """Resolve an href (fragment removed) to an absolute filesystem path.

    Leading ``/`` means the base directory; anything else is relative to the
    directory of ``source_file``. Normalisation is lexical.
    """
    path = href.split("#", 1)[0]
    if not path:
        return source_file
    if path.startswith("/"):
        return os.path.abspath(os.path.join(base_dir, path.lstrip("/")))
    return os.path.abspath(os.path.join(os.path.dirname(source_file), path))


def find_existing(path: str) -> Optional[str]:
    """Return ``path`` or its first existing fallback variant."""
    if os.path.exists(path):
        return path
    for suffix in FALLBACK_SUFFIXES:
        candidate = path + suffix
        if os.path.exists(candidate):
            return candidate
    return None


def root_relative_paths(files: Iterable[str], base_dir: str) -> List[str]:
    """Render scanned files as ``/``-prefixed POSIX paths relative to ``base_dir``."""
    rendered = []
    for file_path in files:
        relative = os.path.relpath(file_path, base_dir).replace(os.sep, "/")
        rendered.append("/" + relative)
    return rendered


class InternalLinkValidator:
    """Checks that internal targets exist, trying extensions and route prefixes."""

    name = "internal"

    def __init__(
        self,
        base_dir: str,
        config: LinkCheckConfig,
        files: Sequence[str],
        *,
        redirects: RedirectMap | None = None,
    ) -> None:
        self.base_dir = os.path.abspath(base_dir)
        self.config = config
        self.files = list(files)
        self.redirects = redirects or {}
        self.logger = get_logger("validators.internal")
        self._candidates: List[str] | None = None

    def validate(self, link: ExtractedLink) -> LinkCheckResult:
        path = link.href.split("#", 1)[0]
        if not path:
            # Same-document anchor; fragment targets are not verified.
            return LinkCheckResult(link=link, status=VALID)

        found = self._locate(path, link.source_file)
        if found is not None:
            self.logger.debug("%s resolved to %s", link.href, found)
            return LinkCheckResult(link=link, status=VALID)

        destination = lookup_redirect(link.href, self.redirects) if self.redirects else None
        if destination is not None:
            return LinkCheckResult(
                link=link,
                status=REDIRECTED,
                redirect_destination=destination,
            )

        suggestions = suggest_paths(path, self._suggestion_candidates())
        self.logger.debug("%s not found (%d suggestions)", link.href, len(suggestions))
        return LinkCheckResult(
            link=link,
            status=BROKEN,
            error=NOT_FOUND,
            suggestions=tuple(suggestions) if suggestions else None,
        )

    def _locate(self, path: str, source_file: str) -> Optional[str]:
        found = find_existing(resolve_internal_path(path, source_file, self.base_dir))
        if found is not None or not path.startswith("/"):
            return found
        for prefix in self.config.route_prefixes:
            prefixed_base = os.path.join(self.base_dir, prefix.strip("/"))
            found = find_existing(resolve_internal_path(path, source_file, prefixed_base))
            if found is not None:
                return found
        return None

    def _suggestion_candidates(self) -> List[str]:
        if self._candidates is None:
            self._candidates = root_relative_paths(self.files, self.base_dir)
        return self._candidates


def validate_internal_link(
    link: ExtractedLink,
    base_dir: str,
    config: LinkCheckConfig,
    files: Sequence[str],
    *,
    redirects: RedirectMap | None = None,
) -> LinkCheckResult:
    """Validate a single internal link without keeping a validator around."""
    validator = InternalLinkValidator(base_dir, config, files, redirects=redirects)
    return validator.validate(link)


__all__ = [
    "FALLBACK_SUFFIXES",
    "InternalLinkValidator",
    "NOT_FOUND",
    "find_existing",
    "resolve_internal_path",
    "root_relative_paths",
    "validate_internal_link",
]
