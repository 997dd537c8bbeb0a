"""Core data models shared across doclinks components."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence, Tuple

INTERNAL = "internal"
EXTERNAL = "external"
ANCHOR = "anchor"
ASSET = "asset"

# Link types resolved against the filesystem rather than the network.
INTERNAL_TYPES = (INTERNAL, ANCHOR, ASSET)

VALID = "valid"
BROKEN = "broken"
SKIPPED = "skipped"
TIMEOUT = "timeout"
REDIRECTED = "redirected"


@dataclass(frozen=True)
class ExtractedLink:
    """One link occurrence found in a documentation source."""

    type: str
    href: str
    source_file: str
    line: int
    column: int
    context: str

    @property
    def is_internal(self) -> bool:
        return self.type in INTERNAL_TYPES


@dataclass(frozen=True)
class LinkCheckResult:
    """Outcome of validating a single extracted link."""

    link: ExtractedLink
    status: str
    status_code: Optional[int] = None
    error: Optional[str] = None
    suggestions: Optional[Tuple[str, ...]] = None
    response_time: Optional[int] = None
    redirect_destination: Optional[str] = None

    def with_link(self, link: ExtractedLink) -> "LinkCheckResult":
        """Return a copy of this result attached to ``link``."""
        return replace(self, link=link)


@dataclass
class CheckSummary:
    """Aggregate counters describing a link check run."""

    files_scanned: int = 0
    total_links: int = 0
    internal_links: int = 0
    external_links: int = 0
    broken_internal: int = 0
    broken_external: int = 0
    skipped: int = 0
    timeouts: int = 0
    redirected: int = 0
    duration: int = 0

    @property
    def broken(self) -> int:
        return self.broken_internal + self.broken_external

    def has_failures(self, *, fail_on_redirects: bool = False) -> bool:
        failures = self.broken + self.timeouts
        if fail_on_redirects:
            failures += self.redirected
        return failures > 0


def build_summary(
    files: Sequence[str],
    links: Iterable[ExtractedLink],
    results: Iterable[LinkCheckResult],
    *,
    duration: int = 0,
) -> CheckSummary:
    """Derive summary counters from the extracted links and their results."""
    summary = CheckSummary(files_scanned=len(files), duration=duration)
    for link in links:
        summary.total_links += 1
        if link.is_internal:
            summary.internal_links += 1
        elif link.type == EXTERNAL:
            summary.external_links += 1

    for result in results:
        if result.status == BROKEN:
            if result.link.is_internal:
                summary.broken_internal += 1
            else:
                summary.broken_external += 1
        elif result.status == SKIPPED:
            summary.skipped += 1
        elif result.status == TIMEOUT:
            summary.timeouts += 1
        elif result.status == REDIRECTED:
            summary.redirected += 1
    return summary


__all__ = [
    "ANCHOR",
    "ASSET",
    "BROKEN",
    "EXTERNAL",
    "INTERNAL",
    "INTERNAL_TYPES",
    "REDIRECTED",
    "SKIPPED",
    "TIMEOUT",
    "VALID",
    "CheckSummary",
    "ExtractedLink",
    "LinkCheckResult",
    "build_summary",
]
