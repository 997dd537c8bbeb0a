"""Formatting helpers shared by reporters."""

from __future__ import annotations

import os
from typing import Dict, Iterable, List

from ..models import LinkCheckResult


def format_duration(ms: int) -> str:
    if ms < 1000:
        return f"{ms}ms"
    return f"{ms / 1000:.1f}s"


def relative_path(file_path: str, base_dir: str) -> str:
    return os.path.relpath(file_path, base_dir).replace(os.sep, "/")


def group_by_file(
    results: Iterable[LinkCheckResult], base_dir: str
) -> Dict[str, List[LinkCheckResult]]:
    """Group results by base-relative source file, keeping first-seen order."""
    grouped: Dict[str, List[LinkCheckResult]] = {}
    for result in results:
        grouped.setdefault(relative_path(result.link.source_file, base_dir), []).append(result)
    return grouped


__all__ = ["format_duration", "group_by_file", "relative_path"]
