"""Redirect map parsing for renamed documentation pages."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Dict, Optional

from .logging import get_logger

RedirectMap = Dict[str, str]

_OBJECT_PATTERN = re.compile(
    r"(?:const|let|var)\s+\w+\s*(?::[^=]+)?\s*=\s*\{([^}]+(?:\{[^}]*\}[^}]*)*)\}"
)
_ENTRY_PATTERN = re.compile(r"""['"]([^'"]+)['"]\s*:\s*['"]([^'"]+)['"]""")

logger = get_logger("redirects")


def normalize_redirect_path(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


def parse_redirects_file(path: Path | str) -> RedirectMap:
    """Load a redirect map from a JSON object or a TS/JS object literal file.

    Problems are logged and produce an empty map; a bad redirect file never
    stops a run.
    """
    file_path = Path(path)
    if not file_path.exists():
        logger.warning("Redirects file not found: %s", file_path)
        return {}

    suffix = file_path.suffix.lower()
    if suffix not in {".json", ".ts", ".js"}:
        logger.warning("Unsupported redirects file format: %s", suffix or file_path.name)
        return {}

    try:
        content = file_path.read_text(encoding="utf-8")
        if suffix == ".json":
            return _parse_json_redirects(content)
        return _parse_script_redirects(content)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.warning("Failed to parse redirects file %s: %s", file_path, exc)
        return {}


def _parse_json_redirects(content: str) -> RedirectMap:
    parsed = json.loads(content)
    if not isinstance(parsed, dict):
        raise ValueError("JSON redirects file must contain an object")
    return {
        normalize_redirect_path(str(source)): destination
        for source, destination in parsed.items()
        if isinstance(destination, str)
    }


def _parse_script_redirects(content: str) -> RedirectMap:
    redirects: RedirectMap = {}
    for block in _OBJECT_PATTERN.finditer(content):
        for source, destination in _ENTRY_PATTERN.findall(block.group(1)):
            redirects[normalize_redirect_path(source)] = destination
    return redirects


def lookup_redirect(href: str, redirects: RedirectMap) -> Optional[str]:
    """Return the redirect destination for ``href``, ignoring its fragment."""
    lookup = href.split("#", 1)[0]
    if lookup in redirects:
        return redirects[lookup]
    if len(lookup) > 1 and lookup.endswith("/"):
        trimmed = lookup[:-1]
        if trimmed in redirects:
            return redirects[trimmed]
    elif f"{lookup}/" in redirects:
        return redirects[f"{lookup}/"]
    return None


__all__ = ["RedirectMap", "lookup_redirect", "normalize_redirect_path", "parse_redirects_file"]
