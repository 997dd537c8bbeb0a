"""Documentation file discovery."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
}


def _normalise_pattern(pattern: str) -> str:
    pattern = pattern.strip().replace("\\", "/")
    if pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern


def glob_matches(rel_path: str, pattern: str) -> bool:
    """Return True when a root-relative POSIX path matches a glob pattern.

    ``*`` crosses directory separators as in :func:`fnmatch.fnmatchcase`, and a
    leading ``**/`` may also match zero directories.
    """
    if fnmatchcase(rel_path, pattern):
        return True
    if pattern.startswith("**/"):
        return glob_matches(rel_path, pattern[3:])
    return False


def _iter_files(root: Path) -> Iterator[tuple[Path, str]]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        for filename in filenames:
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            yield current_dir / filename, rel_path


class FileScanner:
    """Walks a documentation directory and returns the files in scope."""

    def scan(
        self,
        directory: str | Path,
        include: Sequence[str],
        exclude: Sequence[str] = (),
    ) -> List[str]:
        """Return sorted absolute paths matching ``include`` and not ``exclude``."""
        root = Path(directory).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Directory not found: {directory}")
        if not root.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {directory}")

        includes = [_normalise_pattern(p) for p in include if p.strip()]
        excludes = [_normalise_pattern(p) for p in exclude if p.strip()]

        found = set()
        for path, rel_path in _iter_files(root):
            if not any(glob_matches(rel_path, pattern) for pattern in includes):
                continue
            if any(glob_matches(rel_path, pattern) for pattern in excludes):
                continue
            found.add(str(path))
        return sorted(found)


__all__ = ["FileScanner", "glob_matches"]
