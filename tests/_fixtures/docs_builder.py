"""Helper utilities for constructing temporary documentation trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List, Mapping

from doclinks.scanner import FileScanner


class DocsBuilder:
    """Writes files into a throwaway docs directory and lists them back."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "docs"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the docs directory."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def file(self, relative: str) -> str:
        """Return the absolute path of a file inside the docs directory."""
        return str((self.root / relative).resolve())

    def scan(self) -> List[str]:
        """Return the Markdown/MDX files currently in the docs directory."""
        return FileScanner().scan(self.root, ["**/*.mdx", "**/*.md"])

    def path(self) -> Path:
        return self.root.resolve()


__all__ = ["DocsBuilder"]
