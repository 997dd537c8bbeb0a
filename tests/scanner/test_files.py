"""Tests for doclinks.scanner.files."""

from __future__ import annotations

from pathlib import Path

import pytest

from doclinks.scanner.files import FileScanner, glob_matches


def _write(path: Path, content: str = "# doc\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.mark.parametrize(
    ("rel_path", "pattern", "expected"),
    [
        ("index.mdx", "**/*.mdx", True),
        ("guide/setup.mdx", "**/*.mdx", True),
        ("guide/setup.md", "**/*.mdx", False),
        ("dist/out.md", "**/dist/**", True),
        ("a/dist/out.md", "**/dist/**", True),
        ("distant/out.md", "**/dist/**", False),
    ],
)
def test_glob_matches(rel_path: str, pattern: str, expected: bool) -> None:
    assert glob_matches(rel_path, pattern) is expected


def test_scan_applies_include_and_exclude(tmp_path: Path) -> None:
    root = tmp_path / "site"
    _write(root / "index.mdx")
    _write(root / "guide" / "setup.md")
    _write(root / "guide" / "notes.txt")
    _write(root / "dist" / "bundle.md")
    _write(root / "node_modules" / "pkg" / "README.md")

    files = FileScanner().scan(
        root,
        include=["./**/*.mdx", "./**/*.md"],
        exclude=["**/node_modules/**", "**/dist/**"],
    )

    assert files == sorted(
        [str((root / "index.mdx").resolve()), str((root / "guide" / "setup.md").resolve())]
    )


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        FileScanner().scan(tmp_path / "missing", ["**/*.md"])


def test_scan_rejects_file_path(tmp_path: Path) -> None:
    target = tmp_path / "page.md"
    _write(target)

    with pytest.raises(NotADirectoryError):
        FileScanner().scan(target, ["**/*.md"])
