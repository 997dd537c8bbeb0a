from __future__ import annotations

import logging
from pathlib import Path

import pytest

from doclinks.models import ExtractedLink
from tests._fixtures.docs_builder import DocsBuilder


@pytest.fixture
def docs_builder(tmp_path: Path) -> DocsBuilder:
    """Provide a reusable docs builder rooted at the pytest tmp_path."""
    return DocsBuilder(tmp_path)


@pytest.fixture
def make_link():
    """Factory for ExtractedLink records with sensible defaults."""

    def factory(
        href: str,
        *,
        type: str = "internal",
        source_file: str = "/docs/index.mdx",
        line: int = 1,
        column: int = 1,
        context: str | None = None,
    ) -> ExtractedLink:
        return ExtractedLink(
            type=type,
            href=href,
            source_file=source_file,
            line=line,
            column=column,
            context=context if context is not None else f"[link]({href})",
        )

    return factory


@pytest.fixture(autouse=True)
def _reset_doclinks_logger():
    """Undo configure_logging() side effects so caplog sees doclinks records."""
    yield
    logger = logging.getLogger("doclinks")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
