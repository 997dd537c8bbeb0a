"""Tests for doclinks.validators.internal."""

from __future__ import annotations

import os

import pytest

from doclinks.config import DEFAULT_CONFIG, merge_config
from doclinks.validators import ExternalLinkValidator, LinkValidator
from doclinks.validators.internal import (
    InternalLinkValidator,
    resolve_internal_path,
    root_relative_paths,
    validate_internal_link,
)


@pytest.fixture
def docs(docs_builder):
    docs_builder.write(
        {
            "index.mdx": "# Home\n",
            "intro.mdx": "# Intro\n",
            "guide/setup.md": "# Setup\n",
            "guide/setup-advanced.mdx": "# Advanced\n",
            "api/index.mdx": "# API\n",
            "static/logo.png": "png",
            "components/Button.tsx": "export {}\n",
            "docs/versioned/page.mdx": "# Versioned\n",
        }
    )
    return docs_builder


def _check(docs, link, config=DEFAULT_CONFIG, **kwargs):
    return validate_internal_link(link, str(docs.path()), config, docs.scan(), **kwargs)


def test_existing_relative_file_is_valid(docs, make_link) -> None:
    link = make_link("./intro.mdx", source_file=docs.file("index.mdx"))

    assert _check(docs, link).status == "valid"


def test_missing_file_is_broken(docs, make_link) -> None:
    link = make_link("./missing.mdx", source_file=docs.file("index.mdx"))

    result = _check(docs, link)

    assert result.status == "broken"
    assert "File not found" in result.error
    assert result.link is link


def test_fragment_is_ignored_for_resolution(docs, make_link) -> None:
    source = docs.file("index.mdx")
    plain = _check(docs, make_link("./intro.mdx", source_file=source))
    with_fragment = _check(docs, make_link("./intro.mdx#section", source_file=source))

    assert plain.status == with_fragment.status == "valid"


def test_same_document_anchor_is_valid(docs, make_link) -> None:
    link = make_link("#getting-started", type="anchor", source_file=docs.file("index.mdx"))

    assert _check(docs, link).status == "valid"


@pytest.mark.parametrize(
    "href",
    ["/guide/setup", "/intro", "/api", "./guide/setup", "/components/Button", "/static/logo.png"],
)
def test_extension_and_index_fallbacks(docs, make_link, href: str) -> None:
    link = make_link(href, source_file=docs.file("index.mdx"))

    assert _check(docs, link).status == "valid"


def test_relative_links_resolve_from_source_directory(docs, make_link) -> None:
    link = make_link("../intro", source_file=docs.file("guide/setup.md"))

    assert _check(docs, link).status == "valid"


def test_route_prefixes_are_tried_in_order(docs, make_link) -> None:
    link = make_link("/page", source_file=docs.file("index.mdx"))
    config = merge_config(DEFAULT_CONFIG, {"route_prefixes": ["missing", "docs/versioned"]})

    assert _check(docs, link).status == "broken"
    assert _check(docs, link, config).status == "valid"


def test_route_prefixes_do_not_apply_to_relative_links(docs, make_link) -> None:
    link = make_link("./page", source_file=docs.file("index.mdx"))
    config = merge_config(DEFAULT_CONFIG, {"route_prefixes": ["docs/versioned"]})

    assert _check(docs, link, config).status == "broken"


def test_broken_link_gets_suggestions(docs, make_link) -> None:
    link = make_link("/guide/setpu", source_file=docs.file("index.mdx"))

    result = _check(docs, link)

    assert result.status == "broken"
    assert result.suggestions
    assert result.suggestions[0].startswith("/guide/setup")
    assert len(result.suggestions) <= 3


def test_suggestions_omitted_when_nothing_scores(docs, make_link) -> None:
    link = make_link(
        "/zzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzz",
        source_file=docs.file("index.mdx"),
    )

    result = _check(docs, link)

    assert result.status == "broken"
    assert result.suggestions is None


def test_redirect_map_marks_link_redirected(docs, make_link) -> None:
    link = make_link("/old-setup#install", source_file=docs.file("index.mdx"))

    result = _check(docs, link, redirects={"/old-setup": "/guide/setup"})

    assert result.status == "redirected"
    assert result.redirect_destination == "/guide/setup"


def test_existing_file_wins_over_redirect(docs, make_link) -> None:
    link = make_link("/intro", source_file=docs.file("index.mdx"))

    result = _check(docs, link, redirects={"/intro": "/elsewhere"})

    assert result.status == "valid"


def test_resolve_internal_path() -> None:
    base = os.path.abspath("/site")
    source = os.path.join(base, "guide", "page.mdx")

    assert resolve_internal_path("/intro", source, base) == os.path.join(base, "intro")
    assert resolve_internal_path("./a/../b.md#x", source, base) == os.path.join(
        base, "guide", "b.md"
    )
    assert resolve_internal_path("#x", source, base) == source


def test_root_relative_paths(docs) -> None:
    rendered = root_relative_paths(docs.scan(), str(docs.path()))

    assert "/guide/setup.md" in rendered
    assert all(path.startswith("/") for path in rendered)


def test_validator_reuses_candidates(docs, make_link) -> None:
    validator = InternalLinkValidator(str(docs.path()), DEFAULT_CONFIG, docs.scan())
    source = docs.file("index.mdx")

    first = validator.validate(make_link("/nope-one", source_file=source))
    second = validator.validate(make_link("/nope-two", source_file=source))

    assert first.status == second.status == "broken"


def test_validators_satisfy_link_validator_protocol(docs) -> None:
    internal = InternalLinkValidator(str(docs.path()), DEFAULT_CONFIG, docs.scan())
    external = ExternalLinkValidator(DEFAULT_CONFIG, transport=lambda request: None)

    assert isinstance(internal, LinkValidator)
    assert isinstance(external, LinkValidator)
