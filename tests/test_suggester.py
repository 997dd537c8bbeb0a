"""Tests for doclinks.suggester."""

from __future__ import annotations

import pytest

from doclinks.suggester import levenshtein_distance, score_candidate, suggest_paths


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ("", "", 0),
        ("abc", "", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("same", "same", 0),
    ],
)
def test_levenshtein_distance(a: str, b: str, expected: int) -> None:
    assert levenshtein_distance(a, b) == expected
    assert levenshtein_distance(b, a) == expected


def test_related_candidate_outranks_unrelated() -> None:
    candidates = ["/guide/setup-advanced", "/guides/intro", "/completely/unrelated"]

    ranked = suggest_paths("/guide/setup", candidates)

    assert ranked[0] == "/guide/setup-advanced"
    assert score_candidate("/guide/setup", candidates[0]) > score_candidate(
        "/guide/setup", candidates[2]
    )
    if "/completely/unrelated" in ranked:
        assert ranked.index("/guide/setup-advanced") < ranked.index("/completely/unrelated")


def test_scoring_is_case_insensitive() -> None:
    assert score_candidate("/Guide/Setup", "/guide/setup.mdx") == score_candidate(
        "/guide/setup", "/guide/setup.mdx"
    )


def test_low_scores_are_excluded() -> None:
    assert suggest_paths("/abc", ["/zzzzzzzzzzzzzzzzzzzzzzzzzz"]) == []


def test_results_are_capped_and_ordered() -> None:
    candidates = [
        "/docs/api.mdx",
        "/docs/api/index.mdx",
        "/docs/api-reference.mdx",
        "/docs/api-v2.mdx",
    ]

    ranked = suggest_paths("/docs/api", candidates)

    assert len(ranked) == 3
    scores = [score_candidate("/docs/api", path) for path in ranked]
    assert scores == sorted(scores, reverse=True)


def test_long_strings_skip_edit_distance() -> None:
    target = "/" + "a" * 60
    candidate = "/" + "b" * 60

    assert score_candidate(target, candidate) == 0


def test_ties_keep_candidate_order() -> None:
    ranked = suggest_paths("/setup", ["/x/setup", "/y/setup"])

    assert ranked == ["/x/setup", "/y/setup"]
