"""Ranking of likely intended targets for broken internal links."""

from __future__ import annotations

from typing import List, Sequence, Tuple

MAX_SUGGESTIONS = 3
MIN_SCORE = 2.0
# Edit distance is only computed when both strings are shorter than this.
_EDIT_DISTANCE_LIMIT = 50


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum single-character inserts, deletes and substitutions to turn a into b."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def _last_segment(path: str) -> str:
    parts = [part for part in path.split("/") if part]
    return parts[-1] if parts else ""


def score_candidate(target: str, candidate: str) -> float:
    """Return the relevance score of ``candidate`` for a broken ``target``."""
    target_lower = target.lower()
    candidate_lower = candidate.lower()
    score = 0.0

    if candidate_lower in target_lower or target_lower in candidate_lower:
        score += 10

    target_file = _last_segment(target_lower)
    candidate_file = _last_segment(candidate_lower)
    if target_file and candidate_file and target_file in candidate_file:
        score += 5

    if len(target_lower) < _EDIT_DISTANCE_LIMIT and len(candidate_lower) < _EDIT_DISTANCE_LIMIT:
        longest = max(len(target_lower), len(candidate_lower))
        if longest:
            distance = levenshtein_distance(target_lower, candidate_lower)
            score += max(0.0, (1 - distance / longest) * 5)

    return score


def suggest_paths(
    target: str,
    candidates: Sequence[str],
    max_suggestions: int = MAX_SUGGESTIONS,
) -> List[str]:
    """Return up to ``max_suggestions`` candidates ranked best-first."""
    scored: List[Tuple[float, str]] = []
    for candidate in candidates:
        score = score_candidate(target, candidate)
        if score > MIN_SCORE:
            scored.append((score, candidate))
    # sorted() is stable, so equal scores keep candidate order.
    ranked = sorted(scored, key=lambda item: item[0], reverse=True)
    return [candidate for _, candidate in ranked[:max_suggestions]]


__all__ = ["MAX_SUGGESTIONS", "levenshtein_distance", "score_candidate", "suggest_paths"]
