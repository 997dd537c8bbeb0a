"""Tests for the in-memory result cache."""

from __future__ import annotations

import threading

from doclinks.models import ExtractedLink, LinkCheckResult
from doclinks.stores import ResultCache, shared_cache


def _result(href: str = "https://example.com") -> LinkCheckResult:
    link = ExtractedLink(
        type="external",
        href=href,
        source_file="/docs/index.mdx",
        line=1,
        column=1,
        context=f"[x]({href})",
    )
    return LinkCheckResult(link=link, status="valid", status_code=200)


def test_get_returns_live_entry_with_age() -> None:
    now = [100.0]
    cache = ResultCache(ttl=300.0, clock=lambda: now[0])
    result = _result()

    cache.put("https://example.com", result)
    now[0] = 160.0
    hit = cache.get("https://example.com")

    assert hit is not None
    assert hit.result == result
    assert hit.age == 60.0


def test_stale_entries_read_as_absent_and_are_dropped() -> None:
    now = [0.0]
    cache = ResultCache(ttl=300.0, clock=lambda: now[0])
    cache.put("https://example.com", _result())

    now[0] = 300.0

    assert cache.get("https://example.com") is None
    assert len(cache) == 0


def test_keys_are_exact_hrefs() -> None:
    cache = ResultCache()
    cache.put("https://example.com", _result())

    assert cache.get("https://example.com/") is None


def test_clear_removes_entries() -> None:
    cache = ResultCache()
    cache.put("a", _result("a"))
    cache.clear()

    assert cache.get("a") is None


def test_concurrent_puts_are_all_stored() -> None:
    cache = ResultCache()

    def writer(offset: int) -> None:
        for index in range(50):
            key = f"https://example.com/{offset}/{index}"
            cache.put(key, _result(key))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 400


def test_shared_cache_is_a_singleton() -> None:
    assert shared_cache() is shared_cache()
    assert shared_cache().ttl == 300.0
