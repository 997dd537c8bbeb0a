"""Validation of external links via HTTP probes with retry, cache and bounded concurrency."""

from __future__ import annotations

import http.client
import re
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import HTTPRedirectHandler, Request, build_opener

from .. import __version__
from ..config import LinkCheckConfig
from ..logging import get_logger
from ..models import BROKEN, SKIPPED, TIMEOUT, VALID, ExtractedLink, LinkCheckResult
from ..stores import ResultCache, shared_cache

USER_AGENT = f"doclinks/{__version__} (Link Checker)"
METHOD_NOT_ALLOWED = 405
# Backoff before attempt n+1 is this many seconds times n.
BACKOFF_STEP = 1.0


class TransportError(RuntimeError):
    """Raised by a transport when a probe fails below the HTTP layer."""


class TransportTimeout(TransportError):
    """Raised by a transport when a probe exceeds its deadline."""


@dataclass(frozen=True)
class ProbeRequest:
    """A single HTTP probe issued by the external validator."""

    url: str
    method: str
    timeout: float
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProbeResponse:
    """Status of a probe after redirects have been followed."""

    status: int
    reason: str = ""
    url: Optional[str] = None

    @property
    def ok(self) -> bool:
        # A 3xx here means urllib gave up following the redirect.
        return 200 <= self.status < 300


Transport = Callable[[ProbeRequest], ProbeResponse]


class HeadPreservingRedirectHandler(HTTPRedirectHandler):
    """Follow redirects without turning a HEAD probe into a full GET."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        redirected = super().redirect_request(req, fp, code, msg, headers, newurl)
        if redirected is not None and req.get_method() == "HEAD":
            redirected.method = "HEAD"
        return redirected


_OPENER = build_opener(HeadPreservingRedirectHandler)


def open_url(request: Request, timeout: float):
    return _OPENER.open(request, timeout=timeout)


def _fetch(request: ProbeRequest) -> ProbeResponse:
    http_request = Request(request.url, headers=dict(request.headers), method=request.method)
    try:
        with open_url(http_request, request.timeout) as response:
            return ProbeResponse(
                status=response.status,
                reason=str(response.reason or ""),
                url=response.geturl(),
            )
    except HTTPError as exc:
        return ProbeResponse(status=exc.code, reason=str(exc.reason or ""), url=exc.geturl())
    except URLError as exc:
        if isinstance(exc.reason, TimeoutError):
            raise TransportTimeout(str(exc.reason)) from exc
        raise TransportError(str(exc.reason)) from exc
    except TimeoutError as exc:
        raise TransportTimeout(str(exc) or "timed out") from exc
    except (OSError, http.client.HTTPException, ValueError) as exc:
        raise TransportError(str(exc) or exc.__class__.__name__) from exc


def urllib_transport(request: ProbeRequest) -> ProbeResponse:
    """Issue ``request`` with urllib, following redirects.

    HTTP error statuses are returned as responses. Failures raise
    :class:`TransportError`, or :class:`TransportTimeout` when the whole
    exchange does not finish within ``request.timeout`` seconds. The request
    runs on a daemon thread so a server trickling bytes cannot hold the
    attempt open past its deadline.
    """
    outcome: Dict[str, object] = {}

    def _worker() -> None:
        try:
            outcome["response"] = _fetch(request)
        except Exception as exc:  # re-raised on the calling thread
            outcome["error"] = exc

    thread = threading.Thread(target=_worker, name="doclinks-probe", daemon=True)
    thread.start()
    thread.join(request.timeout)
    if thread.is_alive():
        raise TransportTimeout(f"No response within {request.timeout:g}s")
    if "error" in outcome:
        raise outcome["error"]  # type: ignore[misc]
    return outcome["response"]  # type: ignore[return-value]


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def should_ignore_url(
    href: str, ignore_patterns: Sequence[str], ignore_domains: Sequence[str]
) -> bool:
    """Return True when ``href`` matches an ignore pattern or ignored domain."""
    for pattern in ignore_patterns:
        if _glob_to_regex(pattern).fullmatch(href):
            return True
    if not ignore_domains:
        return False

    try:
        hostname = urlparse(href).hostname
    except ValueError:
        hostname = None
    if hostname:
        return hostname in ignore_domains
    return any(domain in href for domain in ignore_domains)


class ExternalLinkValidator:
    """Probes external links with HEAD (GET on 405), retrying transport failures."""

    name = "external"

    def __init__(
        self,
        config: LinkCheckConfig,
        *,
        transport: Transport | None = None,
        cache: ResultCache | None = None,
        sleep: Callable[[float], None] = time.sleep,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.config = config
        self.cache = cache if cache is not None else shared_cache()
        self._transport = transport or urllib_transport
        self._sleep = sleep
        self._timer = timer
        self._headers: Dict[str, str] = {"User-Agent": USER_AGENT}
        self.logger = get_logger("validators.external")

    def validate(self, link: ExtractedLink) -> LinkCheckResult:
        href = link.href
        if should_ignore_url(href, self.config.ignore_patterns, self.config.ignore_domains):
            self.logger.debug("Skipping ignored link %s", href)
            return LinkCheckResult(link=link, status=SKIPPED)

        hit = self.cache.get(href)
        if hit is not None:
            self.logger.debug("Cache hit for %s (%.1fs old)", href, hit.age)
            return hit.result.with_link(link)

        result = self._probe_with_retries(link)
        self.cache.put(href, result)
        return result

    def validate_many(self, links: Sequence[ExtractedLink]) -> List[LinkCheckResult]:
        """Validate ``links`` with at most ``config.concurrency`` probes in flight.

        Results come back in input order.
        """
        if not links:
            return []
        workers = min(self.config.concurrency, len(links))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="doclinks") as pool:
            return list(pool.map(self.validate, links))

    def _probe_with_retries(self, link: ExtractedLink) -> LinkCheckResult:
        attempts = 1 + self.config.retries
        timeout_seconds = self.config.timeout / 1000.0
        started = self._timer()

        attempt = 1
        while True:
            try:
                response = self._request(link.href, "HEAD", timeout_seconds)
                if response.status == METHOD_NOT_ALLOWED:
                    fallback = self._request(link.href, "GET", timeout_seconds)
                    if fallback.ok:
                        response = fallback
            except TransportError as exc:
                if attempt < attempts:
                    delay = BACKOFF_STEP * attempt
                    self.logger.debug(
                        "Attempt %d/%d for %s failed (%s); retrying in %.1fs",
                        attempt,
                        attempts,
                        link.href,
                        exc,
                        delay,
                    )
                    self._sleep(delay)
                    attempt += 1
                    continue
                return self._transport_failure(link, exc, started)

            elapsed = self._elapsed_ms(started)
            if response.ok:
                return LinkCheckResult(
                    link=link,
                    status=VALID,
                    status_code=response.status,
                    response_time=elapsed,
                )
            # A failing status is the server's answer; it is not retried.
            return LinkCheckResult(
                link=link,
                status=BROKEN,
                status_code=response.status,
                error=f"{response.status} {response.reason}".strip(),
                response_time=elapsed,
            )

    def _request(self, url: str, method: str, timeout: float) -> ProbeResponse:
        return self._transport(
            ProbeRequest(url=url, method=method, timeout=timeout, headers=self._headers)
        )

    def _transport_failure(
        self, link: ExtractedLink, exc: TransportError, started: float
    ) -> LinkCheckResult:
        elapsed = self._elapsed_ms(started)
        if isinstance(exc, TransportTimeout):
            return LinkCheckResult(
                link=link,
                status=TIMEOUT,
                error=f"Timeout after {self.config.timeout}ms",
                response_time=elapsed,
            )
        return LinkCheckResult(
            link=link,
            status=BROKEN,
            error=str(exc) or "Unknown error",
            response_time=elapsed,
        )

    def _elapsed_ms(self, started: float) -> int:
        return int(round((self._timer() - started) * 1000))


def validate_external_links(
    links: Sequence[ExtractedLink],
    config: LinkCheckConfig,
    *,
    transport: Transport | None = None,
) -> List[LinkCheckResult]:
    return ExternalLinkValidator(config, transport=transport).validate_many(links)


__all__ = [
    "ExternalLinkValidator",
    "HeadPreservingRedirectHandler",
    "ProbeRequest",
    "ProbeResponse",
    "Transport",
    "TransportError",
    "TransportTimeout",
    "USER_AGENT",
    "open_url",
    "should_ignore_url",
    "urllib_transport",
    "validate_external_links",
]
