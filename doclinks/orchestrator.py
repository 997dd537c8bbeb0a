"""Pipeline orchestration for link check runs."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .config import DEFAULT_CONFIG, LinkCheckConfig
from .logging import get_logger
from .models import EXTERNAL, CheckSummary, ExtractedLink, LinkCheckResult, build_summary
from .redirects import RedirectMap, parse_redirects_file
from .scanner import FileScanner, LinkExtractor
from .validators import ExternalLinkValidator, InternalLinkValidator, LinkValidator
from .validators.external import Transport


@dataclass
class CheckReport:
    """Everything a reporter needs to render a finished run."""

    base_dir: str
    files: List[str]
    results: List[LinkCheckResult]
    summary: CheckSummary
    unreadable: List[Tuple[str, str]] = field(default_factory=list)


class Orchestrator:
    """Scans documents, extracts links, validates them and summarises the run."""

    def __init__(
        self,
        scanner: FileScanner | None = None,
        *,
        transport: Transport | None = None,
        external_validator: ExternalLinkValidator | None = None,
    ) -> None:
        self.scanner = scanner or FileScanner()
        self._transport = transport
        self._external_validator = external_validator
        self.logger = get_logger("orchestrator")

    def run_check(
        self,
        directory: str | Path,
        config: LinkCheckConfig = DEFAULT_CONFIG,
        *,
        redirects: Optional[RedirectMap] = None,
    ) -> CheckReport:
        """Run a full link check over ``directory``."""
        started = time.monotonic()
        base_dir = str(Path(directory).expanduser().resolve())
        self.logger.info("Scanning %s for documents", base_dir)

        files = self.scanner.scan(base_dir, config.include, config.exclude)
        self.logger.info("Found %d files", len(files))

        links, unreadable = self._extract(files, config)
        self.logger.info("Found %d links", len(links))

        if redirects is None and config.redirects_file:
            redirects = parse_redirects_file(config.redirects_file)

        internal_links = [link for link in links if link.is_internal]
        external_links = [link for link in links if link.type == EXTERNAL]

        results: List[LinkCheckResult] = []
        if internal_links and not config.external_only:
            validator: LinkValidator = InternalLinkValidator(
                base_dir, config, files, redirects=redirects
            )
            self.logger.info("Checking %d internal links", len(internal_links))
            results.extend(validator.validate(link) for link in internal_links)

        if external_links and not config.internal_only:
            external = self._external_validator or ExternalLinkValidator(
                config, transport=self._transport
            )
            self.logger.info("Checking %d external links", len(external_links))
            results.extend(external.validate_many(external_links))

        duration = int((time.monotonic() - started) * 1000)
        summary = build_summary(files, links, results, duration=duration)
        self.logger.debug(
            "Run finished: %d broken, %d timeouts, %d skipped",
            summary.broken,
            summary.timeouts,
            summary.skipped,
        )
        return CheckReport(
            base_dir=base_dir,
            files=files,
            results=results,
            summary=summary,
            unreadable=unreadable,
        )

    def _extract(
        self, files: List[str], config: LinkCheckConfig
    ) -> Tuple[List[ExtractedLink], List[Tuple[str, str]]]:
        extractor = LinkExtractor(config.custom_components)
        links: List[ExtractedLink] = []
        unreadable: List[Tuple[str, str]] = []
        for file_path in files:
            try:
                links.extend(extractor.extract_file(file_path))
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.warning("Could not read %s: %s", file_path, exc)
                unreadable.append((file_path, str(exc)))
        return links, unreadable


__all__ = ["CheckReport", "Orchestrator"]
