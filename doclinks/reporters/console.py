"""Plain-text console report."""

from __future__ import annotations

import sys
from typing import List, TextIO

from ..models import BROKEN, EXTERNAL, REDIRECTED, SKIPPED, TIMEOUT
from ..orchestrator import CheckReport
from .formatting import format_duration, relative_path

_RULE = "-" * 50


def report_console(
    report: CheckReport, *, verbose: bool = False, stream: TextIO | None = None
) -> None:
    """Write broken links, timeouts, redirects and a summary to ``stream``."""
    out = stream or sys.stdout
    lines = _render(report, verbose=verbose)
    out.write("\n".join(lines) + "\n")


def _location(report: CheckReport, result) -> str:
    rel = relative_path(result.link.source_file, report.base_dir)
    return f"{rel}:{result.link.line}:{result.link.column}"


def _render(report: CheckReport, *, verbose: bool) -> List[str]:
    results = report.results
    broken_internal = [r for r in results if r.status == BROKEN and r.link.is_internal]
    broken_external = [r for r in results if r.status == BROKEN and r.link.type == EXTERNAL]
    timeouts = [r for r in results if r.status == TIMEOUT]
    redirected = [r for r in results if r.status == REDIRECTED]
    skipped = [r for r in results if r.status == SKIPPED]

    lines: List[str] = [""]
    if broken_internal:
        lines.extend([f"BROKEN INTERNAL LINKS ({len(broken_internal)})", ""])
        for result in broken_internal:
            lines.append(f"  {_location(report, result)}")
            lines.append(f"  | {result.link.context}")
            lines.append(f"  `- {result.error}")
            if result.suggestions:
                lines.append(f"     Suggestions: {', '.join(result.suggestions)}")
            lines.append("")

    if broken_external:
        lines.extend([f"BROKEN EXTERNAL LINKS ({len(broken_external)})", ""])
        for result in broken_external:
            code = f" ({result.status_code})" if result.status_code else ""
            lines.append(f"  {_location(report, result)}")
            lines.append(f"  | {result.link.href}")
            lines.append(f"  `- {result.error}{code}")
            lines.append("")

    if timeouts:
        lines.extend([f"TIMEOUTS ({len(timeouts)})", ""])
        for result in timeouts:
            lines.append(f"  {_location(report, result)}")
            lines.append(f"  | {result.link.href}")
            lines.append(f"  `- {result.error}")
            lines.append("")

    if redirected:
        lines.extend([f"REDIRECTED LINKS ({len(redirected)})", ""])
        for result in redirected:
            lines.append(f"  {_location(report, result)}")
            lines.append(f"  | {result.link.href}")
            lines.append(f"  `- redirects to {result.redirect_destination}")
            lines.append("")

    if verbose and skipped:
        lines.extend([f"SKIPPED ({len(skipped)})", ""])
        for result in skipped:
            lines.append(f"  {_location(report, result)}")
            lines.append(f"  `- {result.link.href}")
        lines.append("")

    for path, error in report.unreadable:
        lines.append(f"UNREADABLE {relative_path(path, report.base_dir)}: {error}")

    summary = report.summary
    lines.extend(
        [
            _RULE,
            "SUMMARY",
            _RULE,
            f"  Files scanned     {summary.files_scanned}",
            f"  Total links       {summary.total_links}",
            f"  |- Internal       {summary.internal_links}",
            f"  `- External       {summary.external_links}",
            "",
            f"  Broken            {summary.broken}",
        ]
    )
    if summary.broken:
        lines.append(f"  |- Internal       {summary.broken_internal}")
        lines.append(f"  `- External       {summary.broken_external}")
    if summary.timeouts:
        lines.append(f"  Timeouts          {summary.timeouts}")
    if summary.redirected:
        lines.append(f"  Redirected        {summary.redirected}")
    if summary.skipped:
        lines.append(f"  Skipped           {summary.skipped}")
    lines.extend(["", f"  Duration          {format_duration(summary.duration)}", _RULE])
    return lines


__all__ = ["report_console"]
