"""JSON report with camelCase keys."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from ..models import BROKEN, REDIRECTED, SKIPPED, TIMEOUT, CheckSummary
from ..orchestrator import CheckReport
from .formatting import relative_path


def _summary_payload(summary: CheckSummary) -> Dict[str, int]:
    return {
        "filesScanned": summary.files_scanned,
        "totalLinks": summary.total_links,
        "internalLinks": summary.internal_links,
        "externalLinks": summary.external_links,
        "brokenInternal": summary.broken_internal,
        "brokenExternal": summary.broken_external,
        "skipped": summary.skipped,
        "timeouts": summary.timeouts,
        "redirected": summary.redirected,
        "duration": summary.duration,
    }


def _drop_none(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


def build_json_payload(report: CheckReport) -> Dict[str, Any]:
    broken: List[Dict[str, Any]] = []
    redirected: List[Dict[str, Any]] = []
    skipped: List[Dict[str, Any]] = []
    for result in report.results:
        link = result.link
        source = relative_path(link.source_file, report.base_dir)
        if result.status in (BROKEN, TIMEOUT):
            broken.append(
                _drop_none(
                    {
                        "type": link.type,
                        "href": link.href,
                        "sourceFile": source,
                        "line": link.line,
                        "column": link.column,
                        "context": link.context,
                        "status": result.status,
                        "error": result.error,
                        "statusCode": result.status_code,
                        "suggestions": list(result.suggestions) if result.suggestions else None,
                    }
                )
            )
        elif result.status == REDIRECTED:
            redirected.append(
                {
                    "href": link.href,
                    "sourceFile": source,
                    "line": link.line,
                    "column": link.column,
                    "destination": result.redirect_destination or "",
                }
            )
        elif result.status == SKIPPED:
            skipped.append(
                {
                    "href": link.href,
                    "sourceFile": source,
                    "line": link.line,
                    "reason": "Matched ignore pattern",
                }
            )
    return {
        "summary": _summary_payload(report.summary),
        "broken": broken,
        "redirected": redirected,
        "skipped": skipped,
    }


def report_json(report: CheckReport) -> str:
    return json.dumps(build_json_payload(report), indent=2)


__all__ = ["build_json_payload", "report_json"]
