"""Markdown report rendered through a Jinja2 template."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ..models import BROKEN, EXTERNAL, REDIRECTED, TIMEOUT
from ..orchestrator import CheckReport
from .formatting import format_duration, group_by_file

_TEMPLATE_NAME = "report.md.j2"


def _create_env(templates_dir: Path | None = None) -> Environment:
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(Path(__file__).with_name("templates")))
    loader = FileSystemLoader(directories)
    return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def report_markdown(
    report: CheckReport,
    *,
    generated_at: datetime | None = None,
    templates_dir: Path | None = None,
) -> str:
    """Render ``report`` as Markdown; ``templates_dir`` may override the template."""
    failing = [r for r in report.results if r.status in (BROKEN, TIMEOUT)]
    broken_internal = [r for r in failing if r.link.is_internal]
    broken_external = [r for r in failing if r.link.type == EXTERNAL]
    redirected = [r for r in report.results if r.status == REDIRECTED]

    timestamp = (generated_at or datetime.now(UTC)).isoformat().replace("+00:00", "Z")
    template = _create_env(templates_dir).get_template(_TEMPLATE_NAME)
    rendered = template.render(
        generated_at=timestamp,
        summary=report.summary,
        duration=format_duration(report.summary.duration),
        broken_internal=group_by_file(broken_internal, report.base_dir),
        broken_internal_count=len(broken_internal),
        broken_external=group_by_file(broken_external, report.base_dir),
        broken_external_count=len(broken_external),
        redirected=group_by_file(redirected, report.base_dir),
        redirected_count=len(redirected),
    )
    return rendered.rstrip() + "\n"


__all__ = ["report_markdown"]
