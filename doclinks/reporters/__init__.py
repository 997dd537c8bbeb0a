"""Renderers for link check reports."""

from .console import report_console
from .formatting import format_duration
from .json_report import report_json
from .markdown import report_markdown

REPORTERS = ("console", "json", "markdown")

__all__ = ["REPORTERS", "format_duration", "report_console", "report_json", "report_markdown"]
