"""Shared validator protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import ExtractedLink, LinkCheckResult


@runtime_checkable
class LinkValidator(Protocol):
    """Protocol implemented by link validators."""

    name: str

    def validate(self, link: ExtractedLink) -> LinkCheckResult:
        """Check one link and return its result; failures are data, not exceptions."""


__all__ = ["LinkValidator"]
