"""Link validators for internal and external targets."""

from .base import LinkValidator
from .external import (
    ExternalLinkValidator,
    ProbeRequest,
    ProbeResponse,
    TransportError,
    TransportTimeout,
    should_ignore_url,
    validate_external_links,
)
from .internal import InternalLinkValidator, validate_internal_link

__all__ = [
    "ExternalLinkValidator",
    "InternalLinkValidator",
    "LinkValidator",
    "ProbeRequest",
    "ProbeResponse",
    "TransportError",
    "TransportTimeout",
    "should_ignore_url",
    "validate_external_links",
    "validate_internal_link",
]
