# Exception types shared across the pipeline.
# The FastAPI layer (app.py) is the only place that turns these into HTTP responses.

from __future__ import annotations
from typing import Optional


class ConciergeError(Exception):
    """Base class for every error raised by the service."""


class ConfigLoadError(ConciergeError):
    """A knowledge configuration file is missing or cannot be parsed."""


class ConfigFormatError(ConciergeError):
    """A parsed configuration value is not text, list or mapping."""


class SearchUnavailable(ConciergeError):
    """The search provider timed out, failed, or is not configured. Always recoverable."""


class ChatRequestError(ConciergeError):
    """Inbound chat request is malformed. Raised before any outbound call."""


class NotConfiguredError(ConciergeError):
    """Model id or provider credentials are missing."""


class CompletionError(ConciergeError):
    """Completion provider answered with a non-success status."""

    def __init__(self, status_code: int, message: str, body: Optional[str] = None):
        # detail carries the provider response text when there is one
        super().__init__(f"OpenRouter API error: {status_code} - {body or message}")
        self.status_code = status_code
        self.message = message
        self.body = body
