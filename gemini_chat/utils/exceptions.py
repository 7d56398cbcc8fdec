"""Custom exception hierarchy for the chat relay.

All application-specific exceptions inherit from ChatRelayError so the
global error handlers can render them uniformly.

Hierarchy:
    ChatRelayError (base)
    ├── GeminiAPIError          — upstream returned a non-2xx status
    └── RequestValidationError  — request body failed shape checks
"""
from __future__ import annotations

from typing import Any


class ChatRelayError(Exception):
    """Base exception for the chat relay."""

    def __init__(self, message: str, status_code: int = 500, details: Any = None) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class GeminiAPIError(ChatRelayError):
    """Raised when the Generative Language API answers with a failure status.

    `details` carries the raw upstream body text, unparsed.
    """

    def __init__(self, details: str, upstream_status: int | None = None) -> None:
        self.upstream_status = upstream_status
        super().__init__("Gemini API error", status_code=500, details=details)


class RequestValidationError(ChatRelayError):
    """Raised when an incoming body is malformed or fails validation.

    `details` is a list of field errors: {"path", "message", "code"}.
    """

    def __init__(self, details: list[dict[str, Any]]) -> None:
        super().__init__("Invalid request data", status_code=400, details=details)
