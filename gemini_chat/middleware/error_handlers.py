"""Global Flask error handlers for consistent JSON error responses.

Registers handlers for standard HTTP errors and custom ChatRelayError
exceptions, ensuring the API always returns:
    { "error": "...", "details": ... }     // details only when present

Usage:
    from gemini_chat.middleware.error_handlers import register_error_handlers
    register_error_handlers(app)
"""
from __future__ import annotations

from typing import Any

import structlog
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from gemini_chat.models.responses import ErrorResponse
from gemini_chat.utils.exceptions import ChatRelayError, GeminiAPIError

logger = structlog.get_logger(__name__)


def error_response(error: str, code: int, details: Any = None):
    """Create a standardized JSON error response.

    Args:
        error: Short human-readable error summary.
        code: HTTP status code.
        details: Optional field errors or raw upstream text.

    Returns:
        Tuple of (response, status_code).
    """
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return jsonify(body), code


def register_error_handlers(app: Flask) -> None:
    """Register global error handlers on the Flask app.

    Args:
        app: Flask application instance.
    """

    # ── Standard HTTP Errors ──────────────────────────────────────────

    @app.errorhandler(400)
    def bad_request(e):
        return error_response("Bad request", 400)

    @app.errorhandler(404)
    def not_found(e):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return error_response("Method not allowed", 405)

    @app.errorhandler(500)
    def internal_error(e):
        logger.error("unhandled_server_error", error=str(e), exc_info=True)
        return error_response("Internal server error", 500)

    # ── Custom Application Errors ─────────────────────────────────────

    @app.errorhandler(ChatRelayError)
    def handle_relay_error(e: ChatRelayError):
        """Handle all custom ChatRelayError exceptions."""
        if isinstance(e, GeminiAPIError):
            # gemini_service already logged the upstream body
            logger.warning("upstream_failure", upstream_status=e.upstream_status)
        else:
            logger.info(
                "request_rejected",
                error=e.message,
                error_type=type(e).__name__,
                status_code=e.status_code,
            )
        return error_response(e.message, e.status_code, e.details)

    # ── Catch-all for unexpected Werkzeug HTTP exceptions ─────────────

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return error_response(e.description or "Unknown error", e.code or 500)

    # ── Catch-all for truly unhandled exceptions ──────────────────────

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        """Last resort handler; never leaks exception detail to the caller."""
        logger.error(
            "unexpected_error",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return error_response("Internal server error", 500)
