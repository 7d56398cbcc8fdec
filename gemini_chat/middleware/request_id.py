"""Request ID middleware for log correlation.

Every request gets an X-Request-ID: the client's own header when it sends
a usable one, otherwise a fresh UUID. The ID is bound into structlog's
contextvars so upstream failures can be traced back to the chat request
that caused them.
"""
from __future__ import annotations

import uuid

import structlog
from flask import Flask, g, request

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def _incoming_request_id() -> str:
    candidate = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if candidate and len(candidate) <= MAX_REQUEST_ID_LENGTH:
        return candidate
    return str(uuid.uuid4())


def init_request_id_middleware(app: Flask) -> None:
    """Register before/after hooks for request ID tracing.

    Args:
        app: Flask application instance.
    """
    logger = structlog.get_logger(__name__)

    @app.before_request
    def bind_request_id() -> None:
        g.request_id = _incoming_request_id()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=g.request_id,
            method=request.method,
            path=request.path,
        )
        logger.debug("request_started")

    @app.after_request
    def echo_request_id(response):
        response.headers[REQUEST_ID_HEADER] = g.get("request_id", "unknown")
        logger.debug("request_completed", status=response.status_code)
        return response
