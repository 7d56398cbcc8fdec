"""Structured logging configuration using structlog.

structlog events and stdlib records (werkzeug access lines, httpx request
lines) go through one root handler whose `ProcessorFormatter` renders both
the same way: JSON in production, colored console output in development.
Every line carries request_id from contextvars, the level, the logger name
and an ISO timestamp.

Usage:
    from gemini_chat.utils.logger import setup_logging

    setup_logging(log_level="INFO", log_format="json")

    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("event_name", key="value")
"""
from __future__ import annotations

import logging

import structlog


def _render_chain(log_format: str) -> list[structlog.types.Processor]:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    # ConsoleRenderer formats exc_info itself
    return [structlog.dev.ConsoleRenderer(colors=True)]


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structlog and route stdlib logging through it.

    Safe to call more than once (one app per test): the root handler is
    replaced, not stacked.

    Args:
        log_level: Logging level — DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_format: Output format — 'json' for production, 'console' for dev.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Applied to structlog events and to foreign stdlib records alike
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_render_chain(log_format),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)