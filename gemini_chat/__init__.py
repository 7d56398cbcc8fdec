"""Gemini chat relay — Flask application package.

The `create_app()` factory wires configuration, logging, middleware, the
Gemini service, the theme shell and the blueprints together.
"""
from __future__ import annotations

import structlog
from flask import Flask
from flask_cors import CORS

from gemini_chat.config import Settings, get_settings
from gemini_chat.middleware.error_handlers import register_error_handlers
from gemini_chat.middleware.request_id import init_request_id_middleware
from gemini_chat.utils.logger import setup_logging


def create_app(settings: Settings | None = None) -> Flask:
    """Application factory.

    Creates and configures the Flask application with:
    - Pydantic-based configuration loading
    - Structured logging (structlog)
    - Request ID middleware and global error handlers
    - CORS for the JSON API
    - The Gemini service and the theme shell
    - Blueprint registration (health, chat, pages)

    Args:
        settings: Explicit settings, mainly for tests. Defaults to the
            cached environment-backed settings.

    Returns:
        Configured Flask application instance.
    """
    settings = settings or get_settings()

    # Logging first so everything below is formatted
    setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)
    logger = structlog.get_logger(__name__)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.SECRET_KEY
    app.config["FLASK_DEBUG"] = settings.FLASK_DEBUG
    app.config["SETTINGS"] = settings

    # ── Middleware ─────────────────────────────────────────────────────
    init_request_id_middleware(app)
    register_error_handlers(app)

    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # ── Services ──────────────────────────────────────────────────────
    _init_services(app, settings)

    # ── Blueprints ────────────────────────────────────────────────────
    from gemini_chat.routes.chat import chat_bp
    from gemini_chat.routes.health import health_bp
    from gemini_chat.routes.pages import pages_bp
    app.register_blueprint(health_bp)
    app.register_blueprint(chat_bp)
    app.register_blueprint(pages_bp)

    logger.info(
        "app_started",
        env=settings.FLASK_ENV,
        model=settings.GEMINI_MODEL,
        log_level=settings.LOG_LEVEL,
    )

    return app


def _init_services(app: Flask, settings: Settings) -> None:
    """Create the Gemini service and the theme shell.

    Both are stored on `app.config` for access via `current_app`.
    """
    from gemini_chat.services.gemini_service import GeminiService
    from gemini_chat.services.theme_shell import ThemeShell

    gemini = GeminiService(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
    )
    app.config["GEMINI_SERVICE"] = gemini

    ThemeShell(
        default_theme=settings.DEFAULT_THEME,
        metadata={
            "title": settings.APP_TITLE,
            "description": settings.APP_DESCRIPTION,
        },
    ).init_app(app)
