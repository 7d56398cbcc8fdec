"""Theme shell — session-scoped light/dark preference for rendered pages.

Every template rendered by the app sees `theme`, `themes` and `metadata`
through a Jinja2 context processor, so child templates never need the
value passed in explicitly. The preference lives in the signed Flask
session cookie and falls back to DEFAULT_THEME until a visitor picks one.

Usage:
    shell = ThemeShell(default_theme="light")
    shell.init_app(app)

    shell.set_theme("dark")     # inside a request
    shell.get_theme()           # -> "dark"
"""
from __future__ import annotations

from typing import Any

import structlog
from flask import Flask, session

from gemini_chat.config import THEMES

logger = structlog.get_logger(__name__)

SESSION_KEY = "theme"


class ThemeShell:
    """Owns the theme preference and exposes it to all templates.

    Args:
        default_theme: Theme used when the session holds none.
        metadata: Page metadata (title, description) injected alongside
            the theme.
    """

    def __init__(
        self,
        default_theme: str = "light",
        metadata: dict[str, str] | None = None,
    ) -> None:
        if default_theme not in THEMES:
            raise ValueError(f"Unknown theme '{default_theme}'")
        self._default = default_theme
        self._metadata = metadata or {}

    @property
    def default_theme(self) -> str:
        return self._default

    def init_app(self, app: Flask) -> None:
        """Register the context processor and store the shell on the app."""
        app.config["THEME_SHELL"] = self
        app.context_processor(self._template_context)

    # ── Read / set ────────────────────────────────────────────────────

    def get_theme(self) -> str:
        """Current theme for this session."""
        theme = session.get(SESSION_KEY)
        if theme not in THEMES:
            return self._default
        return theme

    def set_theme(self, theme: str) -> str:
        """Store `theme` in the session.

        Raises:
            ValueError: If theme is not one of THEMES.
        """
        if theme not in THEMES:
            raise ValueError(f"Theme must be one of {THEMES}, got '{theme}'")
        session[SESSION_KEY] = theme
        logger.debug("theme_set", theme=theme)
        return theme

    def toggle_theme(self) -> str:
        return self.set_theme("dark" if self.get_theme() == "light" else "light")

    def _template_context(self) -> dict[str, Any]:
        return {
            "theme": self.get_theme(),
            "themes": THEMES,
            "metadata": self._metadata,
        }
