"""Pages blueprint — the chat page and its theme switch.

Routes:
    GET  /           → Render the chat UI inside the themed layout
    GET  /api/theme  → Current theme for this session
    POST /api/theme  → Set the theme, or toggle it when none is given
"""
from __future__ import annotations

from flask import Blueprint, current_app, jsonify, render_template, request
from pydantic import ValidationError

from gemini_chat.models.requests import ThemeRequest, field_errors
from gemini_chat.models.responses import ThemeResponse
from gemini_chat.utils.exceptions import RequestValidationError

pages_bp = Blueprint("pages", __name__)


@pages_bp.route("/")
def index():
    """Render the chat UI."""
    return render_template("index.html")


@pages_bp.route("/api/theme", methods=["GET"])
def get_theme():
    """Return the theme stored in this session, or the default.

    Response JSON:
        { "theme": "light" }
    """
    shell = current_app.config["THEME_SHELL"]
    return jsonify(ThemeResponse(theme=shell.get_theme()).model_dump())


@pages_bp.route("/api/theme", methods=["POST"])
def set_theme():
    """Set or toggle the session theme.

    Request JSON:
        { "theme": "dark" }     // omit the body or the field to toggle

    Response JSON:
        { "theme": "dark" }
    """
    shell = current_app.config["THEME_SHELL"]
    data = request.get_json(force=True, silent=True) or {}

    try:
        req = ThemeRequest.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(field_errors(e)) from e

    if req.theme is None:
        theme = shell.toggle_theme()
    else:
        theme = shell.set_theme(req.theme)
    return jsonify(ThemeResponse(theme=theme).model_dump())
