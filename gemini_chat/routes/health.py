"""Health check endpoint.

Exposes GET /health for Docker HEALTHCHECK and monitoring systems. The
upstream API is not probed: each probe would spend quota.

Response format:
    {
        "status": "healthy",
        "version": "1.0.0",
        "model": "gemini-1.5-flash"
    }
"""
from __future__ import annotations

from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health", __name__)

APP_VERSION = "1.0.0"


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Application health check endpoint.

    Returns:
        200 with the app version and configured Gemini model.
    """
    service = current_app.config["GEMINI_SERVICE"]
    return jsonify({
        "status": "healthy",
        "version": APP_VERSION,
        "model": service.model,
    }), 200
