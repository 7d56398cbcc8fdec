"""Centralized application configuration using Pydantic Settings.

Loads configuration from environment variables and `.env` file with
validation, type coercion, and sensible defaults.

Usage:
    from gemini_chat.config import get_settings

    settings = get_settings()  # cached singleton
    print(settings.GEMINI_MODEL)
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

THEMES = ("light", "dark")


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file.

    GEMINI_API_KEY is deliberately not validated here: a missing key only
    surfaces when the upstream call is rejected.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Flask ──────────────────────────────────────────────────────────
    FLASK_ENV: str = Field(default="development", description="Flask environment (development/production)")
    FLASK_DEBUG: bool = Field(default=True, description="Enable Flask debug mode")
    SECRET_KEY: str = Field(default="change-me-in-production", description="Flask secret key for sessions")

    # ── Gemini ────────────────────────────────────────────────────────
    GEMINI_API_KEY: str = Field(default="", description="Google Generative Language API key")
    GEMINI_BASE_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1",
        description="Generative Language API base URL",
    )
    GEMINI_MODEL: str = Field(default="gemini-1.5-flash", description="Gemini model identifier")

    # ── Logging ───────────────────────────────────────────────────────
    LOG_LEVEL: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    LOG_FORMAT: str = Field(default="json", description="Log output format ('json' for prod, 'console' for dev)")

    # ── Page / theme ──────────────────────────────────────────────────
    APP_TITLE: str = Field(default="Sona's_Chatbot", description="Page title")
    APP_DESCRIPTION: str = Field(default="Sona's_Chatbot", description="Page meta description")
    DEFAULT_THEME: str = Field(default="light", description="Theme used until a session picks one")

    # ── Validators ────────────────────────────────────────────────────

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Refuse the default secret key in production."""
        env = info.data.get("FLASK_ENV", "development")
        if env == "production" and v == "change-me-in-production":
            raise ValueError(
                "SECRET_KEY must be changed from the default in production. "
                "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level."""
        v = v.upper().strip()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}, got '{v}'")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower().strip()
        if v not in ("json", "console"):
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return v

    @field_validator("DEFAULT_THEME")
    @classmethod
    def validate_default_theme(cls, v: str) -> str:
        v = v.lower().strip()
        if v not in THEMES:
            raise ValueError(f"DEFAULT_THEME must be one of {THEMES}, got '{v}'")
        return v

    @field_validator("GEMINI_BASE_URL")
    @classmethod
    def validate_urls(cls, v: str) -> str:
        """Ensure base URLs don't have trailing slashes."""
        return v.rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance.

    Uses `lru_cache` so the `.env` file is only read once.
    """
    return Settings()
