"""Pydantic models for API request validation."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ChatTurn(BaseModel):
    """One earlier message in the conversation, tagged with its speaker."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Incoming chat message request.

    Attributes:
        message: The user's message text, trimmed and non-empty.
        conversation_history: Earlier turns in order, oldest first. Sent on
            the wire as `conversationHistory`; absent means empty.
    """

    message: str = Field(..., min_length=1, description="User message")
    conversation_history: list[ChatTurn] = Field(
        default_factory=list,
        alias="conversationHistory",
        description="Prior turns, resent by the client on every request",
    )

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Message cannot be empty")
        return v


class ThemeRequest(BaseModel):
    """Body of POST /api/theme. A missing theme means toggle."""

    theme: Literal["light", "dark"] | None = None


def field_errors(exc: ValidationError) -> list[dict[str, Any]]:
    """Flatten a pydantic ValidationError into JSON-safe field errors.

    Args:
        exc: The raised ValidationError.

    Returns:
        One {"path", "message", "code"} dict per failing field, in the
        order pydantic reported them.
    """
    return [
        {
            "path": list(err.get("loc", ())),
            "message": err.get("msg", "Invalid value"),
            "code": err.get("type", "invalid"),
        }
        for err in exc.errors()
    ]
