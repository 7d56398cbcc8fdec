"""Pydantic models for API response serialization."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ChatResponse(BaseModel):
    """Outgoing chat response."""
    message: str = Field(..., description="Assistant response text")


class ErrorResponse(BaseModel):
    """Standard error response. `details` is omitted when there are none."""
    error: str = Field(..., description="Short error summary")
    details: Any = Field(default=None, description="Field errors or raw upstream body")


class ThemeResponse(BaseModel):
    theme: str
