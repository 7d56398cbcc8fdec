"""Gemini service: relays a chat request to the Generative Language API.

Handles all communication with the `generateContent` endpoint:
- Mapping ChatRequest turns into Gemini `contents` (role + text parts)
- A single outbound call per request, no retries
- Reply extraction with a fixed fallback when the reply has no text
- Structured logging of every upstream interaction

Usage:
    from gemini_chat.services.gemini_service import GeminiService

    service = GeminiService(api_key="...", model="gemini-1.5-flash")
    reply = service.reply(chat_request)
"""
from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

from gemini_chat.models.requests import ChatRequest
from gemini_chat.utils.exceptions import GeminiAPIError

logger = structlog.get_logger(__name__)

FALLBACK_MESSAGE = "I apologize, but I cannot generate a response at the moment."


def build_contents(chat_request: ChatRequest) -> list[dict[str, Any]]:
    """Map a ChatRequest into Gemini's ordered `contents` list.

    History turns keep their order and role; the new message is always
    appended last as a user turn.
    """
    contents = [
        {"role": turn.role, "parts": [{"text": turn.content}]}
        for turn in chat_request.conversation_history
    ]
    contents.append({"role": "user", "parts": [{"text": chat_request.message}]})
    return contents


def extract_reply(data: Any) -> str:
    """Return candidates[0].content.parts[0].text, or FALLBACK_MESSAGE.

    Any missing or mistyped step along the path, and an empty text, yield
    the fallback instead of an error.
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return FALLBACK_MESSAGE
    if not isinstance(text, str) or not text:
        return FALLBACK_MESSAGE
    return text


class GeminiService:
    """Client for the Generative Language `generateContent` endpoint.

    Args:
        api_key: API key sent as the `key` query parameter. Not validated;
            an empty key makes the upstream call fail.
        model: Gemini model identifier (e.g., "gemini-1.5-flash").
        base_url: API base URL including the version segment.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1",
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")

        # Transport default timeout; no timeout policy of our own
        self._client = httpx.Client(
            base_url=self._base_url,
            headers={"Content-Type": "application/json"},
            follow_redirects=True,
        )

    @property
    def model(self) -> str:
        return self._model

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    # ── Core API ──────────────────────────────────────────────────────

    def reply(self, chat_request: ChatRequest) -> str:
        """Relay a validated chat request and return the assistant's text.

        Args:
            chat_request: Validated request carrying the message and history.

        Returns:
            The first candidate's text, or FALLBACK_MESSAGE.

        Raises:
            GeminiAPIError: When the upstream status is not 2xx.
            httpx.HTTPError: On transport failures (not retried).
        """
        data = self.generate_content(build_contents(chat_request))
        return extract_reply(data)

    def generate_content(self, contents: list[dict[str, Any]]) -> Any:
        """POST `contents` to `models/{model}:generateContent`.

        Exactly one request is made. The decoded JSON body is returned
        as-is; picking the reply out of it is the caller's concern.
        """
        logger.info(
            "gemini_request",
            model=self._model,
            turns_count=len(contents),
        )

        start = time.monotonic()
        response = self._client.post(
            f"/models/{self._model}:generateContent",
            params={"key": self._api_key},
            json={"contents": contents},
        )
        duration_ms = round((time.monotonic() - start) * 1000)

        if not response.is_success:
            error_body = response.text
            logger.error(
                "gemini_api_error",
                status=response.status_code,
                body=error_body[:500],
                duration_ms=duration_ms,
            )
            raise GeminiAPIError(details=error_body, upstream_status=response.status_code)

        data = response.json()
        logger.info(
            "gemini_response",
            status=response.status_code,
            has_candidates=isinstance(data, dict) and bool(data.get("candidates")),
            duration_ms=duration_ms,
        )
        return data
