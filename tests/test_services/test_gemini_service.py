"""Unit tests for the Gemini service."""
import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from gemini_chat.models.requests import ChatRequest
from gemini_chat.services.gemini_service import (
    FALLBACK_MESSAGE,
    GeminiService,
    build_contents,
    extract_reply,
)
from gemini_chat.utils.exceptions import GeminiAPIError


@pytest.fixture
def gemini():
    """Create a GeminiService instance."""
    service = GeminiService(api_key="test-key", model="test-model")
    yield service
    service.close()


def _mock_httpx_response(data, status_code=200, text=None):
    """Create a mock httpx.Response."""
    resp = MagicMock(spec=httpx.Response)
    resp.status_code = status_code
    resp.is_success = 200 <= status_code < 300
    resp.json.return_value = data
    resp.text = text if text is not None else json.dumps(data)
    return resp


class TestBuildContents:
    """Tests for mapping a ChatRequest to Gemini contents."""

    def test_single_turn_without_history(self):
        req = ChatRequest(message="Hi")
        assert build_contents(req) == [{"role": "user", "parts": [{"text": "Hi"}]}]

    def test_history_order_kept_and_message_last(self):
        req = ChatRequest.model_validate({
            "message": "Third",
            "conversationHistory": [
                {"role": "user", "content": "First"},
                {"role": "assistant", "content": "Second"},
            ],
        })
        contents = build_contents(req)

        assert contents == [
            {"role": "user", "parts": [{"text": "First"}]},
            {"role": "assistant", "parts": [{"text": "Second"}]},
            {"role": "user", "parts": [{"text": "Third"}]},
        ]

    def test_last_turn_is_trimmed_message(self):
        req = ChatRequest.model_validate({
            "message": "  spaced out  ",
            "conversationHistory": [{"role": "user", "content": "  kept as is  "}],
        })
        contents = build_contents(req)
        assert contents[-1]["parts"][0]["text"] == "spaced out"
        assert contents[0]["parts"][0]["text"] == "  kept as is  "


class TestExtractReply:
    """Tests for reading the reply text out of a generateContent body."""

    def test_first_candidate_text(self):
        data = {"candidates": [{"content": {"parts": [{"text": "Hello!"}]}}]}
        assert extract_reply(data) == "Hello!"

    def test_only_first_part_used(self):
        data = {"candidates": [{"content": {"parts": [{"text": "A"}, {"text": "B"}]}}]}
        assert extract_reply(data) == "A"

    @pytest.mark.parametrize("data", [
        {},
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"content": {}}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{}]}}]},
        {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
        {"candidates": [{"content": {"parts": [{"text": None}]}}]},
        {"candidates": None},
        {"promptFeedback": {"blockReason": "SAFETY"}},
        [],
        None,
    ])
    def test_fallback_when_path_missing(self, data):
        assert extract_reply(data) == FALLBACK_MESSAGE


class TestGenerateContent:
    """Tests for GeminiService.generate_content and reply."""

    def test_posts_contents_with_key(self, gemini):
        contents = [{"role": "user", "parts": [{"text": "Hi"}]}]
        resp = _mock_httpx_response({"candidates": []})
        with patch.object(gemini._client, "post", return_value=resp) as mock_post:
            gemini.generate_content(contents)

        mock_post.assert_called_once_with(
            "/models/test-model:generateContent",
            params={"key": "test-key"},
            json={"contents": contents},
        )

    def test_reply_text(self, gemini):
        data = {"candidates": [{"content": {"parts": [{"text": "Hello!"}]}}]}
        with patch.object(gemini._client, "post", return_value=_mock_httpx_response(data)):
            assert gemini.reply(ChatRequest(message="Hi")) == "Hello!"

    def test_reply_fallback(self, gemini):
        with patch.object(gemini._client, "post", return_value=_mock_httpx_response({})):
            assert gemini.reply(ChatRequest(message="Hi")) == FALLBACK_MESSAGE

    def test_error_status_raises_with_raw_body(self, gemini):
        raw = '{"error": {"code": 400, "message": "API key not valid."}}'
        resp = _mock_httpx_response(None, status_code=400, text=raw)
        with patch.object(gemini._client, "post", return_value=resp):
            with pytest.raises(GeminiAPIError) as exc_info:
                gemini.reply(ChatRequest(message="Hi"))

        assert exc_info.value.details == raw
        assert exc_info.value.upstream_status == 400
        assert exc_info.value.status_code == 500

    def test_error_not_retried(self, gemini):
        resp = _mock_httpx_response(None, status_code=503, text="Service Unavailable")
        with patch.object(gemini._client, "post", return_value=resp) as mock_post:
            with pytest.raises(GeminiAPIError):
                gemini.reply(ChatRequest(message="Hi"))
        assert mock_post.call_count == 1

    def test_transport_error_propagates(self, gemini):
        with patch.object(gemini._client, "post", side_effect=httpx.ConnectError("refused")):
            with pytest.raises(httpx.ConnectError):
                gemini.reply(ChatRequest(message="Hi"))

    def test_empty_api_key_still_calls(self):
        with GeminiService(api_key="") as service:
            resp = _mock_httpx_response(None, status_code=403, text="Forbidden")
            with patch.object(service._client, "post", return_value=resp) as mock_post:
                with pytest.raises(GeminiAPIError):
                    service.reply(ChatRequest(message="Hi"))
        assert mock_post.call_args.kwargs["params"] == {"key": ""}
