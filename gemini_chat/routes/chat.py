"""Chat blueprint — the relay endpoint.

Routes:
    POST /api/chat  → Relay a message (plus history) to Gemini
"""
from __future__ import annotations

import structlog
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from gemini_chat.middleware.error_handlers import error_response
from gemini_chat.models.requests import ChatRequest, field_errors
from gemini_chat.models.responses import ChatResponse
from gemini_chat.utils.exceptions import ChatRelayError, RequestValidationError

logger = structlog.get_logger(__name__)

chat_bp = Blueprint("chat", __name__)

MALFORMED_JSON = {"path": [], "message": "Malformed JSON body", "code": "invalid_json"}


@chat_bp.route("/api/chat", methods=["POST"])
def chat():
    """Relay a chat message and return the assistant's response.

    Request JSON:
        {
            "message": "Hi there",
            "conversationHistory": [            // optional
                {"role": "user", "content": "..."},
                {"role": "assistant", "content": "..."}
            ]
        }

    Response JSON:
        { "message": "Hello! How can I help?" }
    """
    try:
        data = request.get_json(force=True)
    except BadRequest as e:
        raise RequestValidationError([MALFORMED_JSON]) from e

    try:
        req = ChatRequest.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(field_errors(e)) from e

    service = current_app.config["GEMINI_SERVICE"]
    try:
        reply = service.reply(req)
    except ChatRelayError:
        raise
    except Exception as e:
        logger.error("chat_api_error", error=str(e), error_type=type(e).__name__, exc_info=True)
        return error_response("Internal server error", 500)

    return jsonify(ChatResponse(message=reply).model_dump())
