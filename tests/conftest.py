"""Shared pytest fixtures for the chat relay test suite.

Provides reusable fixtures for:
- Test settings (no .env lookup)
- Flask app and test client
- The Gemini service's httpx client, for patching outbound calls
"""
import pytest

from gemini_chat import create_app
from gemini_chat.config import Settings


@pytest.fixture
def settings():
    """Settings isolated from the developer's .env file."""
    return Settings(
        _env_file=None,
        GEMINI_API_KEY="test-key",
        GEMINI_MODEL="test-model",
        LOG_FORMAT="console",
        LOG_LEVEL="WARNING",
        SECRET_KEY="test-secret",
    )


@pytest.fixture
def app(settings):
    """Create a Flask application instance for testing."""
    app = create_app(settings)
    app.config["TESTING"] = True
    yield app
    app.config["GEMINI_SERVICE"].close()


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def gemini_client(app):
    """The httpx client owned by the app's GeminiService."""
    return app.config["GEMINI_SERVICE"]._client
