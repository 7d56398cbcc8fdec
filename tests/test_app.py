"""Tests for the application factory."""
from unittest.mock import patch

from gemini_chat import create_app


class TestCreateApp:

    def test_factory_registers_no_exit_hooks(self, settings):
        with patch("atexit.register") as mock_register:
            app = create_app(settings)
        app.config["GEMINI_SERVICE"].close()

        mock_register.assert_not_called()

    def test_each_app_owns_its_service(self, settings):
        first = create_app(settings)
        second = create_app(settings)
        try:
            assert first.config["GEMINI_SERVICE"] is not second.config["GEMINI_SERVICE"]
        finally:
            first.config["GEMINI_SERVICE"].close()
            second.config["GEMINI_SERVICE"].close()

    def test_every_view_is_documented(self, app):
        undocumented = [
            name for name, view in app.view_functions.items()
            if name != "static" and not (view.__doc__ or "").strip()
        ]
        assert undocumented == []
