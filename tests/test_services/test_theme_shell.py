"""Unit tests for the theme shell."""
import pytest
from flask import render_template_string

from gemini_chat.services.theme_shell import ThemeShell


@pytest.fixture
def shell(app):
    return app.config["THEME_SHELL"]


class TestThemeShell:

    def test_unknown_default_rejected(self):
        with pytest.raises(ValueError):
            ThemeShell(default_theme="sepia")

    def test_default_when_session_empty(self, app, shell):
        with app.test_request_context("/"):
            assert shell.get_theme() == "light"

    def test_set_and_get(self, app, shell):
        with app.test_request_context("/"):
            shell.set_theme("dark")
            assert shell.get_theme() == "dark"

    def test_set_unknown_theme_raises(self, app, shell):
        with app.test_request_context("/"):
            with pytest.raises(ValueError):
                shell.set_theme("sepia")
            assert shell.get_theme() == "light"

    def test_toggle(self, app, shell):
        with app.test_request_context("/"):
            assert shell.toggle_theme() == "dark"
            assert shell.toggle_theme() == "light"

    def test_templates_see_theme_without_passing_it(self, app, shell):
        with app.test_request_context("/"):
            shell.set_theme("dark")
            rendered = render_template_string("{{ theme }}|{{ metadata.title }}")
        assert rendered == "dark|Sona&#39;s_Chatbot"


class TestConfiguredDefault:

    @pytest.fixture
    def settings(self, settings):
        return settings.model_copy(update={"DEFAULT_THEME": "dark"})

    def test_default_from_settings(self, app):
        with app.test_request_context("/"):
            assert app.config["THEME_SHELL"].get_theme() == "dark"
