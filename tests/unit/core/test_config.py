"""Tests for localekit.core.config module."""

import pytest
from pydantic import ValidationError

from localekit.core.config import (
    LanguageMiddlewareSettings,
    LocalesSettings,
    Settings,
)


class TestLocalesSettings:
    """Tests for LocalesSettings."""

    def test_defaults(self):
        settings = LocalesSettings()
        assert list(settings.locales) == ["en", "fr"]
        assert settings.default_language == "en"
        assert settings.fallback_languages == ["en"]

    def test_locales_from_json_string(self):
        settings = LocalesSettings(LOCALES='{"fr": {"locale": "fr_FR.UTF8"}}')
        assert settings.locales == {"fr": {"locale": "fr_FR.UTF8"}}

    def test_locales_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOCALES", '{"es": {"locale": "es_ES.UTF8"}}')
        monkeypatch.setenv("DEFAULT_LANGUAGE", "es")
        settings = LocalesSettings()
        assert list(settings.locales) == ["es"]
        assert settings.default_language == "es"

    def test_invalid_locales_json_raises(self):
        with pytest.raises(ValidationError):
            LocalesSettings(LOCALES="{not json")

    def test_fallback_languages_from_comma_string(self):
        settings = LocalesSettings(fallback_languages="fr, en")
        assert settings.fallback_languages == ["fr", "en"]


class TestLanguageMiddlewareSettings:
    """Tests for LanguageMiddlewareSettings."""

    def test_defaults(self):
        settings = LanguageMiddlewareSettings()
        assert settings.default_language is None
        assert settings.use_path is True
        assert settings.excluded_path == [r"^/admin\b"]
        assert settings.use_query is False
        assert settings.query_key == ["current_language"]
        assert settings.use_session is True
        assert settings.use_browser is True
        assert settings.use_host is False
        assert settings.host_map == {}
        assert settings.redirect is False
        assert settings.set_locale is True

    def test_single_string_keys_become_lists(self):
        settings = LanguageMiddlewareSettings(query_key="lang", session_key="lang")
        assert settings.query_key == ["lang"]
        assert settings.session_key == ["lang"]

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("LANGUAGE_USE_QUERY", "true")
        monkeypatch.setenv("LANGUAGE_QUERY_KEY", '["lang", "hl"]')
        monkeypatch.setenv("LANGUAGE_HOST_MAP", '{"fr": "fr.example.com"}')
        settings = LanguageMiddlewareSettings()
        assert settings.use_query is True
        assert settings.query_key == ["lang", "hl"]
        assert settings.host_map == {"fr": "fr.example.com"}


class TestSettings:
    """Tests for the Settings aggregator."""

    def test_sections_are_instantiated(self):
        settings = Settings()
        assert isinstance(settings.locales, LocalesSettings)
        assert isinstance(settings.middleware, LanguageMiddlewareSettings)

    def test_is_production(self):
        assert Settings(PREFIX="").is_production is True
        assert Settings(PREFIX="dev-").is_production is False
