"""Tests for localekit.i18n.translation module."""

import copy

import pytest

from localekit.i18n import Translation


class TestTranslationConstruction:
    """Tests for Translation construction."""

    def test_string_is_stored_under_current_locale(self, manager):
        """A string is assigned to the current locale."""
        manager.set_current_locale("fr")
        translation = Translation("Bonjour", manager)
        assert translation.data() == {"fr": "Bonjour"}
        assert translation.get("fr") == "Bonjour"
        assert str(translation) == "Bonjour"

    def test_mapping_is_stored_verbatim(self, manager):
        """A language-map is stored without validating its codes."""
        translation = Translation({"en": "Hello", "de": "Hallo"}, manager)
        assert translation.data() == {"en": "Hello", "de": "Hallo"}

    def test_none_is_empty(self, manager):
        """None creates an empty Translation."""
        translation = Translation(None, manager)
        assert len(translation) == 0
        assert str(translation) == ""

    def test_translation_is_copied(self, manager):
        """Another Translation is copied, not shared."""
        original = Translation({"en": "Hello"}, manager)
        copied = Translation(original, manager)
        copied["fr"] = "Bonjour"
        assert "fr" not in original
        assert copied == Translation({"en": "Hello", "fr": "Bonjour"}, manager)

    def test_invalid_value_raises(self, manager):
        """Values other than strings, mappings and Translations are rejected."""
        with pytest.raises(TypeError):
            Translation(123, manager)


class TestTranslationFallbacks:
    """Tests for fallback-aware reads."""

    def test_missing_locale_falls_back_to_current(self, manager):
        """A missing locale reads the current locale's value."""
        manager.set_current_locale("fr")
        translation = Translation({"fr": "Bonjour", "en": "Hello"}, manager)
        assert translation.get("es") == "Bonjour"

    def test_missing_current_falls_back_to_default(self, manager):
        """Without a current locale value, the default locale's value is read."""
        manager.set_current_locale("fr")
        translation = Translation({"en": "Hello"}, manager)
        assert translation["es"] == "Hello"
        assert str(translation) == "Hello"

    def test_missing_everything_is_empty(self, manager):
        """Without current or default values, an empty string is read."""
        translation = Translation({"de": "Hallo"}, manager)
        assert translation["fr"] == ""

    def test_contains_only_stored_locales(self, manager):
        """Membership ignores fallbacks."""
        translation = Translation({"en": "Hello"}, manager)
        assert "en" in translation
        assert "fr" not in translation


class TestTranslationMutation:
    """Tests for Translation mutation helpers."""

    def test_set_and_delete(self, manager):
        """Values can be set and deleted per locale."""
        translation = Translation({"en": "Hello"}, manager)
        translation.set("fr", "Bonjour")
        assert list(translation) == ["en", "fr"]
        del translation["en"]
        assert translation.data() == {"fr": "Bonjour"}

    def test_each_applies_callback(self, manager):
        """each() stores the callback result for every locale."""
        translation = Translation({"en": "hello", "fr": "bonjour"}, manager)
        result = translation.each(lambda value, locale: f"{locale}:{value.upper()}")
        assert result is translation
        assert translation.data() == {"en": "en:HELLO", "fr": "fr:BONJOUR"}

    def test_set_val_replaces_values(self, manager):
        """set_val() replaces every stored value."""
        translation = Translation({"en": "Hello", "fr": "Bonjour"}, manager)
        translation.set_val("Hi")
        assert translation.data() == {"en": "Hi"}

    def test_copy(self, manager):
        """copy.copy() returns an equal, independent Translation."""
        translation = Translation({"en": "Hello"}, manager)
        copied = copy.copy(translation)
        copied["en"] = "Hi"
        assert translation["en"] == "Hello"


class TestTranslationEquality:
    """Tests for Translation equality."""

    def test_equality_ignores_order(self, manager):
        """Translations with the same values are equal."""
        first = Translation({"en": "Hello", "fr": "Bonjour"}, manager)
        second = Translation({"fr": "Bonjour", "en": "Hello"}, manager)
        assert first == second

    def test_not_equal_to_mapping(self, manager):
        """A Translation is not equal to a plain mapping."""
        assert Translation({"en": "Hello"}, manager) != {"en": "Hello"}

    def test_unhashable(self, manager):
        """Translations are mutable and unhashable."""
        with pytest.raises(TypeError):
            hash(Translation({"en": "Hello"}, manager))

    def test_repr(self, manager):
        assert repr(Translation({"en": "Hello"}, manager)) == "Translation({'en': 'Hello'})"
