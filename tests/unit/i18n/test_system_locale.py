"""Tests for localekit.i18n.system_locale module."""

import locale
from unittest.mock import patch

from localekit.i18n.system_locale import apply_system_locale


class TestApplySystemLocale:
    """Tests for apply_system_locale."""

    def test_first_accepted_locale_is_applied(self):
        """Rejected candidates are skipped until one is accepted."""

        def setlocale(category, value):
            if value != "fr_CA.UTF8":
                raise locale.Error("unsupported locale setting")
            return value

        with patch("localekit.i18n.system_locale.locale.setlocale", side_effect=setlocale) as mock:
            result = apply_system_locale(["fr_FR.UTF8", "fr_CA.UTF8", "en_US.UTF8"])

        assert result == "fr_CA.UTF8"
        assert mock.call_count == 2

    def test_no_accepted_locale(self):
        with patch(
            "localekit.i18n.system_locale.locale.setlocale",
            side_effect=locale.Error("unsupported locale setting"),
        ):
            assert apply_system_locale(["xx_XX.UTF8"]) is None

    def test_no_candidates(self):
        assert apply_system_locale([]) is None
