"""Tests for localekit.i18n.formatter module."""

import pytest

from localekit.i18n.formatter import (
    MessageFormatter,
    MessageSelector,
    interval_matches,
    plural_position,
)


class TestIntervalMatches:
    """Tests for interval_matches."""

    @pytest.mark.parametrize(
        "number,interval,expected",
        [
            (0, "{0}", True),
            (2, "{1,2,3}", True),
            (4, "{1,2,3}", False),
            (1, "[1,2]", True),
            (2, "[1,2[", False),
            (1, "]1,Inf]", False),
            (1000, "]1,Inf]", True),
            (-5, "]-Inf,0]", True),
            (1.5, "[1,2]", True),
        ],
    )
    def test_intervals(self, number, interval, expected):
        assert interval_matches(number, interval) is expected

    def test_malformed_interval_raises(self):
        with pytest.raises(ValueError):
            interval_matches(1, "(1,2)")


class TestPluralPosition:
    """Tests for plural_position."""

    def test_english_singular(self):
        assert plural_position(1, "en") == (0, False)

    def test_english_zero_is_other(self):
        assert plural_position(0, "en")[1] is True

    def test_french_zero_is_singular(self):
        assert plural_position(0, "fr") == (0, False)

    def test_region_subtags_are_accepted(self):
        assert plural_position(1, "en-US") == (0, False)

    def test_unknown_locale_uses_english_rules(self):
        assert plural_position(1, "xx-unknown") == (0, False)
        assert plural_position(2, "xx-unknown") == (1, True)


class TestMessageSelector:
    """Tests for MessageSelector.choose."""

    def setup_method(self):
        self.selector = MessageSelector()

    def test_explicit_intervals_win(self):
        message = "{0} No apples|{1} One apple|]1,Inf] Many apples"
        assert self.selector.choose(message, 0, "en") == "No apples"
        assert self.selector.choose(message, 1, "en") == "One apple"
        assert self.selector.choose(message, 7, "en") == "Many apples"

    def test_standard_forms(self):
        message = "One apple|Many apples"
        assert self.selector.choose(message, 1, "en") == "One apple"
        assert self.selector.choose(message, 2, "en") == "Many apples"

    def test_labels_are_dropped(self):
        message = "one: One apple|more: Many apples"
        assert self.selector.choose(message, 5, "en") == "Many apples"

    def test_mixed_explicit_and_standard(self):
        message = "{0} None|One|Many"
        assert self.selector.choose(message, 0, "en") == "None"
        assert self.selector.choose(message, 1, "en") == "One"
        assert self.selector.choose(message, 3, "en") == "Many"

    def test_double_pipe_is_literal(self):
        assert self.selector.choose("a||b|c", 1, "en") == "a|b"

    def test_single_form_is_always_used(self):
        assert self.selector.choose("Apples", 3, "en") == "Apples"

    def test_no_matching_form_raises(self):
        with pytest.raises(ValueError):
            self.selector.choose("{0} None", 5, "en")


class TestMessageFormatter:
    """Tests for MessageFormatter."""

    def setup_method(self):
        self.formatter = MessageFormatter()

    def test_format_substitutes_parameters(self):
        result = self.formatter.format("Hello %name%!", "en", {"%name%": "Alex"})
        assert result == "Hello Alex!"

    def test_format_without_parameters(self):
        assert self.formatter.format("Hello %name%!", "en") == "Hello %name%!"

    def test_format_longest_key_first(self):
        result = self.formatter.format(
            "%name% / %name_full%", "en", {"%name%": "A", "%name_full%": "B"}
        )
        assert result == "A / B"

    def test_format_is_single_pass(self):
        """Substituted values are not substituted again."""
        result = self.formatter.format("%a%", "en", {"%a%": "%b%", "%b%": "x"})
        assert result == "%b%"

    def test_choice_format_defaults_count(self):
        result = self.formatter.choice_format("%count% apple|%count% apples", 3, "en")
        assert result == "3 apples"

    def test_choice_format_keeps_explicit_count(self):
        result = self.formatter.choice_format(
            "%count% apple|%count% apples", 3, "en", {"%count%": "three"}
        )
        assert result == "three apples"
