"""Message formatting: parameter substitution and plural selection.

Choice messages use the pipe syntax:

    "{0} There are no apples|{1} There is one apple|]1,Inf] There are %count% apples"
    "one: There is one apple|more: There are %count% apples"
    "There is one apple|There are %count% apples"

Explicit intervals are tried first, then the plural category of the number
in the message locale (CLDR rules, through Babel) picks a standard form.
"""

import math
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from babel import Locale as BabelLocale
from babel.core import UnknownLocaleError
import structlog

logger = structlog.get_logger().bind(component="i18n.formatter")

_NUMBER = r"-?\d+(?:\.\d+)?"

INTERVAL_PATTERN = (
    r"(?:\{\s*(?P<set>" + _NUMBER + r"(?:\s*,\s*" + _NUMBER + r")*)\s*\})"
    r"|"
    r"(?:(?P<left_delimiter>[\[\]])\s*(?P<left>-Inf|\*|" + _NUMBER + r")"
    r"\s*,\s*"
    r"(?P<right>\+?Inf|\*|" + _NUMBER + r")\s*(?P<right_delimiter>[\[\]]))"
)

_INTERVAL_RE = re.compile(INTERVAL_PATTERN)
_EXPLICIT_PART_RE = re.compile(
    r"^(?P<interval>" + INTERVAL_PATTERN + r")\s*(?P<message>.*?)$", re.S
)
_LABELLED_PART_RE = re.compile(r"^\w+:\s*(.*?)$", re.S)
_PART_SEPARATOR_RE = re.compile(r"(?<!\|)\|(?!\|)")

_PLURAL_TAGS = ("zero", "one", "two", "few", "many")


def _to_number(value: str, default: float) -> float:
    if value == "*":
        return default
    if value == "-Inf":
        return -math.inf
    if value in ("Inf", "+Inf"):
        return math.inf
    return float(value)


def interval_matches(number: float, interval: str) -> bool:
    """Test if a number belongs to an interval.

    Supports sets ({1,2,3}) and ranges (]-Inf,0], [1,2[, [3,Inf]).

    Raises:
        ValueError: If the interval is malformed.
    """
    match = _INTERVAL_RE.fullmatch(interval.strip())
    if match is None:
        raise ValueError(f'"{interval}" is not a valid interval.')

    if match.group("set") is not None:
        values = re.split(r"\s*,\s*", match.group("set"))
        return any(number == float(value) for value in values)

    left = _to_number(match.group("left"), -math.inf)
    right = _to_number(match.group("right"), math.inf)

    if match.group("left_delimiter") == "[":
        left_ok = number >= left
    else:
        left_ok = number > left

    if match.group("right_delimiter") == "]":
        right_ok = number <= right
    else:
        right_ok = number < right

    return left_ok and right_ok


def plural_position(number: float, locale: str) -> Tuple[int, bool]:
    """Get the plural form index of a number in a locale.

    Returns:
        Tuple of (index among the locale's explicit plural categories,
        whether the category is the catch-all "other").
    """
    try:
        rule = BabelLocale.parse(locale.replace("-", "_")).plural_form
    except (UnknownLocaleError, ValueError, TypeError):
        logger.debug("unknown_plural_locale", locale=locale)
        return (0, False) if abs(number) == 1 else (1, True)

    tag = rule(abs(number))
    tags = [t for t in _PLURAL_TAGS if t in rule.tags]
    if tag not in tags:
        return len(tags), True
    return tags.index(tag), False


class MessageSelector:
    """Chooses the part of a choice message matching a number."""

    def choose(self, message: str, number: float, locale: str) -> str:
        """Select the message part for the number.

        Args:
            message: Choice message, parts separated by "|" ("||" is a literal pipe).
            number: Number used to select the part.
            locale: Language code whose plural rules apply.

        Returns:
            The selected part, without its interval or label.

        Raises:
            ValueError: If no part can be selected.
        """
        explicit_rules: List[Tuple[str, str]] = []
        standard_rules: List[str] = []

        for part in _PART_SEPARATOR_RE.split(message):
            part = part.replace("||", "|").strip()

            explicit = _EXPLICIT_PART_RE.match(part)
            if explicit:
                explicit_rules.append(
                    (explicit.group("interval"), explicit.group("message"))
                )
                continue

            labelled = _LABELLED_PART_RE.match(part)
            if labelled:
                standard_rules.append(labelled.group(1))
            else:
                standard_rules.append(part)

        for interval, text in explicit_rules:
            if interval_matches(number, interval):
                return text

        if not standard_rules:
            raise ValueError(
                f'Unable to choose a translation for "{message}" with locale "{locale}" '
                f"for value {number}."
            )

        position, is_other = plural_position(number, locale)
        if is_other or position >= len(standard_rules):
            return standard_rules[-1]

        return standard_rules[position]


class MessageFormatter:
    """Formats messages by substituting parameters.

    Parameter keys carry their own delimiters ("%name%", "{name}", ...) and are
    replaced in a single pass, longest keys first.

    Attributes:
        selector: MessageSelector used for choice messages.
    """

    def __init__(self, selector: Optional[MessageSelector] = None):
        self.selector = selector or MessageSelector()

    def format(
        self,
        message: str,
        locale: str,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Substitute parameters in a message.

        Args:
            message: Message with placeholders.
            locale: Language code of the message.
            parameters: Placeholder to value mapping.

        Returns:
            The formatted message.
        """
        if not parameters or not message:
            return message

        replacements: Dict[str, str] = {
            str(key): str(value) for key, value in parameters.items() if str(key)
        }
        if not replacements:
            return message

        keys = sorted(replacements, key=len, reverse=True)
        pattern = re.compile("|".join(re.escape(key) for key in keys))
        return pattern.sub(lambda m: replacements[m.group(0)], message)

    def choice_format(
        self,
        message: str,
        number: float,
        locale: str,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Select the plural form for number, then substitute parameters.

        The "%count%" parameter defaults to number.
        """
        parameters = dict(parameters or {})
        parameters.setdefault("%count%", number)
        chosen = self.selector.choose(message, number, locale)
        return self.format(chosen, locale, parameters)
