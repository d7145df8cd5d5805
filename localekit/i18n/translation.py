"""Translation value object.

A Translation holds the localized values of one message, keyed by language code:

- If a string is given, it is assigned to the current locale.
- If a mapping is given, it is used as a language-map whose keys are language
  codes and whose values are localized strings.
"""

from typing import Any, Callable, Dict, Iterator, Mapping

from localekit.i18n.locales import LocalesManager


class Translation:
    """Localized values of a message with fallback-aware reads.

    Reading a language without a value falls back to the value of the current
    locale, then to the value of the default locale, then to an empty string.

    Attributes:
        manager: LocalesManager providing the current and default locales.
    """

    def __init__(self, value: Any, manager: LocalesManager):
        """Initialize a Translation.

        Args:
            value: A string, a language-map, another Translation or None.
            manager: The locales manager.

        Raises:
            TypeError: If value is not one of the accepted types.
        """
        self.manager = manager
        self._val: Dict[str, str] = {}
        self.set_val(value)

    def set_val(self, value: Any) -> "Translation":
        """Replace the localized values in place.

        Args:
            value: A string, a language-map, another Translation or None.

        Returns:
            This Translation.
        """
        if value is None:
            entries: Dict[str, Any] = {}
        elif isinstance(value, Translation):
            entries = value.data()
        elif isinstance(value, str):
            entries = {self.manager.current_locale(): value}
        elif isinstance(value, Mapping):
            entries = dict(value)
        else:
            raise TypeError(
                f"Translation value must be a string or a language-map, got {type(value).__name__}"
            )

        self._val = entries
        return self

    def data(self) -> Dict[str, str]:
        """Get a copy of the stored values."""
        return dict(self._val)

    def get(self, locale: str) -> str:
        """Get the value for a language, with fallbacks."""
        if locale in self._val:
            return self._val[locale]

        current = self.manager.current_locale()
        if current in self._val:
            return self._val[current]

        default = self.manager.default_locale()
        if default in self._val:
            return self._val[default]

        return ""

    def set(self, locale: str, value: str) -> "Translation":
        """Set the value for a language."""
        self._val[locale] = value
        return self

    def each(self, callback: Callable[[str, str], str]) -> "Translation":
        """Apply callback(value, locale) to every value, storing the results.

        Returns:
            This Translation.
        """
        for locale, value in list(self._val.items()):
            self._val[locale] = callback(value, locale)
        return self

    def __getitem__(self, locale: str) -> str:
        return self.get(locale)

    def __setitem__(self, locale: str, value: str) -> None:
        self.set(locale, value)

    def __delitem__(self, locale: str) -> None:
        del self._val[locale]

    def __contains__(self, locale: object) -> bool:
        return locale in self._val

    def __iter__(self) -> Iterator[str]:
        return iter(self._val)

    def __len__(self) -> int:
        return len(self._val)

    def __str__(self) -> str:
        return self.get(self.manager.current_locale())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._val!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Translation):
            return NotImplemented
        return self._val == other._val

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> "Translation":
        return type(self)(self, self.manager)

