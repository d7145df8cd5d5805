"""Locales manager.

Holds the configured locales, the default language, the fallback chain and
the "current locale" cursor shared by translations and the language middleware.
"""

from contextvars import ContextVar
from typing import Any, Dict, Iterable, List, Mapping, Optional

from localekit.core.logging import get_module_logger
from localekit.i18n.errors import ConfigError
from localekit.i18n.models import LocaleInfo

logger = get_module_logger()


class LocalesManager:
    """Manages the available locales and the current locale.

    Only active locales are kept; their configuration order is preserved and
    drives the default current locale and fallback ordering.

    The current locale is held in a ContextVar, so each request task (and each
    thread running its handlers) sees its own value.

    Attributes:
        default_language: Code of the default locale, if one was configured.
        fallback_languages: Deduplicated fallback chain.
    """

    def __init__(
        self,
        locales: Mapping[str, Any],
        default_language: Optional[str] = None,
        fallback_languages: Optional[Iterable[str]] = None,
    ):
        """Initialize the locales manager.

        Args:
            locales: Mapping of language code to locale options (or LocaleInfo).
            default_language: Code of the default locale.
            fallback_languages: Ordered fallback language codes.

        Raises:
            ConfigError: If no active locale is configured, or if the default
                language is not a string naming an active locale.
        """
        self._locales: Dict[str, LocaleInfo] = {}
        for code, options in (locales or {}).items():
            try:
                info = LocaleInfo.from_config(code, options)
            except ValueError as e:
                raise ConfigError(str(e)) from e
            if info.active:
                self._locales[code] = info

        if not self._locales:
            raise ConfigError("Locales can not be empty.")

        if default_language is not None:
            if not isinstance(default_language, str):
                raise ConfigError("Default language must be a string.")
            if default_language not in self._locales:
                raise ConfigError(
                    f"Default language is not a valid locale: {default_language!r}"
                )

        self.default_language = default_language
        self.fallback_languages: List[str] = list(
            dict.fromkeys(fallback_languages or [])
        )
        self._current_locale: ContextVar[Optional[str]] = ContextVar(
            f"localekit_current_locale_{id(self)}", default=None
        )

        logger.info(
            "initialized_locales_manager",
            locales=self.available_locales(),
            default_language=default_language,
            fallback_languages=self.fallback_languages,
        )

    def locales(self) -> Dict[str, LocaleInfo]:
        """Get the active locales, keyed by language code."""
        return dict(self._locales)

    def available_locales(self) -> List[str]:
        """Get the active language codes."""
        return list(self._locales.keys())

    def has_locale(self, code: Any) -> bool:
        """Check if the code names an active locale."""
        return isinstance(code, str) and code in self._locales

    def default_locale(self) -> str:
        """Get the default language, or the first active locale."""
        if self.default_language is not None:
            return self.default_language
        return next(iter(self._locales))

    def current_locale(self) -> str:
        """Get the current language."""
        current = self._current_locale.get()
        if current is None:
            return self.default_locale()
        return current

    def set_current_locale(self, code: Optional[str]) -> None:
        """Set the current language.

        Args:
            code: An active language code, or None to reset to the default.

        Raises:
            ConfigError: If the code is neither None nor a string, or is not
                an active locale.
        """
        if code is None:
            self._current_locale.set(None)
            return

        if not isinstance(code, str):
            raise ConfigError("Current language must be a string.")

        if code not in self._locales:
            raise ConfigError(f"Current language is not a valid locale: {code!r}")

        self._current_locale.set(code)

    def get_fallback_locales(self) -> List[str]:
        """Get the fallback language codes."""
        return list(self.fallback_languages)

    def system_locales(self, codes: Iterable[str]) -> List[str]:
        """Expand language codes into their configured system locale strings.

        Unknown codes are skipped and duplicates are dropped, order is kept.
        """
        result: List[str] = []
        for code in dict.fromkeys(codes):
            info = self._locales.get(code)
            if info is None:
                continue
            for system_locale in info.locales:
                if system_locale not in result:
                    result.append(system_locale)
        return result
