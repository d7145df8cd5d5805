"""Translator service returning translated strings and Translation objects.

A note about the Translator's behaviour on Translation objects:

- Once a Translation object is built, the value assigned to the current locale
  serves as the catalogue's message id and is translated for any missing locale.
"""

from typing import Any, Dict, List, Mapping, Optional

from localekit.core.logging import get_module_logger
from localekit.i18n.factory import TranslationFactory
from localekit.i18n.formatter import MessageFormatter
from localekit.i18n.loader import TranslationLoader
from localekit.i18n.locales import LocalesManager
from localekit.i18n.models import DEFAULT_DOMAIN, TranslationCatalog
from localekit.i18n.translation import Translation

logger = get_module_logger()


def _is_stringable(value: Any) -> bool:
    """True for objects defining their own __str__ (numbers and containers excluded)."""
    if isinstance(value, (bool, int, float, list, tuple, dict, set)):
        return False
    return type(value).__str__ is not object.__str__


class Translator:
    """Translates messages using catalogues, one per locale.

    Attributes:
        manager: LocalesManager owning the current locale.
        translation_factory: Factory creating Translation objects.
        formatter: MessageFormatter used for parameters and plural choices.
        loader: Optional TranslationLoader feeding the catalogues.
        catalogs: Loaded TranslationCatalogs by language code.
    """

    def __init__(
        self,
        manager: LocalesManager,
        translation_factory: TranslationFactory,
        message_formatter: Optional[MessageFormatter] = None,
        loader: Optional[TranslationLoader] = None,
        fallback_locales: Optional[List[str]] = None,
    ):
        """Initialize Translator.

        Args:
            manager: The locales manager.
            translation_factory: The translation factory.
            message_formatter: Formatter to use. Defaults to the factory's formatter.
            loader: Loader for catalogues.
            fallback_locales: Overrides the manager's fallback chain.
        """
        self.manager = manager
        self.translation_factory = translation_factory
        self.formatter = message_formatter or translation_factory.formatter
        self.loader = loader
        self.catalogs: Dict[str, TranslationCatalog] = {}
        self._domains: List[str] = [DEFAULT_DOMAIN]
        self._fallback_locales: Optional[List[str]] = None
        if fallback_locales is not None:
            self.set_fallback_locales(fallback_locales)

        logger.info(
            "initialized_translator",
            locale=manager.current_locale(),
            fallback_locales=self.get_fallback_locales(),
        )

    # Catalogues
    # ------------------------------------------------------------------

    def add_resource(
        self,
        messages: Mapping[str, str],
        locale: str,
        domain: Optional[str] = None,
    ) -> None:
        """Add messages to the catalogue of a locale.

        Args:
            messages: Message id to message mapping.
            locale: Language code.
            domain: Domain of the messages. Defaults to "messages".
        """
        domain = domain or DEFAULT_DOMAIN
        self._register_domain(domain)
        catalog = self.catalogs.setdefault(locale, TranslationCatalog(locale=locale))
        catalog.add(messages, domain)

    def load_all(self) -> None:
        """Load every catalogue available from the loader."""
        if self.loader is None:
            logger.warning("no_translation_loader")
            return

        for locale, catalog in self.loader.load_all().items():
            for domain in catalog.domains():
                self._register_domain(domain)
            self.catalogs.setdefault(locale, TranslationCatalog(locale=locale)).merge(
                catalog
            )

        logger.info("loaded_all_translations", locale_count=len(self.catalogs))

    def available_domains(self) -> List[str]:
        """Get the loaded domains."""
        return list(self._domains)

    def _register_domain(self, domain: str) -> None:
        if domain not in self._domains:
            self._domains.append(domain)

    # Locales
    # ------------------------------------------------------------------

    def locales(self) -> dict:
        """Get the available locales information."""
        return self.manager.locales()

    def available_locales(self) -> List[str]:
        """Get the available language codes."""
        return self.manager.available_locales()

    def get_locale(self) -> str:
        """Get the current language."""
        return self.manager.current_locale()

    def set_locale(self, locale: Optional[str]) -> None:
        """Set the current language of the locales manager."""
        self.manager.set_current_locale(locale)

    def get_fallback_locales(self) -> List[str]:
        """Get the fallback chain."""
        if self._fallback_locales is not None:
            return list(self._fallback_locales)
        return self.manager.get_fallback_locales()

    def set_fallback_locales(self, locales: List[str]) -> None:
        """Override the fallback chain of the locales manager."""
        self._fallback_locales = list(dict.fromkeys(locales))

    # Lookups
    # ------------------------------------------------------------------

    def _find_message(
        self, message_id: str, domain: str, locale: str
    ) -> Optional[str]:
        for candidate in dict.fromkeys([locale, *self.get_fallback_locales()]):
            catalog = self.catalogs.get(candidate)
            if catalog is not None and catalog.has(message_id, domain):
                return catalog.get(message_id, domain)
        return None

    def has_trans(
        self,
        message_id: str,
        domain: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> bool:
        """Check if a message has a translation, fallbacks included."""
        locale = locale or self.get_locale()
        return self._find_message(message_id, domain or DEFAULT_DOMAIN, locale) is not None

    def trans_exists(
        self,
        message_id: str,
        domain: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> bool:
        """Check if a message has a translation, ignoring fallbacks."""
        catalog = self.catalogs.get(locale or self.get_locale())
        return catalog.has(message_id, domain or DEFAULT_DOMAIN) if catalog else False

    def trans(
        self,
        message_id: str,
        parameters: Optional[Mapping[str, Any]] = None,
        domain: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Translate a message id.

        Unknown ids are used as the message.
        """
        locale = locale or self.get_locale()
        message = self._find_message(str(message_id), domain or DEFAULT_DOMAIN, locale)
        if message is None:
            logger.debug("translation_not_found", message_id=message_id, locale=locale)
            message = str(message_id)
        return self.formatter.format(message, locale, parameters)

    def trans_choice(
        self,
        message_id: str,
        number: float,
        parameters: Optional[Mapping[str, Any]] = None,
        domain: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Translate a choice message id, selecting the form for number."""
        locale = locale or self.get_locale()
        message = self._find_message(str(message_id), domain or DEFAULT_DOMAIN, locale)
        if message is None:
            logger.debug("translation_not_found", message_id=message_id, locale=locale)
            message = str(message_id)
        return self.formatter.choice_format(message, number, locale, parameters)

    # Translation objects
    # ------------------------------------------------------------------

    def translation(
        self,
        val: Any,
        parameters: Optional[Mapping[str, Any]] = None,
        domain: Optional[str] = None,
    ) -> Optional[Translation]:
        """Build a Translation of a (mixed) message for every available locale.

        Returns:
            A new Translation, or None if the value is not translatable.
        """
        factory = self.translation_factory
        if not factory.is_valid_translation(val):
            return None

        translation = factory.create_translation(val)
        localized = str(translation)
        is_message_id = isinstance(val, str)

        for lang in self.available_locales():
            if lang not in translation or (is_message_id and translation[lang] == val):
                translation[lang] = self.trans(localized, parameters, domain, lang)
            else:
                translation[lang] = self.formatter.format(
                    translation[lang], lang, parameters
                )

        return translation

    def translate(
        self,
        val: Any,
        parameters: Optional[Mapping[str, Any]] = None,
        domain: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Translate a (mixed) message into a single string.

        Returns:
            The translated string, or an empty string if the value is not translatable.
        """
        locale = locale or self.get_locale()

        if isinstance(val, Translation):
            return self.formatter.format(val[locale], locale, parameters)

        if not isinstance(val, (str, Mapping)) and val is not None and _is_stringable(val):
            val = str(val)

        if isinstance(val, str):
            return self.trans(val, parameters, domain, locale)

        translation = self.translation(val, parameters, domain)
        return translation[locale] if translation is not None else ""

    def translation_choice(
        self,
        val: Any,
        number: float,
        parameters: Optional[Mapping[str, Any]] = None,
        domain: Optional[str] = None,
    ) -> Optional[Translation]:
        """Build a Translation of a (mixed) choice message for every available locale.

        Returns:
            A new Translation, or None if the value is not translatable.
        """
        factory = self.translation_factory
        if not factory.is_valid_translation(val):
            return None

        translation = factory.create_translation(val)
        localized = str(translation)
        is_message_id = isinstance(val, str)

        for lang in self.available_locales():
            if lang not in translation or (is_message_id and translation[lang] == val):
                translation[lang] = self.trans_choice(
                    localized, number, parameters, domain, lang
                )
            else:
                translation[lang] = self.formatter.choice_format(
                    translation[lang], number, lang, parameters
                )

        return translation

    def translate_choice(
        self,
        val: Any,
        number: float,
        parameters: Optional[Mapping[str, Any]] = None,
        domain: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Translate a (mixed) choice message into a single string."""
        locale = locale or self.get_locale()

        if isinstance(val, Translation):
            return self.formatter.choice_format(val[locale], number, locale, parameters)

        if not isinstance(val, (str, Mapping)) and val is not None and _is_stringable(val):
            val = str(val)

        if isinstance(val, str):
            return self.trans_choice(val, number, parameters, domain, locale)

        translation = self.translation_choice(val, number, parameters, domain)
        return translation[locale] if translation is not None else ""
