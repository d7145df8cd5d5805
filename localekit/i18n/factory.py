"""Factory for Translation objects.

The translation factory creates Translation objects without passing messages
through the catalogues, where a message might be accidentally translated.
"""

from typing import Any, Callable, Mapping, Optional

from localekit.core.logging import get_module_logger
from localekit.i18n.errors import ConfigError
from localekit.i18n.formatter import MessageFormatter
from localekit.i18n.locales import LocalesManager
from localekit.i18n.translation import Translation

logger = get_module_logger()

TranslationClass = Callable[[Any, LocalesManager], Translation]


class TranslationFactory:
    """Creates and validates Translation objects.

    Attributes:
        manager: LocalesManager given to every created Translation.
    """

    def __init__(
        self,
        manager: LocalesManager,
        message_formatter: Optional[MessageFormatter] = None,
        translation_class: TranslationClass = Translation,
    ):
        """Initialize the translation factory.

        Args:
            manager: The locales manager.
            message_formatter: Formatter for parameters and plural choices.
                Defaults to a new MessageFormatter.
            translation_class: Callable building a Translation from
                (value, manager). Defaults to Translation.

        Raises:
            ConfigError: If translation_class is not callable.
        """
        self.manager = manager
        self._formatter = message_formatter or MessageFormatter()
        self._translation_class: TranslationClass = Translation
        self.set_translation_class(translation_class)

    @property
    def formatter(self) -> MessageFormatter:
        """The message formatter."""
        return self._formatter

    @property
    def translation_class(self) -> TranslationClass:
        """The callable building Translation objects."""
        return self._translation_class

    def set_translation_class(self, translation_class: TranslationClass) -> "TranslationFactory":
        """Set the callable building Translation objects.

        Raises:
            ConfigError: If translation_class is not callable.
        """
        if not callable(translation_class):
            raise ConfigError("Translation class must be a callable.")
        self._translation_class = translation_class
        return self

    def is_valid_translation(self, value: Any) -> bool:
        """Determine if the value is translatable.

        Valid values are non-blank strings, Translation objects, and mappings
        with at least one non-empty string key holding a non-empty string.
        """
        if isinstance(value, Translation):
            return True

        if isinstance(value, str):
            return bool(value.strip())

        if isinstance(value, Mapping):
            return any(
                isinstance(k, str) and k and isinstance(v, str) and v
                for k, v in value.items()
            )

        return False

    def create_translation(self, value: Any = None) -> Translation:
        """Create a Translation that is empty or built from a (mixed) message.

        Raises:
            ConfigError: If the translation class can not build the object.
        """
        translation_class = self._translation_class
        if not callable(translation_class):
            logger.error("invalid_translation_class", translation_class=repr(translation_class))
            raise ConfigError(
                f"Translation class ({translation_class!r}) could not be instantiated"
            )
        return translation_class(value, self.manager)

    def create_translation_formatted(
        self,
        value: Any,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Translation]:
        """Create a Translation and substitute parameters in every locale.

        Returns:
            A new Translation, or None if the value is not translatable.
        """
        if not self.is_valid_translation(value):
            return None

        translation = self.create_translation(value)

        if parameters:
            translation.each(
                lambda message, locale: self._formatter.format(
                    message, locale, parameters
                )
            )

        return translation

    def create_translation_choice(
        self,
        value: Any,
        number: float,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Translation]:
        """Create a Translation choosing the plural form for number in every locale.

        Returns:
            A new Translation, or None if the value is not translatable.
        """
        if not self.is_valid_translation(value):
            return None

        translation = self.create_translation(value)
        translation.each(
            lambda message, locale: self._formatter.choice_format(
                message, number, locale, parameters
            )
        )

        return translation
