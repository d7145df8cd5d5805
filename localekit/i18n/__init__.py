"""i18n system - locales, translations and language detection.

Main components:
- locales: LocalesManager holding the available, default and current locales
- translation: Translation, the localized values of one message
- factory: TranslationFactory validating input and building Translations
- formatter: MessageFormatter for parameters and plural choices
- loader / writer: YAML message catalogues
- translator: Translator service over the catalogues
- resolvers: LanguageResolver detecting the language of a request
"""

from localekit.i18n.errors import ConfigError, NotConfiguredError
from localekit.i18n.factory import TranslationFactory
from localekit.i18n.formatter import MessageFormatter, MessageSelector
from localekit.i18n.loader import TranslationLoader, YAMLTranslationLoader
from localekit.i18n.locales import LocalesManager
from localekit.i18n.models import DEFAULT_DOMAIN, LocaleInfo, TranslationCatalog
from localekit.i18n.resolvers import (
    LanguageResolution,
    LanguageResolver,
    RequestContext,
)
from localekit.i18n.translation import Translation
from localekit.i18n.translator import Translator
from localekit.i18n.writer import YAMLTranslationWriter

__all__ = [
    "ConfigError",
    "NotConfiguredError",
    "DEFAULT_DOMAIN",
    "LocaleInfo",
    "TranslationCatalog",
    "LocalesManager",
    "Translation",
    "TranslationFactory",
    "MessageFormatter",
    "MessageSelector",
    "TranslationLoader",
    "YAMLTranslationLoader",
    "YAMLTranslationWriter",
    "Translator",
    "LanguageResolver",
    "LanguageResolution",
    "RequestContext",
]
