"""
Factory functions for dependency injection.

Provides the settings singleton, builders for the i18n services and the
request-scoped accessors used by the FastAPI dependencies.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import Request

from localekit.core.config import Settings
from localekit.core.logging import get_module_logger
from localekit.i18n.errors import NotConfiguredError
from localekit.i18n.factory import TranslationFactory
from localekit.i18n.loader import YAMLTranslationLoader
from localekit.i18n.locales import LocalesManager
from localekit.i18n.translator import Translator

logger = get_module_logger()


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Application code should use the DI type alias for testability:
        from localekit.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


def create_locales_manager(settings: Optional[Settings] = None) -> LocalesManager:
    """Create a LocalesManager from the locales settings.

    Raises:
        ConfigError: If the configured locales are invalid.
    """
    settings = settings or get_settings()
    return LocalesManager(
        settings.locales.locales,
        default_language=settings.locales.default_language,
        fallback_languages=settings.locales.fallback_languages,
    )


def create_translator(
    settings: Optional[Settings] = None,
    manager: Optional[LocalesManager] = None,
    translations_dir: Optional[Path] = None,
) -> Translator:
    """Create and configure a Translator instance.

    Args:
        settings: Settings to read from (default: get_settings()).
        manager: LocalesManager to share (default: built from settings).
        translations_dir: Overrides TRANSLATIONS_DIR.

    Returns:
        Translator: Configured translator instance. Without a translations
        directory it has no loader and starts with empty catalogues.

    Raises:
        ValueError: If the translations directory does not exist.

    Usage:
        translator = create_translator()
        translator.trans("greeting", {"%name%": "Alex"}, locale="fr")
    """
    settings = settings or get_settings()
    manager = manager or create_locales_manager(settings)

    directory = translations_dir or settings.translator.translations_dir
    loader = None
    if directory:
        loader = YAMLTranslationLoader(
            translations_dir=Path(directory),
            use_cache=settings.translator.use_cache,
        )

    translator = Translator(manager, TranslationFactory(manager), loader=loader)

    if loader is not None and settings.translator.preload:
        translator.load_all()
        logger.info(
            "translator_created_with_preload",
            translations_dir=str(directory),
            locale_count=len(translator.catalogs),
        )
    else:
        logger.info(
            "translator_created_lazy",
            translations_dir=str(directory) if directory else None,
        )

    return translator


def get_translator(request: Request) -> Translator:
    """Get the translator installed on the application.

    Raises:
        NotConfiguredError: If install_i18n was not called.
    """
    translator = getattr(request.app.state, "translator", None)
    if translator is None:
        raise NotConfiguredError(
            "Translator is not set. Call install_i18n() on the application first."
        )
    return translator


def get_locales_manager(request: Request) -> LocalesManager:
    """Get the locales manager installed on the application.

    Raises:
        NotConfiguredError: If install_i18n was not called.
    """
    manager = getattr(request.app.state, "locales_manager", None)
    if manager is None:
        raise NotConfiguredError(
            "Locales manager is not set. Call install_i18n() on the application first."
        )
    return manager


def get_request_locale(request: Request) -> str:
    """Get the language resolved for the request, or the current locale."""
    language = getattr(request.state, "locale", None)
    if language:
        return language
    return get_locales_manager(request).current_locale()
