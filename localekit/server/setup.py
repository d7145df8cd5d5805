from typing import Optional

from fastapi import FastAPI

from localekit.core.config import Settings
from localekit.core.logging import get_module_logger
from localekit.i18n.resolvers import LanguageResolver, SystemLocaleSetter
from localekit.i18n.system_locale import apply_system_locale
from localekit.i18n.translator import Translator
from localekit.server.middleware import LanguageMiddleware, SessionGetter
from localekit.services.providers import create_translator, get_settings

logger = get_module_logger()


def install_i18n(
    app: FastAPI,
    settings: Optional[Settings] = None,
    translator: Optional[Translator] = None,
    session_getter: Optional[SessionGetter] = None,
    system_locale_setter: SystemLocaleSetter = apply_system_locale,
) -> Translator:
    """Wire the translator and the language middleware into an application.

    The translator and its locales manager are stored on app.state, where the
    TranslatorDep and LocalesManagerDep dependencies find them.

    Raises:
        ConfigError: If the locales or the middleware options are invalid.
    """
    settings = settings or get_settings()
    translator = translator or create_translator(settings)

    resolver = LanguageResolver(
        translator.manager,
        options=settings.middleware,
        system_locale_setter=system_locale_setter,
    )

    app.state.translator = translator
    app.state.locales_manager = translator.manager
    app.add_middleware(
        LanguageMiddleware, resolver=resolver, session_getter=session_getter
    )

    logger.info(
        "installed_i18n",
        locales=translator.available_locales(),
        default_language=settings.middleware.default_language,
    )
    return translator
