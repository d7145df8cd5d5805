"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for the i18n services.
"""

from typing import Annotated

from fastapi import Depends

from localekit.core.config import Settings
from localekit.i18n.locales import LocalesManager
from localekit.i18n.translator import Translator
from localekit.services.providers import (
    get_locales_manager,
    get_request_locale,
    get_settings,
    get_translator,
)

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Translator installed on app.state by install_i18n()
TranslatorDep = Annotated[Translator, Depends(get_translator)]

# Locales manager shared with the language middleware
LocalesManagerDep = Annotated[LocalesManager, Depends(get_locales_manager)]

# Language code resolved for the current request
RequestLocaleDep = Annotated[str, Depends(get_request_locale)]

__all__ = [
    "SettingsDep",
    "TranslatorDep",
    "LocalesManagerDep",
    "RequestLocaleDep",
]
