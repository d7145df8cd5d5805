"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from localekit.services.dependencies import (
    SettingsDep,
    TranslatorDep,
    LocalesManagerDep,
    RequestLocaleDep,
)
from localekit.services.providers import (
    get_settings,
    create_locales_manager,
    create_translator,
    get_translator,
    get_locales_manager,
    get_request_locale,
)

__all__ = [
    "SettingsDep",
    "TranslatorDep",
    "LocalesManagerDep",
    "RequestLocaleDep",
    "get_settings",
    "create_locales_manager",
    "create_translator",
    "get_translator",
    "get_locales_manager",
    "get_request_locale",
]
