"""localekit configuration settings."""

import json
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.stdlib.get_logger().bind(component="config")


def _parse_json_value(name: str, v: Any) -> Any:
    """Parse a JSON string coming from the environment, leaving other values as is."""
    if not isinstance(v, str):
        return v
    s = v.strip()
    if (s.startswith("'") and s.endswith("'")) or (
        s.startswith('"') and s.endswith('"')
    ):
        s = s[1:-1]
    try:
        return json.loads(s) if s else None
    except (json.JSONDecodeError, ValueError) as e:
        raise ValueError(f"Invalid {name} JSON: {e} (value: {s[:80]}...)") from e


def _as_list(v: Any) -> Any:
    """Accept a single string, a comma separated string or a list."""
    if v is None:
        return []
    if isinstance(v, str):
        s = v.strip()
        if s.startswith("["):
            return json.loads(s)
        return [part.strip() for part in s.split(",") if part.strip()]
    return v


class LocalesSettings(BaseSettings):
    """Configured locales.

    Environment Variables:
        LOCALES: JSON mapping of language code to locale options
        DEFAULT_LANGUAGE: Language code used when nothing else is selected
        FALLBACK_LANGUAGES: JSON list of language codes

    Locale options:
        {
            "en": {"locale": "en_US.UTF8"},
            "fr": {"locale": ["fr_FR.UTF8", "fr_CA.UTF8"]},
            "es": {"locale": "es_ES.UTF8", "active": false}
        }
    """

    locales: Dict[str, Optional[Dict[str, Any]]] = Field(
        default_factory=lambda: {
            "en": {"locale": "en_US.UTF8"},
            "fr": {"locale": "fr_FR.UTF8"},
        },
        alias="LOCALES",
    )
    default_language: Optional[str] = Field(default="en", alias="DEFAULT_LANGUAGE")
    fallback_languages: List[str] = Field(
        default_factory=lambda: ["en"], alias="FALLBACK_LANGUAGES"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("locales", mode="before")
    @classmethod
    def _parse_locales(cls, v: Any) -> Any:
        parsed = _parse_json_value("LOCALES", v)
        if parsed is None:
            logger.warning("no_locales_configured")
            return {}
        if not isinstance(parsed, dict):
            raise ValueError("LOCALES must be a JSON object or a mapping")
        return parsed

    @field_validator("fallback_languages", mode="before")
    @classmethod
    def _parse_fallback_languages(cls, v: Any) -> Any:
        return _as_list(v)


class TranslatorSettings(BaseSettings):
    """Message catalogue settings.

    Environment Variables:
        TRANSLATIONS_DIR: Directory holding <domain>.<locale>.yml files
        TRANSLATIONS_CACHE: Cache parsed catalogues in memory
        TRANSLATIONS_PRELOAD: Load every catalogue when the translator is created
    """

    translations_dir: Optional[str] = Field(default=None, alias="TRANSLATIONS_DIR")
    use_cache: bool = Field(default=True, alias="TRANSLATIONS_CACHE")
    preload: bool = Field(default=True, alias="TRANSLATIONS_PRELOAD")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )


class LanguageMiddlewareSettings(BaseSettings):
    """Options of the language detection middleware.

    Environment Variables:
        LANGUAGE_DEFAULT_LANGUAGE: Language used when no strategy matches
        LANGUAGE_USE_PATH / LANGUAGE_PATH_REGEXP: Detect from the URL path
        LANGUAGE_EXCLUDED_PATH: JSON list of path patterns bypassing the middleware
        LANGUAGE_USE_QUERY / LANGUAGE_QUERY_KEY: Detect from query arguments
        LANGUAGE_USE_SESSION / LANGUAGE_SESSION_KEY: Detect from the session
        LANGUAGE_USE_BROWSER: Detect from the Accept-Language header
        LANGUAGE_USE_HOST / LANGUAGE_HOST_MAP: Detect from the host name
        LANGUAGE_REDIRECT: Redirect to the language-specific URL
        LANGUAGE_SET_LOCALE: Synchronize the process locale

    Example:
        ```python
        options = LanguageMiddlewareSettings(use_query=True, query_key="lang")
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="LANGUAGE_",
        env_file=".env",
        extra="ignore",
    )

    default_language: Optional[str] = None

    use_path: bool = True
    path_regexp: str = r"^/([a-z]{2})\b"
    excluded_path: List[str] = Field(default_factory=lambda: [r"^/admin\b"])

    use_query: bool = False
    query_key: List[str] = Field(default_factory=lambda: ["current_language"])

    use_session: bool = True
    session_key: List[str] = Field(default_factory=lambda: ["current_language"])

    use_browser: bool = True

    use_host: bool = False
    host_map: Dict[str, str] = Field(default_factory=dict)

    redirect: bool = False
    set_locale: bool = True

    @field_validator("excluded_path", "query_key", "session_key", mode="before")
    @classmethod
    def _parse_list(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip().startswith("["):
            return [v]
        return _as_list(v)

    @field_validator("host_map", mode="before")
    @classmethod
    def _parse_host_map(cls, v: Any) -> Any:
        parsed = _parse_json_value("LANGUAGE_HOST_MAP", v)
        return parsed or {}


class Settings(BaseSettings):
    """localekit configuration settings - main aggregator.

    Environment Variables:
        PREFIX: Environment prefix, empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    locales: LocalesSettings
    translator: TranslatorSettings
    middleware: LanguageMiddlewareSettings

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """True if PREFIX is empty (production), False otherwise."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings, instantiating every section not given explicitly."""
        settings_map = {
            "locales": LocalesSettings,
            "translator": TranslatorSettings,
            "middleware": LanguageMiddlewareSettings,
        }
        for name, settings_class in settings_map.items():
            if name not in kwargs:
                kwargs[name] = settings_class()
        super().__init__(**kwargs)


settings = Settings()
