"""Language resolution for inbound requests.

The resolver derives one language code per request from, in order: the host
name, the URL path, the query arguments, the session, the Accept-Language
header and finally the configured default language. The first candidate that
names an available locale wins.

The resolver works on a RequestContext so that it does not depend on any web
framework. See localekit.server.middleware for the Starlette adapter.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, MutableMapping, Optional, Pattern
from urllib.parse import quote, urlunsplit

from localekit.core.config import LanguageMiddlewareSettings
from localekit.core.logging import get_module_logger
from localekit.i18n.errors import ConfigError
from localekit.i18n.locales import LocalesManager
from localekit.i18n.system_locale import apply_system_locale

logger = get_module_logger()

SOURCE_HOST = "host"
SOURCE_PATH = "path"
SOURCE_QUERY = "query"
SOURCE_SESSION = "session"
SOURCE_BROWSER = "browser"
SOURCE_DEFAULT = "default"

SystemLocaleSetter = Callable[[List[str]], Any]


@dataclass
class RequestContext:
    """The parts of a request used for language detection.

    Attributes:
        path: URL path, starting with "/".
        query: Query arguments.
        accept_language: Raw Accept-Language header value.
        host: Host name, without port.
        session: Mutable session storage, if any.
        scheme: URL scheme, used for redirects.
        port: Explicit port, used for redirects.
        query_string: Raw query string, kept on redirects.
    """

    path: str = "/"
    query: Mapping[str, Any] = field(default_factory=dict)
    accept_language: Optional[str] = None
    host: str = ""
    session: Optional[MutableMapping[str, Any]] = None
    scheme: str = "http"
    port: Optional[int] = None
    query_string: str = ""


@dataclass(frozen=True)
class LanguageResolution:
    """Outcome of a resolution.

    Attributes:
        language: Resolved language code, or None.
        source: Strategy that produced the language (host, path, query, session,
            browser or default), or None.
        redirect_url: URL to redirect to, or None.
    """

    language: Optional[str] = None
    source: Optional[str] = None
    redirect_url: Optional[str] = None


def parse_accept_language(header: Optional[str]) -> List[str]:
    """Split an Accept-Language header into language ranges, in header order.

    Quality values are dropped and not used for ordering.

    Example:
        parse_accept_language("fr-CH, fr;q=0.9, en;q=0.7") == ["fr-CH", "fr", "en"]
    """
    if not header:
        return []
    ranges = []
    for entry in header.split(","):
        language = entry.split(";", 1)[0].strip()
        if language:
            ranges.append(language)
    return ranges


def _compile(pattern: str) -> Optional[Pattern]:
    try:
        return re.compile(pattern)
    except re.error as e:
        logger.warning("invalid_path_pattern", pattern=pattern, error=str(e))
        return None


class LanguageResolver:
    """Detects the language of a request and applies it.

    Attributes:
        manager: LocalesManager validating candidates and holding the current locale.
        options: LanguageMiddlewareSettings driving the strategies.
    """

    def __init__(
        self,
        manager: LocalesManager,
        options: Optional[LanguageMiddlewareSettings] = None,
        system_locale_setter: SystemLocaleSetter = apply_system_locale,
    ):
        """Initialize the resolver.

        Args:
            manager: The locales manager.
            options: Detection options. Defaults to LanguageMiddlewareSettings().
            system_locale_setter: Called with the ordered system locale strings
                when set_locale is enabled.

        Raises:
            ConfigError: If default_language is set but is not an available locale.
        """
        self.manager = manager
        self.options = options if options is not None else LanguageMiddlewareSettings()
        self.system_locale_setter = system_locale_setter

        default_language = self.options.default_language
        if default_language is not None and not manager.has_locale(default_language):
            raise ConfigError(
                f"Default language is not a valid locale: {default_language!r}"
            )

        self._path_pattern = _compile(self.options.path_regexp)
        self._excluded_patterns = [
            compiled
            for compiled in (_compile(p) for p in self.options.excluded_path)
            if compiled is not None
        ]

    def is_excluded(self, path: str) -> bool:
        """Check if the path bypasses language detection."""
        return any(pattern.search(path) for pattern in self._excluded_patterns)

    def resolve(self, context: RequestContext) -> LanguageResolution:
        """Determine the language of a request.

        Args:
            context: The request data.

        Returns:
            A LanguageResolution. Its language is None when nothing matched and
            no default language is configured.
        """
        options = self.options
        strategies = (
            (options.use_host, SOURCE_HOST, self._from_host, False),
            (options.use_path, SOURCE_PATH, self._from_path, False),
            (options.use_query, SOURCE_QUERY, self._from_query, False),
            (options.use_session, SOURCE_SESSION, self._from_session, True),
            (options.use_browser, SOURCE_BROWSER, self._from_browser, True),
        )

        language = None
        source = None
        allow_redirect = True
        for enabled, name, strategy, keeps_redirect in strategies:
            if not enabled:
                continue
            language = strategy(context)
            if language is not None:
                source = name
                allow_redirect = keeps_redirect
                break

        if language is None and options.default_language is not None:
            language = options.default_language
            source = SOURCE_DEFAULT

        redirect_url = None
        if options.redirect and allow_redirect and language is not None:
            redirect_url = self._redirect_url(language, context)

        logger.debug(
            "language_resolved",
            language=language,
            source=source,
            path=context.path,
            redirect_url=redirect_url,
        )
        return LanguageResolution(language, source, redirect_url)

    def apply(self, resolution: LanguageResolution, context: RequestContext) -> None:
        """Apply a resolution: current locale, session and system locale."""
        language = resolution.language

        self.manager.set_current_locale(language)

        if language is not None and self.options.use_session and context.session is not None:
            for key in self.options.session_key:
                context.session[key] = language

        if self.options.set_locale:
            codes = [language or self.manager.current_locale()]
            codes.extend(self.manager.get_fallback_locales())
            system_locales = self.manager.system_locales(codes)
            if system_locales:
                self.system_locale_setter(system_locales)

    # Strategies
    # ------------------------------------------------------------------

    def _valid(self, candidate: Any) -> Optional[str]:
        if isinstance(candidate, str) and self.manager.has_locale(candidate):
            return candidate
        return None

    def _from_host(self, context: RequestContext) -> Optional[str]:
        host = (context.host or "").lower()
        if not host:
            return None
        for language, host_part in self.options.host_map.items():
            if host_part and host_part.lower() in host and self._valid(language):
                return language
        return None

    def _from_path(self, context: RequestContext) -> Optional[str]:
        if self._path_pattern is None:
            return None
        match = self._path_pattern.search(context.path or "")
        if match is None:
            return None
        candidate = match.group(1) if match.re.groups else match.group(0).strip("/")
        return self._valid(candidate)

    def _from_keys(self, store: Optional[Mapping[str, Any]], keys: Iterable[str]) -> Optional[str]:
        if not store:
            return None
        for key in keys:
            language = self._valid(store.get(key))
            if language is not None:
                return language
        return None

    def _from_query(self, context: RequestContext) -> Optional[str]:
        return self._from_keys(context.query, self.options.query_key)

    def _from_session(self, context: RequestContext) -> Optional[str]:
        return self._from_keys(context.session, self.options.session_key)

    def _from_browser(self, context: RequestContext) -> Optional[str]:
        for language in parse_accept_language(context.accept_language):
            if self._valid(language):
                return language
        return None

    # Redirects
    # ------------------------------------------------------------------

    def _redirect_url(self, language: str, context: RequestContext) -> Optional[str]:
        host = context.host
        path = context.path or "/"

        if self.options.use_host:
            target_host = self.options.host_map.get(language)
            if not target_host:
                return None
            host = target_host
        elif self.options.use_path:
            path = f"/{language}/{path.lstrip('/')}"
        else:
            return None

        netloc = f"{host}:{context.port}" if context.port else host
        path = quote(path, safe="/")
        return urlunsplit((context.scheme, netloc, path, context.query_string, ""))

