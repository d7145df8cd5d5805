from typing import Any, Callable, MutableMapping, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse

from localekit.core.logging import get_module_logger
from localekit.i18n.resolvers import LanguageResolver, RequestContext

logger = get_module_logger()

SessionGetter = Callable[[Request], Optional[MutableMapping[str, Any]]]


def build_request_context(
    request: Request, session: Optional[MutableMapping[str, Any]] = None
) -> RequestContext:
    """Extract the language detection inputs from a request."""
    url = request.url
    return RequestContext(
        path=url.path,
        query=dict(request.query_params),
        accept_language=request.headers.get("accept-language"),
        host=url.hostname or "",
        session=session,
        scheme=url.scheme,
        port=url.port,
        query_string=url.query,
    )


class LanguageMiddleware(BaseHTTPMiddleware):
    """Resolves the language of each request and applies it.

    The resolved code is stored on request.state.locale and sent back in the
    Content-Language header unless the response already has one.
    """

    def __init__(
        self,
        app,
        resolver: LanguageResolver,
        session_getter: Optional[SessionGetter] = None,
    ):
        super().__init__(app)
        self.resolver = resolver
        self.session_getter = session_getter

    def _session(self, request: Request) -> Optional[MutableMapping[str, Any]]:
        if "session" in request.scope:
            return request.scope["session"]
        if self.session_getter is not None:
            return self.session_getter(request)
        return None

    async def dispatch(self, request, call_next):
        if self.resolver.is_excluded(request.url.path):
            return await call_next(request)

        context = build_request_context(request, self._session(request))
        resolution = self.resolver.resolve(context)
        self.resolver.apply(resolution, context)
        request.state.locale = resolution.language

        if resolution.redirect_url:
            logger.info(
                "redirecting_to_language",
                language=resolution.language,
                url=resolution.redirect_url,
            )
            return RedirectResponse(resolution.redirect_url, status_code=302)

        response = await call_next(request)
        if resolution.language and "content-language" not in response.headers:
            response.headers["Content-Language"] = resolution.language
        return response
