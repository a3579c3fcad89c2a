"""
Starlette middleware that applies route gating to page requests.
"""

import logging
from typing import Iterable, Optional
from urllib.parse import urljoin

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from carbon_tracker.auth.gating import RouteAction, build_request_context, evaluate_route, is_under
from carbon_tracker.auth.security import extract_session_token
from carbon_tracker.config.settings import settings

logger = logging.getLogger(__name__)


class RouteGatingMiddleware(BaseHTTPMiddleware):
    """
    Redirects page requests according to `evaluate_route`.

    Requests under an excluded prefix (the API, docs, static assets) pass
    straight through; API routes authenticate through a dependency instead.
    The decoded session is stored on `request.state.session` either way.
    """

    def __init__(self, app: ASGIApp, excluded_prefixes: Optional[Iterable[str]] = None) -> None:
        super().__init__(app)
        prefixes = settings.GATING_EXCLUDED_PREFIXES if excluded_prefixes is None else excluded_prefixes
        self.excluded_prefixes = tuple(prefixes)

    def is_excluded(self, path: str) -> bool:
        return any(is_under(path, prefix) for prefix in self.excluded_prefixes)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if self.is_excluded(path):
            return await call_next(request)

        context = build_request_context(path, str(request.url), extract_session_token(request))
        request.state.session = context.session

        decision = evaluate_route(context)
        if decision.action is RouteAction.REDIRECT:
            location = urljoin(str(request.url), decision.location)
            logger.info(f"Redirecting {path} -> {decision.location}")
            return RedirectResponse(location, status_code=307)

        return await call_next(request)
