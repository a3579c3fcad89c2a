"""
Route gating decisions.

`evaluate_route` is a pure function of a per-request `RequestContext`: it
never looks at globals, which keeps every branch of the decision tree
testable without an HTTP stack.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import quote

from carbon_tracker.auth.security import SessionTokenError, decode_session_token
from carbon_tracker.config.settings import settings
from carbon_tracker.models.dtos import SessionDTO

logger = logging.getLogger(__name__)

ROOT_PATH = "/"
AUTH_PAGES_PREFIX = "/auth"
AUTH_API_PREFIX = "/api/auth"
ONBOARDING_PATH = "/onboarding"
DASHBOARD_PATH = "/dashboard"

# Paths reachable without a session
PUBLIC_PATHS = (ROOT_PATH, AUTH_PAGES_PREFIX, AUTH_API_PREFIX)


class RouteAction(str, Enum):
    ALLOW = "allow"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class RouteDecision:
    action: RouteAction
    location: Optional[str] = None

    @classmethod
    def allow(cls) -> "RouteDecision":
        return cls(RouteAction.ALLOW)

    @classmethod
    def redirect(cls, location: str) -> "RouteDecision":
        return cls(RouteAction.REDIRECT, location)


@dataclass(frozen=True)
class RequestContext:
    """
    Everything the gate needs to know about one request.

    Attributes:
        path: Request path, e.g. "/dashboard"
        url: Full request URL, used as the sign-in callback
        session: Decoded session, or None for anonymous requests
    """
    path: str
    url: str
    session: Optional[SessionDTO] = None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def onboarding_completed(self) -> bool:
        return bool(self.session and self.session.onboarding_completed)


def is_under(path: str, prefix: str) -> bool:
    """True if `path` is `prefix` itself or a sub-path of it."""
    if prefix == ROOT_PATH:
        return path == ROOT_PATH
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def is_public_path(path: str) -> bool:
    return any(is_under(path, public) for public in PUBLIC_PATHS)


def sign_in_location(callback_url: str) -> str:
    return f"{settings.SIGN_IN_PATH}?callbackUrl={quote(callback_url, safe='')}"


def home_for(context: RequestContext) -> str:
    """Where an authenticated user belongs given their onboarding flag."""
    return DASHBOARD_PATH if context.onboarding_completed else ONBOARDING_PATH


def evaluate_route(context: RequestContext) -> RouteDecision:
    """
    Decide whether a page request proceeds or is redirected.

    Args:
        context: Per-request identity and path

    Returns:
        RouteDecision: ALLOW, or REDIRECT with a target location
    """
    path = context.path

    if path == ROOT_PATH or is_under(path, AUTH_API_PREFIX):
        return RouteDecision.allow()

    if not context.is_authenticated:
        if is_public_path(path):
            return RouteDecision.allow()
        return RouteDecision.redirect(sign_in_location(context.url))

    if is_under(path, AUTH_PAGES_PREFIX):
        return RouteDecision.redirect(home_for(context))

    on_onboarding = is_under(path, ONBOARDING_PATH)
    if not context.onboarding_completed and not on_onboarding:
        return RouteDecision.redirect(ONBOARDING_PATH)
    if context.onboarding_completed and on_onboarding:
        return RouteDecision.redirect(DASHBOARD_PATH)

    return RouteDecision.allow()


def build_request_context(path: str, url: str, token: Optional[str]) -> RequestContext:
    """
    Build a RequestContext, treating an invalid or expired token as anonymous.
    """
    session = None
    if token:
        try:
            session = decode_session_token(token)
        except SessionTokenError as e:
            logger.debug(f"Ignoring session token for {path}: {e}")
    return RequestContext(path=path, url=url, session=session)
