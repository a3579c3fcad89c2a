"""
Authentication: password hashing, session tokens and route gating.
"""

from .gating import RequestContext, RouteAction, RouteDecision, build_request_context, evaluate_route
from .middleware import RouteGatingMiddleware
from .security import (
    SessionTokenError,
    create_session_token,
    decode_session_token,
    extract_session_token,
    hash_password,
    verify_password,
)

__all__ = [
    "RequestContext",
    "RouteAction",
    "RouteDecision",
    "RouteGatingMiddleware",
    "SessionTokenError",
    "build_request_context",
    "create_session_token",
    "decode_session_token",
    "evaluate_route",
    "extract_session_token",
    "hash_password",
    "verify_password",
]
