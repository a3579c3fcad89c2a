"""
Page routes guarded by RouteGatingMiddleware.

These are deliberately thin: the analytics UI itself is the Streamlit
dashboard, which `/dashboard` links to.
"""

from html import escape
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from carbon_tracker.config.settings import settings

router = APIRouter()


def render_page(title: str, body: str) -> HTMLResponse:
    return HTMLResponse(
        "<!doctype html>"
        f"<html><head><title>{escape(title)} | Carbon Tracker</title></head>"
        f"<body><h1>{escape(title)}</h1>{body}</body></html>"
    )


def display_name(request: Request) -> Optional[str]:
    session = getattr(request.state, "session", None)
    if session is None:
        return None
    return session.name or session.email


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def landing(request: Request) -> HTMLResponse:
    name = display_name(request)
    greeting = f"<p>Signed in as {escape(name)}.</p>" if name else ""
    return render_page(
        "Track your carbon footprint",
        f"{greeting}<p><a href=\"/dashboard\">Dashboard</a> | <a href=\"/auth/signin\">Sign in</a></p>",
    )


@router.get("/auth/signin", response_class=HTMLResponse, include_in_schema=False)
async def signin_page(callbackUrl: Optional[str] = None) -> HTMLResponse:
    note = f"<p>Sign in to continue to {escape(callbackUrl)}.</p>" if callbackUrl else ""
    return render_page(
        "Sign in",
        f"{note}<p>POST your email and password to <code>/api/auth/signin</code>.</p>",
    )


@router.get("/auth/signup", response_class=HTMLResponse, include_in_schema=False)
async def signup_page() -> HTMLResponse:
    return render_page(
        "Create an account",
        "<p>POST your email, password and optional name to <code>/api/auth/signup</code>.</p>",
    )


@router.get("/onboarding", response_class=HTMLResponse, include_in_schema=False)
async def onboarding_page() -> HTMLResponse:
    return render_page(
        "Welcome aboard",
        "<p>Finish setting up your profile, then POST to <code>/api/onboarding/complete</code>.</p>",
    )


@router.get("/dashboard", response_class=HTMLResponse, include_in_schema=False)
async def dashboard_page() -> HTMLResponse:
    url = escape(settings.DASHBOARD_URL)
    return render_page(
        "Dashboard",
        f"<p>Your analytics live at <a href=\"{url}\">{url}</a>.</p>",
    )
