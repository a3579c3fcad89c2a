"""
FastAPI application for the Carbon Tracker service.

This module initializes and configures the FastAPI application that serves
the authentication, onboarding and submissions API plus the gated pages.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from carbon_tracker.api.endpoints import auth, onboarding, pages, submissions
from carbon_tracker.auth.middleware import RouteGatingMiddleware
from carbon_tracker.config.settings import settings
from carbon_tracker.models.base import Base
from carbon_tracker.utils.db_session import get_async_engine
from carbon_tracker.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    """Create all tables from ORM metadata on the configured database."""
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.
    """
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    if settings.AUTO_CREATE_TABLES:
        logger.info("AUTO_CREATE_TABLES enabled - creating tables")
        await create_tables()

    yield

    logger.info("Shutting down application")
    await get_async_engine().dispose()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""Carbon footprint tracking API.

        This API provides endpoints for:
        - Account signup, sign-in and session inspection
        - Completing the onboarding flow
        - Storing scored submissions and listing them by period
        - Health monitoring""",
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,  # Disable docs in production
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_tags=[
            {"name": "auth", "description": "Signup and session operations"},
            {"name": "onboarding", "description": "One-time onboarding flow"},
            {"name": "submissions", "description": "Scored carbon footprint submissions"},
            {"name": "health", "description": "Health check and monitoring"},
        ],
    )

    # Innermost: runs after the trusted-host and CORS layers
    app.add_middleware(RouteGatingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS if not settings.DEBUG else ["*"],
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.ALLOWED_HOSTS if not settings.DEBUG else ["*"]
    )

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(onboarding.router, prefix="/api/onboarding", tags=["onboarding"])
    app.include_router(submissions.router, prefix="/api/submissions", tags=["submissions"])
    app.include_router(pages.router)

    @app.get("/health", tags=["health"], summary="Health Check", description="Get application health status")
    async def health_check():
        """
        Health check endpoint.

        Returns:
            dict: Service status, version and timestamp
        """
        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "debug_mode": settings.DEBUG,
        }

    return app


# Create the application instance
app = create_app()
