"""Command-line interface for the carbon tracker service."""

import asyncio
import logging

import typer
import uvicorn
from typing_extensions import Annotated

from carbon_tracker.config.settings import settings

app = typer.Typer(help="Carbon Tracker service commands")
logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO") -> None:
    """Set up basic logging configuration."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()]
    )


@app.command("init-db")
def init_db(
    loglevel: Annotated[str, typer.Option("--loglevel", "-l", help="Logging level")] = "INFO",
) -> None:
    """Create all tables directly from the ORM models (development databases)."""
    setup_logging(loglevel)
    from carbon_tracker.api.main import create_tables

    logger.info(f"Creating tables on {settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}")
    try:
        asyncio.run(create_tables())
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise typer.Exit(code=1)
    logger.info("✓ Tables created")


@app.command("serve")
def serve(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = settings.API_HOST,
    port: Annotated[int, typer.Option("--port", "-p", help="Bind port")] = settings.API_PORT,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes")] = False,
) -> None:
    """Run the API with uvicorn."""
    uvicorn.run("carbon_tracker.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
