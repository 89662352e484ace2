"""Main CLI entry point for fpl-service."""

from __future__ import annotations

import asyncio
import json
import sys

import click
import uvicorn

from fpl_service import __version__
from fpl_service.cli.output import error, info, success
from fpl_service.core.database.exceptions import DataSourceError
from fpl_service.core.settings import get_app_settings, get_db_settings, get_settings
from fpl_service.infra.logging import setup_logging
from fpl_service.utils.retry import RetryError


@click.group()
@click.version_option(version=__version__, prog_name="fpl-service")
def cli() -> None:
    """FPL stats GraphQL API.

    \b
    Quick Start:
      fpl-service check-db      # Verify database connectivity
      fpl-service serve         # Run the API under uvicorn
      fpl-service show-config   # Print effective settings (secrets redacted)
    """


@cli.command()
@click.option("--host", default=None, help="Host to bind (default: APP_HOST / HOST, 0.0.0.0)")
@click.option("--port", default=None, type=int, help="Port to bind (default: APP_PORT / PORT, 4000)")
@click.option("--reload/--no-reload", default=False, help="Enable auto-reload on code changes")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["critical", "error", "warning", "info", "debug"]),
    help="Uvicorn log level",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Run the API server."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    info(f"Serving on http://{host}:{port} (environment: {settings.environment})")
    uvicorn.run(
        "fpl_service.app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
        # logging is configured by the application lifespan
        log_config=None,
    )


async def _check_db() -> None:
    from fpl_service.infra.database import QueryExecutor, close_pool, init_pool

    try:
        await init_pool()
        await QueryExecutor().ping()
    finally:
        await close_pool()


@cli.command(name="check-db")
def check_db() -> None:
    """Open the connection pool and run SELECT 1."""
    db_settings = get_db_settings()
    info(f"Connecting to {db_settings.host}:{db_settings.port}/{db_settings.name} (sslmode={db_settings.sslmode})")

    try:
        asyncio.run(_check_db())
    except (DataSourceError, RetryError) as exc:
        error(f"Database check failed: {exc}")
        sys.exit(1)

    success("Database connection OK")


@cli.command(name="show-config")
def show_config() -> None:
    """Print the effective settings as JSON. Passwords are redacted."""
    settings = get_settings()
    payload = settings.model_dump(mode="json")
    payload["db"].pop("dsn", None)
    click.echo(json.dumps(payload, indent=2, sort_keys=True))


def main() -> None:
    """Entry point for the console script."""
    setup_logging()
    cli()


if __name__ == "__main__":
    main()
