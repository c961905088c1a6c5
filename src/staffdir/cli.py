#!/usr/bin/env python3
"""
Main CLI entry point for the employee directory server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from staffdir import __version__
from staffdir.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="staffdir")
def cli() -> None:
    """Employee directory CLI - run the server and manage the database."""
    pass


@cli.command()
@click.option(
    "--host",
    default="0.0.0.0",
    help="Host to bind to (default: 0.0.0.0)",
)
@click.option(
    "--port",
    default=4000,
    type=int,
    help="Port to bind to (default: 4000)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(
    host: str,
    port: int,
    reload: bool,
    workers: int,
    log_level: str,
) -> None:
    """Start the employee directory API server."""

    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting employee directory API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Reloaded and forked workers import the app fresh, so settings travel via env
    os.environ.setdefault("STAFFDIR_API_PORT", str(port))
    if log_level == "debug":
        os.environ["STAFFDIR_DEBUG"] = "true"
        os.environ["STAFFDIR_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("STAFFDIR_DEBUG", "false")
        os.environ.setdefault("STAFFDIR_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "staffdir.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),
                log_level=log_level,
                access_log=True,
            )
        else:
            from staffdir.api.app import app

            uvicorn.run(
                app,
                host=host,
                port=port,
                log_level=log_level,
                access_log=True,
            )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.group()
def db() -> None:
    """Manage the database."""
    pass


@db.command("create")
@click.option(
    "--database-url",
    default=None,
    help="Database URL (default: STAFFDIR_DATABASE_URL / settings)",
)
def create_tables(database_url: str | None) -> None:
    """Create the users and employees tables if they do not exist."""
    from staffdir.database.connection import create_schema, dispose_database, init_database

    configure_logging()

    async def do_create():
        init_database(database_url, force_reinit=True)
        try:
            await create_schema()
        finally:
            await dispose_database()

    try:
        asyncio.run(do_create())
    except Exception as e:
        click.echo(f"✗ Failed to create schema: {e}", err=True)
        sys.exit(1)

    click.echo("✓ Database schema created")


@db.command("check")
@click.option(
    "--database-url",
    default=None,
    help="Database URL (default: STAFFDIR_DATABASE_URL / settings)",
)
def check_connection(database_url: str | None) -> None:
    """Check that the database is reachable."""
    from staffdir.database.connection import (
        check_database_connection,
        dispose_database,
        init_database,
    )

    configure_logging()

    async def do_check():
        init_database(database_url, force_reinit=True)
        try:
            return await check_database_connection()
        finally:
            await dispose_database()

    success, error_message = asyncio.run(do_check())
    if not success:
        click.echo(f"✗ {error_message}", err=True)
        sys.exit(1)

    click.echo("✓ Database connection successful")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
