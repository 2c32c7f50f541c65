"""Command line entry point for Course Portal."""

from __future__ import annotations

import sys

import click
import uvicorn

from courseportal import __version__
from courseportal.config import ConfigError, Settings
from courseportal.logging import setup_logging


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(__version__)
def main() -> None:
    """Course Portal - course catalog and enrollment service."""
    pass


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def serve(host: str, port: int, verbose: bool) -> None:
    """Run the REST API server."""
    from courseportal.api.app import create_app  # noqa: PLC0415

    setup_logging(level="DEBUG" if verbose else None)
    settings = _load_settings()
    uvicorn.run(create_app(settings), host=host, port=port, log_level="info")


@main.command()
@click.option(
    "--db",
    "db_path",
    default=None,
    help="SQLite database path (default: COURSEPORTAL_DB_PATH or courseportal.db)",
)
def seed(db_path: str | None) -> None:
    """Load the reference courses into an empty catalog."""
    from courseportal.catalog_store import CatalogStore, seed_demo_courses  # noqa: PLC0415

    setup_logging(console=False)
    settings = _load_settings()
    store = CatalogStore(db_path or settings.db_path)
    try:
        if seed_demo_courses(store):
            click.echo(f"Seeded {store.count_courses()} courses")
        else:
            click.echo("Catalog already has courses, nothing to do")
    finally:
        store.close()


if __name__ == "__main__":
    main()
