"""Shared utilities for CLI commands."""

from rich.console import Console

from src.books_api.runtime.config.config_data import DatabaseConfig
from src.books_api.runtime.context import get_config

# Initialize Rich console for colored output
console = Console()


def resolve_database_config(database_url: str | None) -> DatabaseConfig:
    """Return the configured database settings, optionally with another URL."""
    db_config = get_config().database
    if database_url:
        return db_config.model_copy(update={"url": database_url})
    return db_config
