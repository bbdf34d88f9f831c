"""Database initialization script."""

from src.books_api.core.services import DbManageService, DbSessionService
from src.books_api.runtime.config.config_data import DatabaseConfig


def init_db(db_config: DatabaseConfig | None = None) -> None:
    """Create all database tables."""
    database_service = DbSessionService(db_config)
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
