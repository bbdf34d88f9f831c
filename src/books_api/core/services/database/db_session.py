"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.books_api.runtime.config.config_data import DatabaseConfig
from src.books_api.runtime.context import get_config


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig | None = None):
        """Initialize the shared database engine and session factory."""

        logger.info("Setting up database engine and session factory")
        self._config = db_config or get_config().database
        engine_kwargs = self._get_engine_kwargs(self._config)

        logger.info(
            "Initializing database engine for {} ({} mode)",
            "sqlite" if self._config.is_sqlite else "server database",
            self._config.environment_mode,
        )
        self._engine = create_engine(self._config.connection_string, **engine_kwargs)

    @property
    def engine(self):
        return self._engine

    def _get_engine_kwargs(self, db_config: DatabaseConfig) -> dict[str, Any]:
        """Engine options tuned for the configured backend."""
        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "connect_args": self._get_connect_args(db_config),
        }

        if db_config.is_sqlite:
            if db_config.url in ("sqlite://", "sqlite:///:memory:"):
                # A single shared connection keeps the in-memory database alive
                engine_kwargs["poolclass"] = StaticPool
            elif db_config.environment_mode == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
            return engine_kwargs

        engine_kwargs.update(
            {
                "pool_size": db_config.pool_size,
                "max_overflow": db_config.max_overflow,
                "pool_timeout": db_config.pool_timeout,
                "pool_recycle": db_config.pool_recycle,
                "pool_pre_ping": True,  # Validate connections before use
            }
        )
        return engine_kwargs

    def _get_connect_args(self, db_config: DatabaseConfig) -> dict[str, Any]:
        """Get database-specific connection arguments."""
        if db_config.is_sqlite:
            return {
                "check_same_thread": False,  # Sessions are used from the threadpool
                "timeout": 20,  # Lock timeout
            }
        if db_config.url.startswith("postgresql"):
            return {
                "application_name": f"books_api_{db_config.environment_mode}",
                "connect_timeout": 30,
            }
        return {}

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Prevent lazy loading issues
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Transactional scope: commit on success, roll back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.bind(error_type=type(e).__name__).error(
                "Database transaction failed: {}", e
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool

        def stat(name: str) -> int:
            value = getattr(pool, name, None)
            return value() if callable(value) else 0

        return {
            "class": type(pool).__name__,
            "size": stat("size"),
            "checked_in": stat("checkedin"),
            "checked_out": stat("checkedout"),
            "overflow": stat("overflow"),
        }

    def dispose(self) -> None:
        """Release every pooled connection."""
        self._engine.dispose()
        logger.info("Database engine disposed")
