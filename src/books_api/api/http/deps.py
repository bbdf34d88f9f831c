"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.books_api.api.http.app_data import ApplicationDependencies


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies created at application start-up."""
    return request.app.state.app_dependencies


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Open one database session per request.

    Anything left uncommitted when the request fails is rolled back.
    """
    session = app_deps.database_service.get_session()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
