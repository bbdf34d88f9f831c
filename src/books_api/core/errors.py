"""Application error taxonomy.

Every error the API reports on purpose derives from ``BooksApiError`` and
carries the HTTP status it maps to. Anything else is treated as unexpected and
rendered as a 500 by the request middleware.
"""

from typing import Any


class BooksApiError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500

    def __init__(self, detail: Any, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationError(BooksApiError):
    """Request payload failed schema validation."""

    status_code = 400

    def __init__(self, messages: str | list[str]) -> None:
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__(self.messages)


class NotFoundError(BooksApiError):
    """No record exists for the requested key."""

    status_code = 404


class ConflictError(BooksApiError):
    """A record with the same key already exists."""

    status_code = 409
