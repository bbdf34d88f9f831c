"""Book repository for data access operations."""

import re
from collections.abc import Mapping
from typing import Any

from loguru import logger
from sqlmodel import Session, select

from src.books_api.core.errors import NotFoundError
from src.books_api.core.validation import SQL_INTEGER_MAX, SQL_INTEGER_MIN

from .entity import Book
from .table import BookTable

_COLUMN_TYPES: dict[str, type] = {
    name: info.annotation for name, info in BookTable.model_fields.items()
}

_INTEGER_PATTERN = re.compile(r"-?[0-9]+")


def _coerce_filter(column_type: type, raw: Any) -> Any:
    """Convert a query-string value to the column type, or raise ``ValueError``."""
    if column_type is int:
        text = str(raw)
        if not _INTEGER_PATTERN.fullmatch(text):
            raise ValueError(f"not a canonical integer: {text!r}")
        value = int(text)
        if not SQL_INTEGER_MIN <= value <= SQL_INTEGER_MAX:
            raise ValueError(f"integer out of column range: {text!r}")
        return value
    return column_type(raw)


class BookRepository:
    """Data-access layer for books.

    The repository flushes but never commits; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _get_row(self, isbn: str) -> BookTable:
        row = self._session.get(BookTable, isbn)
        if row is None:
            raise NotFoundError(f"There is no book with an isbn '{isbn}'")
        return row

    def list_all(self, filters: Mapping[str, str] | None = None) -> list[Book]:
        """Return all books, narrowed by exact-match filters on known columns.

        Filter values are coerced to the column type; integers must be written
        as plain decimal digits within the column range. Unknown filter names
        are ignored and a value that cannot be coerced matches nothing.
        """
        statement = select(BookTable)
        for name, raw in (filters or {}).items():
            column_type = _COLUMN_TYPES.get(name)
            if column_type is None:
                logger.debug("Ignoring unknown book filter {!r}", name)
                continue
            try:
                value = _coerce_filter(column_type, raw)
            except (TypeError, ValueError):
                logger.debug("Book filter {}={!r} cannot match any row", name, raw)
                return []
            statement = statement.where(getattr(BookTable, name) == value)

        rows = self._session.exec(statement).all()
        return [Book.model_validate(row) for row in rows]

    def find_one(self, isbn: str) -> Book:
        """Return the book with the given ISBN or raise ``NotFoundError``."""
        return Book.model_validate(self._get_row(isbn))

    def create(self, book: Book) -> Book:
        """Insert a new book.

        A duplicate ISBN surfaces as ``sqlalchemy.exc.IntegrityError``.
        """
        row = BookTable.model_validate(book.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        logger.info("Created book {}", row.isbn)
        return Book.model_validate(row)

    def update(self, isbn: str, data: Mapping[str, Any]) -> Book:
        """Overwrite every non-key field of an existing book."""
        row = self._get_row(isbn)
        for name, value in data.items():
            if name == "isbn":
                continue
            setattr(row, name, value)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        logger.info("Updated book {}", isbn)
        return Book.model_validate(row)

    def remove(self, isbn: str) -> None:
        """Delete an existing book."""
        row = self._get_row(isbn)
        self._session.delete(row)
        self._session.flush()
        logger.info("Removed book {}", isbn)
