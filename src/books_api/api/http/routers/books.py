"""Book API router with CRUD operations."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from loguru import logger
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from src.books_api.api.http.deps import get_db_session
from src.books_api.core.errors import ConflictError, ValidationError
from src.books_api.core.validation import (
    NEW_BOOK_SCHEMA,
    UPDATE_BOOK_SCHEMA,
    ensure_valid,
)
from src.books_api.entities.book import Book, BookRepository

router = APIRouter(prefix="/books", tags=["books"])


class BookResponse(BaseModel):
    book: Book


class BookListResponse(BaseModel):
    books: list[Book]


class MessageResponse(BaseModel):
    message: str


@router.get("", response_model=BookListResponse)
def list_books(
    request: Request,
    session: Session = Depends(get_db_session),
) -> BookListResponse:
    """List all books, optionally filtered by exact field values."""
    repository = BookRepository(session)
    books = repository.list_all(dict(request.query_params))
    return BookListResponse(books=books)


@router.get("/{isbn}", response_model=BookResponse)
def get_book(
    isbn: str,
    session: Session = Depends(get_db_session),
) -> BookResponse:
    """Get a book by ISBN."""
    repository = BookRepository(session)
    return BookResponse(book=repository.find_one(isbn))


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: Any = Body(default=None),
    session: Session = Depends(get_db_session),
) -> BookResponse:
    """Create a new book."""
    data = ensure_valid(payload, NEW_BOOK_SCHEMA)
    repository = BookRepository(session)
    try:
        book = repository.create(Book(**data))
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError(
            f"A book with isbn '{data['isbn']}' already exists"
        ) from exc
    return BookResponse(book=book)


@router.put("/{isbn}", response_model=BookResponse)
def update_book(
    isbn: str,
    payload: Any = Body(default=None),
    session: Session = Depends(get_db_session),
) -> BookResponse:
    """Update every field of a book except its ISBN."""
    logger.debug("Update requested for book {}", isbn)
    if isinstance(payload, dict) and "isbn" in payload:
        raise ValidationError("isbn: updating the isbn of a book is not allowed")

    data = ensure_valid(payload, UPDATE_BOOK_SCHEMA)
    repository = BookRepository(session)
    book = repository.update(isbn, data)
    session.commit()
    return BookResponse(book=book)


@router.delete("/{isbn}", response_model=MessageResponse)
def delete_book(
    isbn: str,
    session: Session = Depends(get_db_session),
) -> MessageResponse:
    """Delete a book."""
    repository = BookRepository(session)
    repository.remove(isbn)
    session.commit()
    return MessageResponse(message="Book deleted")
