"""Book entity module.

This module contains all Book-related classes organized by responsibility:
- Book: Domain entity returned by the API
- BookTable: Database persistence model
- BookRepository: Data access layer
"""

from .entity import Book
from .repository import BookRepository
from .table import BookTable

__all__ = ["Book", "BookRepository", "BookTable"]
