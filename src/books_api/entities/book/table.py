"""Book database table model."""

from sqlmodel import Field, SQLModel


class BookTable(SQLModel, table=True):
    """Database persistence model for books.

    This represents how the Book entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "books"

    isbn: str = Field(primary_key=True)
    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str
    year: int
