"""Entity: Book."""

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """Book entity representing one catalogue record.

    Books are addressed by their ISBN, which is supplied on creation and
    never changes afterwards.
    """

    model_config = ConfigDict(from_attributes=True)

    isbn: str = Field(description="ISBN, the natural key of the record")
    amazon_url: str = Field(description="Product page URL")
    author: str = Field(description="Author name")
    language: str = Field(description="Language the book is written in")
    pages: int = Field(description="Number of pages")
    publisher: str = Field(description="Publisher name")
    title: str = Field(description="Title")
    year: int = Field(description="Year of publication")
