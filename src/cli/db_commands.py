"""Database management CLI commands."""

import typer
from rich.panel import Panel
from rich.table import Table

from src.books_api.core.services import DbManageService, DbSessionService
from src.books_api.entities.book import BookRepository
from src.books_api.runtime.init_db import init_db

from .utils import console, resolve_database_config

db_app = typer.Typer(help="🗄️  Database commands")

DatabaseUrlOption = typer.Option(
    None, "--database-url", help="Override the configured database URL"
)


@db_app.command(name="init")
def init(database_url: str | None = DatabaseUrlOption) -> None:
    """Create the books table if it does not exist."""
    init_db(resolve_database_config(database_url))
    console.print("[green]✅ Database initialized[/green]")


@db_app.command(name="drop")
def drop_db(
    database_url: str | None = DatabaseUrlOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Drop the books table and every record in it."""
    if not yes:
        typer.confirm("This deletes every book. Continue?", abort=True)

    database_service = DbSessionService(resolve_database_config(database_url))
    try:
        DbManageService(database_service.engine).drop_all()
    finally:
        database_service.dispose()
    console.print("[yellow]🗑️  Database tables dropped[/yellow]")


@db_app.command(name="books")
def list_books(
    database_url: str | None = DatabaseUrlOption,
    author: str | None = typer.Option(None, help="Only show books by this author"),
) -> None:
    """Print the stored books as a table."""
    filters = {"author": author} if author else {}
    database_service = DbSessionService(resolve_database_config(database_url))
    try:
        with database_service.session_scope() as session:
            books = BookRepository(session).list_all(filters)
    finally:
        database_service.dispose()

    if not books:
        console.print(Panel.fit("No books found", border_style="yellow"))
        return

    table = Table(title=f"Books ({len(books)})")
    for column in ("ISBN", "Title", "Author", "Year", "Pages"):
        table.add_column(column)
    for book in books:
        table.add_row(book.isbn, book.title, book.author, str(book.year), str(book.pages))
    console.print(table)
