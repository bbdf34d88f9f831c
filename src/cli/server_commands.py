"""Server CLI commands."""

import typer
from rich.panel import Panel

from .utils import console


def serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind the server to"),
    port: int = typer.Option(8000, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """
    🚀 Start the Books API server.

    Request logging is handled by the application, so uvicorn's access log is off.
    """
    import uvicorn

    console.print(
        Panel.fit(
            f"[bold green]Starting Books API on {host}:{port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(
        "src.books_api.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,
    )
