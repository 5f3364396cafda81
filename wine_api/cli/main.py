"""Wine API CLI using Typer."""

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from wine_api.core.errors import WineApiError
from wine_api.core.schema import FilterCriteria, WineRecord

# Load .env file from current directory or project root
_env_paths = [
    Path.cwd() / ".env",
    Path(__file__).parent.parent.parent / ".env",
]
for _env_path in _env_paths:
    if _env_path.exists():
        load_dotenv(_env_path)
        break

console = Console()
app = typer.Typer(
    name="wine-api",
    help="Wine API - read-only query service for a catalog of rated wines",
    add_completion=False,
)


def _configure_logging() -> None:
    """Configure root logging from the LOG_LEVEL environment variable."""
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _get_query_engine():
    """Build a query engine over the configured database."""
    from wine_api.db.engine import get_session_factory
    from wine_api.db.store import SqlWineStore
    from wine_api.services.query_engine import WineQueryEngine

    return WineQueryEngine(SqlWineStore(get_session_factory()))


def _format_rating(rating: float | None) -> str:
    return "-" if rating is None else f"{rating:g}"


def _print_wines(wines: list[WineRecord], title: str) -> None:
    """Render wine records as a table."""
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Region")
    table.add_column("Variety")
    table.add_column("Rating", justify="right")
    table.add_column("Notes")

    for wine in wines:
        table.add_row(
            str(wine.id),
            wine.name,
            wine.region,
            wine.variety,
            _format_rating(wine.rating),
            wine.notes,
        )

    console.print(table)
    rprint(f"{len(wines)} wine(s)")


@app.command()
def run(
    host: str = typer.Option(
        "0.0.0.0", "--host", "-h", envvar="WINE_API_HOST", help="Host to bind to"
    ),
    port: int = typer.Option(
        3000, "--port", "-p", envvar="WINE_API_PORT", help="Port to bind to"
    ),
    reload: bool = typer.Option(
        False, "--reload", "-r", help="Enable auto-reload for development"
    ),
) -> None:
    """Start the Wine API web server."""
    import uvicorn

    _configure_logging()
    typer.echo(f"Wine API server running on http://{host}:{port}")
    typer.echo("Press Ctrl+C to stop the server")
    typer.echo("")

    uvicorn.run(
        "wine_api.web.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=os.environ.get("LOG_LEVEL", "info").lower(),
    )


@app.command()
def init_db() -> None:
    """Initialize the database (create the wine_ratings table)."""
    from wine_api.db.engine import init_db as db_init

    typer.echo("Initializing database...")
    db_init()
    typer.echo("Database initialized successfully!")


@app.command()
def version() -> None:
    """Show the Wine API version."""
    typer.echo("Wine API v0.1.0")


@app.command()
def check_config() -> None:
    """Check the current configuration status."""
    typer.echo("Wine API Configuration")
    typer.echo("=" * 40)

    env_found = False
    for _env_path in _env_paths:
        if _env_path.exists():
            typer.echo(f"  .env file: {_env_path}")
            env_found = True
            break
    if not env_found:
        typer.echo("  .env file: Not found")

    from wine_api.db.engine import get_database_url

    typer.echo(f"  Database: {get_database_url()}")
    typer.echo(f"  Log level: {os.environ.get('LOG_LEVEL', 'INFO')}")


@app.command()
def wines(
    region: Optional[str] = typer.Option(None, "--region", help="Exact region to match"),
    variety: Optional[str] = typer.Option(None, "--variety", help="Exact variety to match"),
    min_rating: Optional[float] = typer.Option(None, "--min-rating", help="Minimum rating"),
    max_rating: Optional[float] = typer.Option(None, "--max-rating", help="Maximum rating"),
) -> None:
    """List wines, optionally filtered."""
    try:
        criteria = FilterCriteria(
            region=region,
            variety=variety,
            min_rating=min_rating,
            max_rating=max_rating,
        )
    except ValidationError:
        rprint("[red]Error:[/red] Rating bounds must be finite numbers")
        raise typer.Exit(1)

    try:
        results = _get_query_engine().list_wines(criteria)
    except WineApiError as e:
        rprint(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    _print_wines(results, "Wines")


@app.command()
def search(
    query: str = typer.Argument(..., help="Keyword to find in names and notes"),
) -> None:
    """Search wine names and notes for a keyword."""
    try:
        results = _get_query_engine().search_wines(query)
    except WineApiError as e:
        rprint(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    _print_wines(results, f"Wines matching '{query.strip()}'")


@app.command()
def regions() -> None:
    """Show the number of wines per region."""
    try:
        counts = _get_query_engine().region_counts()
    except WineApiError as e:
        rprint(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    table = Table(title="Regions")
    table.add_column("Region")
    table.add_column("Wines", justify="right")
    for region, count in sorted(counts.items()):
        table.add_row(region or "(none)", str(count))
    console.print(table)


@app.command()
def varieties() -> None:
    """Show the number of wines and average rating per variety."""
    try:
        stats = _get_query_engine().variety_stats()
    except WineApiError as e:
        rprint(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    table = Table(title="Varieties")
    table.add_column("Variety")
    table.add_column("Wines", justify="right")
    table.add_column("Avg rating", justify="right")
    for variety, entry in sorted(stats.items()):
        average = "-" if entry.average_rating is None else f"{entry.average_rating:.2f}"
        table.add_row(variety or "(none)", str(entry.count), average)
    console.print(table)


if __name__ == "__main__":
    app()
