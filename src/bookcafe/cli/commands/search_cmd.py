# ABOUTME: The `bookcafe search` command for ranked search of the catalog.
# ABOUTME: Searches title, author, ISBN, or all three, and prints the best matches first.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bookcafe.cli.options import db_option
from bookcafe.db.catalog import LibraryCatalog
from bookcafe.db.connection import DEFAULT_DB_PATH, open_library
from bookcafe.db.search_backend import SqliteSearchBackend
from bookcafe.search.engine import BookSearch
from bookcafe.search.normalizer import clean
from bookcafe.search.strategies import SearchType

console = Console()

# Queries with fewer searchable characters than this are answered with no results.
MIN_QUERY_LENGTH = 2

_TYPE_NAMES = ", ".join(t.value for t in SearchType)


@click.command("search")
@click.argument("query")
@click.option(
    "-t",
    "--type",
    "search_type",
    default=SearchType.ALL.value,
    show_default=True,
    help=f"Field to search: {_TYPE_NAMES}. Unknown values search all fields.",
)
@click.option(
    "--min-length",
    type=click.IntRange(min=0),
    default=MIN_QUERY_LENGTH,
    show_default=True,
    help="Minimum number of searchable characters in the query.",
)
@click.option(
    "-n",
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Show at most this many results.",
)
@db_option
def search(
    query: str,
    search_type: str,
    min_length: int,
    limit: int | None,
    db_path: Path | None,
) -> None:
    """Search the library catalog by title, author, or ISBN."""
    if len(clean(query).replace(" ", "")) < min_length:
        console.print("[yellow]No results found.[/yellow]")
        return

    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        engine = BookSearch(SqliteSearchBackend(conn))
        book_ids = engine.search(query, search_type)
        if limit is not None:
            book_ids = book_ids[:limit]
        results = LibraryCatalog(conn).get_many(book_ids)
    finally:
        conn.close()

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold", no_wrap=True)
    table.add_column("Author")
    table.add_column("ISBN")

    for record in results:
        table.add_row(
            str(record.id),
            record.metadata.title,
            record.metadata.author or "[dim]unknown[/dim]",
            record.metadata.isbn or "",
        )

    console.print(table)
    console.print(f"\n[dim]{len(results)} result(s)[/dim]")
