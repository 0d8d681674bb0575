# ABOUTME: The `bookcafe reindex` command for rebuilding the full-text search index.
# ABOUTME: Recreates books_fts from titles, ISBNs, and author names; repairs a dropped index.

from pathlib import Path

import click
from rich.console import Console

from bookcafe.cli.options import db_option
from bookcafe.db.catalog import LibraryCatalog
from bookcafe.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("reindex")
@db_option
def reindex(db_path: Path | None) -> None:
    """Rebuild the search index for all books."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        count = LibraryCatalog(conn).rebuild_search_index()
    finally:
        conn.close()

    console.print(f"Search index rebuilt for [bold]{count}[/bold] book(s).")
