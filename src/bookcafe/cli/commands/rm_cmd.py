# ABOUTME: The `bookcafe rm` command for removing a book from the catalog.
# ABOUTME: Deletes the book, its author/category links, and its search index entry.

from pathlib import Path

import click
from rich.console import Console

from bookcafe.cli.options import db_option
from bookcafe.db.catalog import LibraryCatalog
from bookcafe.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("rm")
@click.argument("book_id", type=int)
@db_option
def rm(book_id: int, db_path: Path | None) -> None:
    """Remove a book from the library catalog by ID."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        try:
            catalog.delete_book(book_id)
        except ValueError as exc:
            console.print(f"[red]Book {book_id} not found.[/red]")
            raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(f"Removed book {book_id}.")
