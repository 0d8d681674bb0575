# ABOUTME: The `bookcafe info` command for displaying a single book's details.
# ABOUTME: Shows all cataloged fields for one book by ID.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bookcafe.cli.options import db_option
from bookcafe.db.catalog import LibraryCatalog
from bookcafe.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("info")
@click.argument("book_id", type=int)
@db_option
def info(book_id: int, db_path: Path | None) -> None:
    """Show detailed information for a book by ID."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        record = LibraryCatalog(conn).get_by_id(book_id)
    finally:
        conn.close()

    if record is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)

    meta = record.metadata
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ID", str(record.id))
    table.add_row("Title", meta.title)
    table.add_row("Author", meta.author or "unknown")
    if meta.isbn:
        table.add_row("ISBN", meta.isbn)
    if meta.categories:
        table.add_row("Category", meta.category)
    if meta.price is not None:
        table.add_row("Price", f"{meta.price:.2f}")
    if meta.description:
        table.add_row("Description", meta.description)
    table.add_row("Added", record.date_added)
    table.add_row("Modified", record.date_modified)

    console.print(table)
