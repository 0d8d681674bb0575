# ABOUTME: The `bookcafe ls` command for listing cataloged books.
# ABOUTME: Displays a Rich table of all books, optionally filtered by category.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bookcafe.cli.options import db_option
from bookcafe.db.catalog import LibraryCatalog
from bookcafe.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("ls")
@db_option
@click.option(
    "--category",
    "category_filter",
    default=None,
    help="Filter by category name.",
)
def ls(db_path: Path | None, category_filter: str | None) -> None:
    """List all books in the library catalog."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        if category_filter:
            try:
                records = catalog.list_by_category(category_filter)
            except ValueError as exc:
                console.print(f"[red]Category '{category_filter}' not found.[/red]")
                raise SystemExit(1) from exc
        else:
            records = catalog.list_all()
    finally:
        conn.close()

    if not records:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold", no_wrap=True)
    table.add_column("Author")
    table.add_column("ISBN")
    table.add_column("Category")

    for record in records:
        table.add_row(
            str(record.id),
            record.metadata.title,
            record.metadata.author or "[dim]unknown[/dim]",
            record.metadata.isbn or "",
            record.metadata.category,
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} book(s)[/dim]")
