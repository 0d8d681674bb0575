# ABOUTME: The `bookcafe add` command for cataloging a single book.
# ABOUTME: Stores title, ISBN, authors, categories, description, and price in the library DB.

from pathlib import Path

import click
from rich.console import Console

from bookcafe.cli.options import db_option
from bookcafe.db.catalog import DuplicateBookError, LibraryCatalog
from bookcafe.db.connection import DEFAULT_DB_PATH, open_library
from bookcafe.metadata.types import BookMetadata

console = Console()


@click.command("add")
@click.argument("title")
@click.option("--isbn", default=None, help="ISBN-10 or ISBN-13, with or without dashes.")
@click.option(
    "-a",
    "--author",
    "authors",
    multiple=True,
    help="Author name. Repeat for several authors.",
)
@click.option(
    "-c",
    "--category",
    "categories",
    multiple=True,
    help="Category name. Repeat for several categories.",
)
@click.option("--description", default=None, help="Free-text description.")
@click.option("--price", type=float, default=None, help="Price of the book.")
@db_option
def add(
    title: str,
    isbn: str | None,
    authors: tuple[str, ...],
    categories: tuple[str, ...],
    description: str | None,
    price: float | None,
    db_path: Path | None,
) -> None:
    """Add a book to the library catalog."""
    if not title.strip():
        console.print("[red]Title must not be empty.[/red]")
        raise SystemExit(1)

    metadata = BookMetadata(
        title=title.strip(),
        authors=list(authors),
        categories=list(categories),
        isbn=isbn,
        description=description,
        price=price,
    )

    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        try:
            book_id = catalog.add_book(metadata)
        except DuplicateBookError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(f"Added [bold]{metadata.title}[/bold] as book {book_id}.")
