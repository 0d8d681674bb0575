# ABOUTME: Converts between the BookMetadata dataclass and SQLite rows.
# ABOUTME: Authors and categories live in link tables and are attached to records after loading.

from dataclasses import dataclass
from typing import Any

from bookcafe.metadata.types import BookMetadata

# Columns of the books table that callers may set directly.
BOOK_COLUMNS = ("title", "isbn", "description", "price")


@dataclass
class BookRecord:
    """A cataloged book: BookMetadata plus database-specific fields."""

    id: int
    metadata: BookMetadata
    date_added: str
    date_modified: str


def metadata_to_row(metadata: BookMetadata) -> dict[str, Any]:
    """Convert a BookMetadata instance to a dict suitable for INSERT.

    Authors and categories are excluded; they are stored in link tables.
    """
    return {
        "title": metadata.title,
        "isbn": metadata.isbn or None,
        "description": metadata.description,
        "price": metadata.price,
    }


def row_to_record(
    row: Any,
    authors: list[str] | None = None,
    categories: list[str] | None = None,
) -> BookRecord:
    """Convert a books row (dict-like) plus its linked names to a BookRecord."""
    return BookRecord(
        id=row["id"],
        metadata=BookMetadata(
            title=row["title"],
            authors=list(authors or []),
            categories=list(categories or []),
            isbn=row["isbn"],
            description=row["description"],
            price=row["price"],
        ),
        date_added=row["date_added"],
        date_modified=row["date_modified"],
    )
