# ABOUTME: Core data structure describing a catalog book before it is stored.
# ABOUTME: BookMetadata is the interchange format between the CLI, the catalog, and tests.

from dataclasses import dataclass, field


@dataclass
class BookMetadata:
    """Descriptive fields for a library book.

    Only the title is required. Authors and categories are plain names; the
    catalog resolves them to shared author/category rows when the book is stored.
    """

    title: str
    authors: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    isbn: str | None = None
    description: str | None = None
    price: float | None = None

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors) if self.authors else ""

    @property
    def category(self) -> str:
        """Convenience property: joined category string for display."""
        return ", ".join(self.categories) if self.categories else ""
