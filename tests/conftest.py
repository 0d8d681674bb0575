# ABOUTME: Shared pytest fixtures for bookcafe tests.
# ABOUTME: Provides a sample corpus, a populated SQLite catalog, and search engines over both backends.

from collections.abc import Iterator
from pathlib import Path

import pytest

from bookcafe.db.catalog import LibraryCatalog
from bookcafe.db.connection import open_library
from bookcafe.db.search_backend import SqliteSearchBackend
from bookcafe.metadata.types import BookMetadata
from bookcafe.search.engine import BookSearch
from bookcafe.search.memory import MemoryBackend


def _sample_books() -> list[BookMetadata]:
    return [
        BookMetadata(
            title="Cloud Atlas",
            authors=["David Mitchell"],
            categories=["Fiction"],
            isbn="978-0-375-50725-0",
        ),
        BookMetadata(
            title="The Great Gatsby",
            authors=["F. Scott Fitzgerald"],
            categories=["Fiction", "Classics"],
            isbn="9780743273565",
        ),
        BookMetadata(
            title="1984",
            authors=["George Orwell"],
            categories=["Fiction", "Classics"],
            isbn="978-0-452-28423-4",
        ),
        BookMetadata(
            title="Animal Farm",
            authors=["George Orwell"],
            categories=["Classics"],
            isbn="978-0-452-28424-1",
        ),
        BookMetadata(
            title="Brave New World",
            authors=["Aldous Huxley"],
            categories=["Fiction"],
            isbn="978-0-06-085052-4",
        ),
        BookMetadata(
            title="Clean Architecture",
            authors=["Robert C. Martin"],
            categories=["Computing"],
            isbn="978-0-13-468599-1",
            description="A craftsman's guide to software structure and design.",
            price=34.99,
        ),
        BookMetadata(
            title="Foucault's Pendulum",
            authors=["Umberto Eco"],
            categories=["Fiction"],
        ),
        BookMetadata(
            title="Great Expectations",
            authors=["Charles Dickens"],
            categories=["Classics"],
            isbn="978-0-14-143956-3",
        ),
    ]


@pytest.fixture()
def sample_books() -> list[BookMetadata]:
    """The sample corpus, in insertion order."""
    return _sample_books()


@pytest.fixture()
def book_ids(sample_books: list[BookMetadata]) -> dict[str, int]:
    """Title to id for the sample corpus; ids follow insertion order from 1."""
    return {book.title: index for index, book in enumerate(sample_books, start=1)}


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """Path to a not-yet-created library database."""
    return tmp_path / "library.db"


@pytest.fixture()
def catalog(db_path: Path) -> Iterator[LibraryCatalog]:
    """An empty catalog backed by a temporary database."""
    conn = open_library(db_path)
    yield LibraryCatalog(conn)
    conn.close()


@pytest.fixture()
def sample_catalog(
    catalog: LibraryCatalog, sample_books: list[BookMetadata]
) -> LibraryCatalog:
    """A catalog holding the sample corpus."""
    for book in sample_books:
        catalog.add_book(book)
    return catalog


@pytest.fixture()
def library_db(tmp_path: Path, sample_books: list[BookMetadata]) -> Path:
    """A closed database file holding the sample corpus, for CLI tests."""
    path = tmp_path / "cli" / "library.db"
    conn = open_library(path)
    catalog = LibraryCatalog(conn)
    for book in sample_books:
        catalog.add_book(book)
    conn.close()
    return path


@pytest.fixture()
def memory_backend(sample_books: list[BookMetadata]) -> MemoryBackend:
    """An in-memory backend over the sample corpus."""
    return MemoryBackend.from_books(dict(enumerate(sample_books, start=1)))


@pytest.fixture()
def sqlite_backend(sample_catalog: LibraryCatalog) -> SqliteSearchBackend:
    """A SQLite backend over the sample catalog."""
    return SqliteSearchBackend(sample_catalog.connection)


@pytest.fixture(params=["sqlite", "memory"])
def engine(request: pytest.FixtureRequest) -> BookSearch:
    """BookSearch over the sample corpus, once per backend."""
    if request.param == "sqlite":
        return BookSearch(request.getfixturevalue("sqlite_backend"))
    return BookSearch(request.getfixturevalue("memory_backend"))
