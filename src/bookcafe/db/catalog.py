# ABOUTME: CRUD operations for the bookcafe library catalog.
# ABOUTME: Add, query, update, and delete books along with their authors and categories.

import logging
import sqlite3
from collections.abc import Iterable, Sequence

from bookcafe.db.mapping import BOOK_COLUMNS, BookRecord, metadata_to_row, row_to_record
from bookcafe.db.schema import SEARCH_INDEX_DDL, SEARCH_INDEX_REBUILD, SEARCH_INDEX_REFRESH_AUTHORS
from bookcafe.metadata.isbn import normalize_isbn
from bookcafe.metadata.types import BookMetadata

logger = logging.getLogger(__name__)

# Stay well below SQLite's host parameter limit when expanding IN (...) lists.
_ID_CHUNK_SIZE = 500

_AUTHORS_FOR_BOOKS = (
    "SELECT ba.book_id, a.name FROM book_authors ba "
    "JOIN authors a ON a.id = ba.author_id "
    "WHERE ba.book_id IN ({placeholders}) "
    "ORDER BY ba.book_id, ba.position"
)

_CATEGORIES_FOR_BOOKS = (
    "SELECT bc.book_id, c.name FROM book_categories bc "
    "JOIN categories c ON c.id = bc.category_id "
    "WHERE bc.book_id IN ({placeholders}) "
    "ORDER BY bc.book_id, c.name"
)


class DuplicateBookError(Exception):
    """Raised when attempting to add a book whose ISBN is already cataloged."""


class LibraryCatalog:
    """Wraps a sqlite3 connection and provides typed CRUD for the catalog tables."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @property
    def connection(self) -> sqlite3.Connection:
        """The underlying connection, for building a search backend on the same database."""
        return self._conn

    def add_book(self, metadata: BookMetadata) -> int:
        """Add a book, its authors, and its categories to the catalog.

        Args:
            metadata: The book's descriptive fields.

        Returns:
            The row ID of the inserted book.

        Raises:
            DuplicateBookError: If a book with the same ISBN (ignoring dashes
                and spaces) already exists.
        """
        if metadata.isbn and self.get_by_isbn(metadata.isbn) is not None:
            raise DuplicateBookError(f"Book with ISBN {metadata.isbn} already exists")

        row = metadata_to_row(metadata)
        columns = ", ".join(row.keys())
        placeholders = ", ".join("?" for _ in row)
        values = list(row.values())

        try:
            cursor = self._conn.execute(
                f"INSERT INTO books ({columns}) VALUES ({placeholders})",
                values,
            )
            book_id: int = cursor.lastrowid  # type: ignore[assignment]
            self._link_authors(book_id, metadata.authors)
            self._link_categories(book_id, metadata.categories)
            self._conn.commit()
        except sqlite3.IntegrityError as exc:
            self._conn.rollback()
            if "UNIQUE constraint failed: books.isbn" in str(exc):
                raise DuplicateBookError(f"Book with ISBN {metadata.isbn} already exists") from exc
            raise

        return book_id

    def get_by_id(self, book_id: int) -> BookRecord | None:
        """Retrieve a book by its row ID."""
        cursor = self._conn.execute("SELECT * FROM books WHERE id = ?", (book_id,))
        row = cursor.fetchone()
        return self._to_records([row])[0] if row else None

    def get_by_isbn(self, isbn: str) -> BookRecord | None:
        """Retrieve a book by its ISBN; dashes and spaces are ignored on both sides."""
        cursor = self._conn.execute(
            "SELECT * FROM books "
            "WHERE lower(replace(replace(isbn, '-', ''), ' ', '')) = ?",
            (normalize_isbn(isbn),),
        )
        row = cursor.fetchone()
        return self._to_records([row])[0] if row else None

    def get_many(self, book_ids: Sequence[int]) -> list[BookRecord]:
        """Retrieve several books, in the order of ``book_ids``.

        Ids that do not exist are skipped. Used to resolve ranked search
        results into records without disturbing their order.
        """
        rows: dict[int, sqlite3.Row] = {}
        for chunk in _chunks(list(dict.fromkeys(book_ids))):
            placeholders = ", ".join("?" for _ in chunk)
            cursor = self._conn.execute(
                f"SELECT * FROM books WHERE id IN ({placeholders})", chunk
            )
            rows.update((row["id"], row) for row in cursor.fetchall())
        return self._to_records([rows[book_id] for book_id in book_ids if book_id in rows])

    def list_all(self) -> list[BookRecord]:
        """Return all books in the catalog, ordered by title."""
        cursor = self._conn.execute("SELECT * FROM books ORDER BY title, id")
        return self._to_records(cursor.fetchall())

    def list_by_category(self, category: str) -> list[BookRecord]:
        """Get all books in a category, ordered by title.

        Raises:
            ValueError: If the category doesn't exist.
        """
        cursor = self._conn.execute("SELECT id FROM categories WHERE name = ?", (category,))
        if cursor.fetchone() is None:
            raise ValueError(f"Category '{category}' not found")

        cursor = self._conn.execute(
            "SELECT b.* FROM books b "
            "JOIN book_categories bc ON b.id = bc.book_id "
            "JOIN categories c ON bc.category_id = c.id "
            "WHERE c.name = ? "
            "ORDER BY b.title, b.id",
            (category,),
        )
        return self._to_records(cursor.fetchall())

    def list_categories(self) -> list[tuple[str, int]]:
        """List all categories with their book counts, alphabetically sorted."""
        cursor = self._conn.execute(
            "SELECT c.name, COUNT(bc.book_id) AS book_count "
            "FROM categories c "
            "JOIN book_categories bc ON c.id = bc.category_id "
            "GROUP BY c.id "
            "ORDER BY c.name"
        )
        return [(row[0], row[1]) for row in cursor.fetchall()]

    def update_book(self, book_id: int, **fields: str | float | list[str] | None) -> None:
        """Update one or more fields on a cataloged book.

        Accepts ``title``, ``isbn``, ``description``, and ``price``, plus
        ``authors`` and ``categories`` as lists of names which replace the
        current links.

        Raises:
            ValueError: If the book_id does not exist or a field is unknown.
            DuplicateBookError: If another book already has the new ISBN,
                ignoring dashes and spaces.
        """
        if not fields:
            return

        unknown = set(fields) - set(BOOK_COLUMNS) - {"authors", "categories"}
        if unknown:
            raise ValueError(f"Unknown book field(s): {', '.join(sorted(unknown))}")

        isbn = fields.get("isbn")
        if isbn:
            existing = self.get_by_isbn(str(isbn))
            if existing is not None and existing.id != book_id:
                raise DuplicateBookError(f"Book with ISBN {isbn} already exists")

        authors = fields.pop("authors", None)
        categories = fields.pop("categories", None)

        set_clause = ", ".join(f"{k} = ?" for k in fields)
        if set_clause:
            set_clause += ", "
        set_clause += "date_modified = strftime('%Y-%m-%dT%H:%M:%S', 'now')"
        values = [*list(fields.values()), book_id]

        try:
            cursor = self._conn.execute(
                f"UPDATE books SET {set_clause} WHERE id = ?",
                values,
            )
        except sqlite3.IntegrityError as exc:
            self._conn.rollback()
            if "UNIQUE constraint failed: books.isbn" in str(exc):
                raise DuplicateBookError(f"Book with ISBN {fields['isbn']} already exists") from exc
            raise
        if cursor.rowcount == 0:
            self._conn.rollback()
            raise ValueError(f"Book with id {book_id} not found")

        if authors is not None:
            self._conn.execute("DELETE FROM book_authors WHERE book_id = ?", (book_id,))
            self._link_authors(book_id, authors)  # type: ignore[arg-type]
        if categories is not None:
            self._conn.execute("DELETE FROM book_categories WHERE book_id = ?", (book_id,))
            self._link_categories(book_id, categories)  # type: ignore[arg-type]
        self._conn.commit()

    def delete_book(self, book_id: int) -> None:
        """Delete a book from the catalog.

        Author and category links go with it; the author and category rows
        themselves are kept.

        Raises:
            ValueError: If the book_id does not exist.
        """
        cursor = self._conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"Book with id {book_id} not found")

    # --- Author operations ---

    def set_authors(self, book_id: int, names: Iterable[str]) -> None:
        """Replace a book's authors, keeping the given order.

        Raises:
            ValueError: If the book_id does not exist.
        """
        self.update_book(book_id, authors=list(names))

    def add_author(self, book_id: int, name: str) -> None:
        """Attach an author to a book. Creates the author if needed. Idempotent.

        Raises:
            ValueError: If the book_id does not exist.
        """
        if self.get_by_id(book_id) is None:
            raise ValueError(f"Book with id {book_id} not found")

        cursor = self._conn.execute(
            "SELECT COALESCE(MAX(position), -1) + 1 FROM book_authors WHERE book_id = ?",
            (book_id,),
        )
        self._link_authors(book_id, [name], start=cursor.fetchone()[0])
        self._conn.commit()

    def remove_author(self, book_id: int, name: str) -> None:
        """Detach an author from a book.

        Raises:
            ValueError: If the author doesn't exist or isn't linked to the book.
        """
        cursor = self._conn.execute("SELECT id FROM authors WHERE name = ?", (name,))
        author_row = cursor.fetchone()
        if author_row is None:
            raise ValueError(f"Author '{name}' not found")

        cursor = self._conn.execute(
            "DELETE FROM book_authors WHERE book_id = ? AND author_id = ?",
            (book_id, author_row[0]),
        )
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"Book {book_id} has no author '{name}'")

    def rename_author(self, old_name: str, new_name: str) -> None:
        """Rename an author everywhere and refresh the search index of their books.

        Raises:
            ValueError: If the author doesn't exist or the new name is taken.
        """
        try:
            cursor = self._conn.execute(
                "UPDATE authors SET name = ? WHERE name = ?", (new_name, old_name)
            )
        except sqlite3.IntegrityError as exc:
            self._conn.rollback()
            raise ValueError(f"Author '{new_name}' already exists") from exc

        if cursor.rowcount == 0:
            self._conn.rollback()
            raise ValueError(f"Author '{old_name}' not found")

        cursor = self._conn.execute(
            "SELECT ba.book_id FROM book_authors ba "
            "JOIN authors a ON a.id = ba.author_id WHERE a.name = ?",
            (new_name,),
        )
        for (book_id,) in cursor.fetchall():
            self._conn.execute(SEARCH_INDEX_REFRESH_AUTHORS, {"book_id": book_id})
        self._conn.commit()

    # --- Category operations ---

    def set_categories(self, book_id: int, names: Iterable[str]) -> None:
        """Replace a book's categories.

        Raises:
            ValueError: If the book_id does not exist.
        """
        self.update_book(book_id, categories=list(names))

    # --- Search index ---

    def rebuild_search_index(self) -> int:
        """Recreate the full-text index from the live tables.

        Repairs an index that drifted out of sync or was dropped entirely.

        Returns:
            The number of books indexed.
        """
        self._conn.executescript(SEARCH_INDEX_DDL + SEARCH_INDEX_REBUILD)
        cursor = self._conn.execute("SELECT COUNT(*) FROM books_fts")
        count: int = cursor.fetchone()[0]
        logger.info("Rebuilt search index for %d book(s)", count)
        return count

    # --- Internals ---

    def _link_authors(self, book_id: int, names: Iterable[str], *, start: int = 0) -> None:
        for position, name in enumerate(_clean_names(names), start=start):
            self._conn.execute("INSERT OR IGNORE INTO authors (name) VALUES (?)", (name,))
            self._conn.execute(
                "INSERT OR IGNORE INTO book_authors (book_id, author_id, position) "
                "SELECT ?, id, ? FROM authors WHERE name = ?",
                (book_id, position, name),
            )

    def _link_categories(self, book_id: int, names: Iterable[str]) -> None:
        for name in _clean_names(names):
            self._conn.execute("INSERT OR IGNORE INTO categories (name) VALUES (?)", (name,))
            self._conn.execute(
                "INSERT OR IGNORE INTO book_categories (book_id, category_id) "
                "SELECT ?, id FROM categories WHERE name = ?",
                (book_id, name),
            )

    def _to_records(self, rows: Sequence[sqlite3.Row]) -> list[BookRecord]:
        """Build BookRecords, loading authors and categories in bulk."""
        ids = [row["id"] for row in rows]
        authors = self._linked_names(_AUTHORS_FOR_BOOKS, ids)
        categories = self._linked_names(_CATEGORIES_FOR_BOOKS, ids)
        return [
            row_to_record(row, authors.get(row["id"]), categories.get(row["id"]))
            for row in rows
        ]

    def _linked_names(self, sql: str, book_ids: list[int]) -> dict[int, list[str]]:
        names: dict[int, list[str]] = {}
        for chunk in _chunks(book_ids):
            placeholders = ", ".join("?" for _ in chunk)
            cursor = self._conn.execute(sql.format(placeholders=placeholders), chunk)
            for book_id, name in cursor.fetchall():
                names.setdefault(book_id, []).append(name)
        return names


def _clean_names(names: Iterable[str]) -> list[str]:
    """Strip whitespace and drop blanks."""
    return [name.strip() for name in names if name and name.strip()]


def _chunks(items: list[int]) -> list[list[int]]:
    return [items[i : i + _ID_CHUNK_SIZE] for i in range(0, len(items), _ID_CHUNK_SIZE)]
