# ABOUTME: Public API for the bookcafe library database layer.
# ABOUTME: Exports connection management, catalog operations, the SQLite search backend, and data types.

from bookcafe.db.catalog import DuplicateBookError, LibraryCatalog
from bookcafe.db.connection import DEFAULT_DB_PATH, open_library
from bookcafe.db.mapping import BookRecord
from bookcafe.db.search_backend import SqliteSearchBackend

__all__ = [
    "DEFAULT_DB_PATH",
    "BookRecord",
    "DuplicateBookError",
    "LibraryCatalog",
    "SqliteSearchBackend",
    "open_library",
]
