# ABOUTME: Metadata package for the descriptive fields of catalog books.
# ABOUTME: Exports the BookMetadata dataclass and ISBN helpers used throughout bookcafe.

from bookcafe.metadata.isbn import is_isbn_like, normalize_isbn
from bookcafe.metadata.types import BookMetadata

__all__ = [
    "BookMetadata",
    "is_isbn_like",
    "normalize_isbn",
]
