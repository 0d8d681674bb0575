# ABOUTME: Public API for the bookcafe search engine.
# ABOUTME: Exports the BookSearch facade, search types, strategies, and backend protocol.

from bookcafe.search.backend import SearchBackend
from bookcafe.search.engine import BookSearch
from bookcafe.search.memory import MemoryBackend
from bookcafe.search.normalizer import normalize
from bookcafe.search.ranking import Candidate, rank
from bookcafe.search.strategies import (
    SearchType,
    search_all,
    search_by_author,
    search_by_isbn,
    search_by_title,
)

__all__ = [
    "BookSearch",
    "Candidate",
    "MemoryBackend",
    "SearchBackend",
    "SearchType",
    "normalize",
    "rank",
    "search_all",
    "search_by_author",
    "search_by_isbn",
    "search_by_title",
]
