# ABOUTME: BookSearch facade dispatching a (query, type) pair to the matching strategy.
# ABOUTME: Returns ranked book ids; the caller resolves them to full catalog records.

import logging
from collections.abc import Callable

from bookcafe.search.backend import SearchBackend
from bookcafe.search.ranking import Candidate
from bookcafe.search.strategies import (
    SearchType,
    search_all,
    search_by_author,
    search_by_isbn,
    search_by_title,
)

logger = logging.getLogger(__name__)

Strategy = Callable[[SearchBackend, "str | None"], list[Candidate]]

_STRATEGIES: dict[SearchType, Strategy] = {
    SearchType.TITLE: search_by_title,
    SearchType.AUTHOR: search_by_author,
    SearchType.ISBN: search_by_isbn,
    SearchType.ALL: search_all,
}


class BookSearch:
    """Entry point for catalog searches.

    Holds no state besides the backend, so one instance can serve any number
    of searches. No minimum query length is enforced here; that policy
    belongs to whoever accepts the raw input.
    """

    def __init__(self, backend: SearchBackend) -> None:
        self._backend = backend

    def search(
        self,
        query: str | None,
        search_type: "str | SearchType | None" = SearchType.ALL,
    ) -> list[int]:
        """Search the catalog.

        Args:
            query: Raw user input.
            search_type: "title", "isbn", "author", or "all". Anything else,
                including None, searches all fields.

        Returns:
            Book ids, best match first. Empty when the query contains nothing
            searchable; a blank query never returns the whole catalog.
        """
        resolved = SearchType.parse(search_type)
        candidates = self.candidates(query, resolved)
        logger.debug("Search %r (%s) returned %d book(s)", query, resolved.value, len(candidates))
        return [candidate.book_id for candidate in candidates]

    def candidates(self, query: str | None, search_type: SearchType) -> list[Candidate]:
        """Ranked candidates, with tiers and scores, for one search type."""
        return _STRATEGIES[search_type](self._backend, query)
