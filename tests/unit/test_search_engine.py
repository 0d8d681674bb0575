# ABOUTME: Unit tests for the BookSearch facade.
# ABOUTME: Validates type dispatch, the unknown-type fallback, and empty-query handling.

from bookcafe.search.engine import BookSearch
from bookcafe.search.memory import MemoryBackend
from bookcafe.search.strategies import SearchType


class TestBookSearch:
    """Tests for BookSearch.search and BookSearch.candidates."""

    def test_defaults_to_all(self, memory_backend: MemoryBackend, book_ids: dict[str, int]) -> None:
        """Without a type, authors are searched too."""
        ids = BookSearch(memory_backend).search("Huxley")
        assert ids == [book_ids["Brave New World"]]

    def test_accepts_type_names(self, memory_backend: MemoryBackend) -> None:
        """A plain string selects the strategy."""
        assert BookSearch(memory_backend).search("Huxley", "title") == []

    def test_unknown_type_searches_all(self, memory_backend: MemoryBackend) -> None:
        """An unsupported type behaves exactly like 'all'."""
        engine = BookSearch(memory_backend)
        assert engine.search("Orwell", "publisher") == engine.search("Orwell", "all")
        assert engine.search("Orwell", None) == engine.search("Orwell", SearchType.ALL)

    def test_empty_query_returns_empty(self, memory_backend: MemoryBackend) -> None:
        """A blank query never lists the whole catalog."""
        engine = BookSearch(memory_backend)
        assert engine.search("") == []
        assert engine.search(None) == []

    def test_candidates_carry_tiers(
        self, memory_backend: MemoryBackend, book_ids: dict[str, int]
    ) -> None:
        """candidates() exposes how each book matched."""
        candidates = BookSearch(memory_backend).candidates("1984", SearchType.TITLE)
        assert candidates[0].book_id == book_ids["1984"]
        assert candidates[0].tier == 1
        assert candidates[0].score is not None

    def test_search_returns_ids_in_candidate_order(self, memory_backend: MemoryBackend) -> None:
        """search() is the id projection of candidates()."""
        engine = BookSearch(memory_backend)
        expected = [c.book_id for c in engine.candidates("Great", SearchType.ALL)]
        assert engine.search("Great") == expected
