# ABOUTME: Unit tests for the field search strategies and search planning.
# ABOUTME: Runs the title, author, ISBN, and all-fields strategies against the in-memory backend.

import pytest

from bookcafe.search.conditions import PRIORITY_EXACT, PRIORITY_STARTS_WITH, PRIORITY_WORD_BOUNDARY
from bookcafe.search.expression import Field
from bookcafe.search.memory import MemoryBackend
from bookcafe.search.strategies import (
    SearchType,
    plan_search,
    search_all,
    search_by_author,
    search_by_isbn,
    search_by_title,
)


class TestSearchTypeParse:
    """Tests for SearchType.parse()."""

    def test_known_values(self) -> None:
        """Recognized names resolve regardless of case and padding."""
        assert SearchType.parse("title") is SearchType.TITLE
        assert SearchType.parse(" ISBN ") is SearchType.ISBN
        assert SearchType.parse("Author") is SearchType.AUTHOR

    @pytest.mark.parametrize("value", ["publisher", "", None])
    def test_unknown_falls_back_to_all(self, value: str | None) -> None:
        """Anything unrecognized searches all fields."""
        assert SearchType.parse(value) is SearchType.ALL

    def test_enum_passes_through(self) -> None:
        """An existing SearchType is returned unchanged."""
        assert SearchType.parse(SearchType.TITLE) is SearchType.TITLE


class TestPlanSearch:
    """Tests for plan_search()."""

    def test_empty_query_has_no_plan(self) -> None:
        """Queries without terms are never planned."""
        assert plan_search("  !! ", SearchType.ALL) is None

    def test_all_plans_every_field(self) -> None:
        """The all-fields plan has fuzzy conditions for title, ISBN, and author."""
        plan = plan_search("orwell", SearchType.ALL)
        assert plan is not None
        assert set(plan.conditions) == {Field.TITLE, Field.ISBN, Field.AUTHOR}
        assert plan.prefix_query is not None
        assert plan.prefix_query.columns == (Field.TITLE, Field.AUTHOR)

    def test_isbn_plan_skips_full_text(self) -> None:
        """ISBN searches rely on the fuzzy predicates only."""
        plan = plan_search("978-0-13", SearchType.ISBN)
        assert plan is not None
        assert plan.prefix_query is None
        assert set(plan.conditions) == {Field.ISBN}

    def test_author_plan_never_touches_titles(self) -> None:
        """Author plans only look at author names."""
        plan = plan_search("Farm", SearchType.AUTHOR)
        assert plan is not None
        assert set(plan.conditions) == {Field.AUTHOR}
        assert plan.prefix_query is not None
        assert plan.prefix_query.columns == (Field.AUTHOR,)


class TestStrategies:
    """Tests for the four strategies over the sample corpus."""

    def test_title_prefix(self, memory_backend: MemoryBackend, book_ids: dict[str, int]) -> None:
        """'198' finds 1984 as a starts-with match."""
        candidates = search_by_title(memory_backend, "198")
        assert [c.book_id for c in candidates] == [book_ids["1984"]]
        assert candidates[0].tier == PRIORITY_STARTS_WITH

    def test_title_exact(self, memory_backend: MemoryBackend, book_ids: dict[str, int]) -> None:
        """A full title is an exact match."""
        candidates = search_by_title(memory_backend, "animal farm")
        assert candidates[0].book_id == book_ids["Animal Farm"]
        assert candidates[0].tier == PRIORITY_EXACT

    def test_author_word_boundary(
        self, memory_backend: MemoryBackend, book_ids: dict[str, int]
    ) -> None:
        """A surname matches at a word boundary in the author name."""
        candidates = search_by_author(memory_backend, "orwell")
        assert {c.book_id for c in candidates} == {book_ids["1984"], book_ids["Animal Farm"]}
        assert all(c.tier == PRIORITY_WORD_BOUNDARY for c in candidates)

    def test_author_ignores_titles(self, memory_backend: MemoryBackend) -> None:
        """A title word finds nothing in an author search."""
        assert search_by_author(memory_backend, "Farm") == []

    def test_isbn_contains(self, memory_backend: MemoryBackend, book_ids: dict[str, int]) -> None:
        """A digit run from the middle of an ISBN finds the book."""
        candidates = search_by_isbn(memory_backend, "468599")
        assert [c.book_id for c in candidates] == [book_ids["Clean Architecture"]]
        assert candidates[0].tier == PRIORITY_WORD_BOUNDARY

    def test_isbn_word_query_finds_nothing(self, memory_backend: MemoryBackend) -> None:
        """Words never match inside ISBNs."""
        assert search_by_isbn(memory_backend, "Gatsby") == []

    def test_all_takes_best_tier_across_fields(
        self, memory_backend: MemoryBackend, book_ids: dict[str, int]
    ) -> None:
        """An exact ISBN match is tier 1 in an all-fields search."""
        candidates = search_all(memory_backend, "9780134685991")
        assert candidates[0].book_id == book_ids["Clean Architecture"]
        assert candidates[0].tier == PRIORITY_EXACT

    def test_all_orders_by_tier(
        self, memory_backend: MemoryBackend, book_ids: dict[str, int]
    ) -> None:
        """A title starting with the query beats one containing it as a later word."""
        ids = [c.book_id for c in search_all(memory_backend, "Great")]
        assert ids == [book_ids["Great Expectations"], book_ids["The Great Gatsby"]]

    @pytest.mark.parametrize("strategy", [search_all, search_by_author, search_by_isbn, search_by_title])
    def test_empty_query(self, memory_backend: MemoryBackend, strategy) -> None:
        """Every strategy returns nothing for an empty query."""
        assert strategy(memory_backend, "   ") == []
