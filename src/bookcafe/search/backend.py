# ABOUTME: SearchBackend protocol defining what the search engine needs from storage.
# ABOUTME: Any store offering prefix text search and string predicates can implement it.

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from bookcafe.search.conditions import FuzzyCondition
from bookcafe.search.expression import Field, PrefixQuery


@runtime_checkable
class SearchBackend(Protocol):
    """Protocol for storage engines the search strategies run against.

    ``text_search`` is the tokenized prefix-match capability and its relevance
    score; it returns an empty mapping when the index is unavailable.
    ``match_tiers`` evaluates fuzzy predicates against the live fields and
    must always work, independent of index freshness.
    """

    def text_search(self, query: PrefixQuery) -> dict[int, float]: ...

    def match_tiers(
        self, conditions: Mapping[Field, Sequence[FuzzyCondition]]
    ) -> dict[int, int]: ...
