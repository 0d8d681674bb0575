# ABOUTME: Title, author, ISBN, and all-fields search strategies.
# ABOUTME: Each builds a SearchPlan from the query and runs it against a SearchBackend.

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from bookcafe.search.backend import SearchBackend
from bookcafe.search.conditions import FuzzyCondition, build_fuzzy_conditions
from bookcafe.search.expression import Field, PrefixQuery
from bookcafe.search.normalizer import normalize
from bookcafe.search.prefix import build_prefix_query
from bookcafe.search.ranking import Candidate, merge_candidates, order_candidates

logger = logging.getLogger(__name__)


class SearchType(str, Enum):
    """Which fields a search looks at."""

    TITLE = "title"
    ISBN = "isbn"
    AUTHOR = "author"
    ALL = "all"

    @classmethod
    def parse(cls, value: "str | SearchType | None") -> "SearchType":
        """Resolve a user-supplied type, falling back to ALL when unrecognized."""
        if isinstance(value, SearchType):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            logger.debug("Unsupported search type %r, searching all fields", value)
            return cls.ALL


# Fields checked by the fuzzy predicates. Description is never searched.
_FUZZY_FIELDS: dict[SearchType, tuple[Field, ...]] = {
    SearchType.TITLE: (Field.TITLE,),
    SearchType.AUTHOR: (Field.AUTHOR,),
    SearchType.ISBN: (Field.ISBN,),
    SearchType.ALL: (Field.TITLE, Field.ISBN, Field.AUTHOR),
}

# Index columns for the full-text part. ISBNs are structured data and are
# matched by the fuzzy predicates alone.
_FULL_TEXT_COLUMNS: dict[SearchType, tuple[Field, ...]] = {
    SearchType.TITLE: (Field.TITLE,),
    SearchType.AUTHOR: (Field.AUTHOR,),
    SearchType.ISBN: (),
    SearchType.ALL: (Field.TITLE, Field.AUTHOR),
}


@dataclass(frozen=True)
class SearchPlan:
    """Everything a backend needs to find the candidates of one search."""

    search_type: SearchType
    prefix_query: PrefixQuery | None
    conditions: Mapping[Field, tuple[FuzzyCondition, ...]] = field(default_factory=dict)


def plan_search(query: str | None, search_type: SearchType) -> SearchPlan | None:
    """Build the plan for a query, or None when the query has no search terms."""
    tokens = normalize(query)
    if not tokens:
        return None

    prefix_query = build_prefix_query(tokens, _FULL_TEXT_COLUMNS[search_type])
    conditions = {
        f: tuple(build_fuzzy_conditions(query or "", f)) for f in _FUZZY_FIELDS[search_type]
    }
    return SearchPlan(search_type=search_type, prefix_query=prefix_query, conditions=conditions)


def execute_plan(backend: SearchBackend, plan: SearchPlan) -> list[Candidate]:
    """Run a plan: union the fuzzy and full-text matches, then order them."""
    tiers = backend.match_tiers(plan.conditions)
    scores = backend.text_search(plan.prefix_query) if plan.prefix_query else {}
    candidates = order_candidates(merge_candidates(tiers, scores))
    logger.debug(
        "%s search: %d fuzzy, %d full-text, %d candidates",
        plan.search_type.value,
        len(tiers),
        len(scores),
        len(candidates),
    )
    return candidates


def _run(backend: SearchBackend, query: str | None, search_type: SearchType) -> list[Candidate]:
    plan = plan_search(query, search_type)
    if plan is None:
        return []
    return execute_plan(backend, plan)


def search_by_title(backend: SearchBackend, query: str | None) -> list[Candidate]:
    """Books whose title prefix-matches in the index or hits a fuzzy title predicate."""
    return _run(backend, query, SearchType.TITLE)


def search_by_author(backend: SearchBackend, query: str | None) -> list[Candidate]:
    """Books with at least one author matching the query.

    Titles are never consulted, so a name fragment that also appears in some
    title only returns books on the strength of their authors.
    """
    return _run(backend, query, SearchType.AUTHOR)


def search_by_isbn(backend: SearchBackend, query: str | None) -> list[Candidate]:
    """Books whose ISBN equals, starts with, or contains the query, dashes ignored."""
    return _run(backend, query, SearchType.ISBN)


def search_all(backend: SearchBackend, query: str | None) -> list[Candidate]:
    """Union of the title, author, and ISBN strategies.

    A book's tier is the best it reached in any field, so exact matches on
    title, ISBN, or author all lead the ranking together.
    """
    return _run(backend, query, SearchType.ALL)
