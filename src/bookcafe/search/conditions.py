# ABOUTME: Builds prioritized fuzzy fallback predicates (exact, starts-with, word boundary) per field.
# ABOUTME: These work against live columns, so search keeps working when the full-text index is stale.

from dataclasses import dataclass

from bookcafe.metadata.isbn import is_isbn_like
from bookcafe.search.expression import AllOf, Atom, Field, MatchKind, Predicate
from bookcafe.search.normalizer import fold, fold_isbn

PRIORITY_EXACT = 1
PRIORITY_STARTS_WITH = 2
PRIORITY_WORD_BOUNDARY = 3
PRIORITY_ALL_TERMS = 4

# Terms of a multi-word query shorter than this are ignored by the all-terms predicate.
_MIN_TERM_LENGTH = 2


@dataclass(frozen=True)
class FuzzyCondition:
    """A predicate and the tier it assigns to the books it matches."""

    predicate: Predicate
    priority: int


def build_fuzzy_conditions(query: str, field: Field) -> list[FuzzyCondition]:
    """Build the fuzzy predicates for one field, best priority first.

    For title and author name:

    1. the folded field equals the folded query;
    2. the field starts with the query;
    3. the query starts some word of the field ("Atl" hits "Cloud Atlas",
       "tla" does not);
    4. multi-word queries only: every term of two or more characters starts
       some word of the field, in any order.

    ISBNs fold away separators on both sides and get exact, starts-with, and
    (for ISBN-shaped queries) a plain substring match at priority 3.

    Returns an empty list when the query has nothing searchable in it.
    """
    if field is Field.ISBN:
        return _isbn_conditions(query)

    phrase = fold(query)
    if not phrase:
        return []

    conditions = [
        FuzzyCondition(Atom(field, phrase, MatchKind.EXACT), PRIORITY_EXACT),
        FuzzyCondition(Atom(field, phrase, MatchKind.STARTS_WITH), PRIORITY_STARTS_WITH),
        FuzzyCondition(Atom(field, phrase, MatchKind.WORD_PREFIX), PRIORITY_WORD_BOUNDARY),
    ]

    words = phrase.split(" ")
    terms = [word for word in words if len(word) >= _MIN_TERM_LENGTH]
    if len(words) > 1 and terms:
        predicate = AllOf(tuple(Atom(field, term, MatchKind.WORD_PREFIX) for term in terms))
        conditions.append(FuzzyCondition(predicate, PRIORITY_ALL_TERMS))

    return conditions


def _isbn_conditions(query: str) -> list[FuzzyCondition]:
    """Exact, prefix, and substring predicates over separator-free ISBNs."""
    folded = fold_isbn(query)
    if not folded:
        return []

    conditions = [
        FuzzyCondition(Atom(Field.ISBN, folded, MatchKind.EXACT), PRIORITY_EXACT),
        FuzzyCondition(Atom(Field.ISBN, folded, MatchKind.STARTS_WITH), PRIORITY_STARTS_WITH),
    ]
    if is_isbn_like(folded):
        conditions.append(
            FuzzyCondition(Atom(Field.ISBN, folded, MatchKind.CONTAINS), PRIORITY_WORD_BOUNDARY)
        )
    return conditions
