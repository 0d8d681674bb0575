# ABOUTME: Engine-neutral query representation shared by the search strategies and backends.
# ABOUTME: Atoms over (field, term, match kind) combined with AllOf/AnyOf, plus full-text prefix queries.

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Field(str, Enum):
    """A searchable book field."""

    TITLE = "title"
    ISBN = "isbn"
    AUTHOR = "author"


class MatchKind(str, Enum):
    """How an atom's term must appear in a folded field value."""

    EXACT = "exact"
    STARTS_WITH = "starts_with"
    WORD_PREFIX = "word_prefix"
    CONTAINS = "contains"


@dataclass(frozen=True)
class Atom:
    """A single string predicate. ``term`` is already folded for its field."""

    field: Field
    term: str
    kind: MatchKind


@dataclass(frozen=True)
class AllOf:
    """Conjunction of predicates."""

    children: tuple["Predicate", ...]


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of predicates."""

    children: tuple["Predicate", ...]


Predicate = Union[Atom, AllOf, AnyOf]


@dataclass(frozen=True)
class PrefixQuery:
    """A full-text query: every term must prefix-match some indexed word.

    Attributes:
        terms: Sanitized query terms, in query order. Never empty.
        columns: Index columns the terms are matched against.
    """

    terms: tuple[str, ...]
    columns: tuple[Field, ...]


def atom_matches(atom: Atom, value: str, words: str | None = None) -> bool:
    """Evaluate one atom against a folded field value.

    Folded values hold single-space separated words, so a word starts either
    at position 0 or right after a space. Word prefixes are looked up in
    ``words`` (see :func:`~bookcafe.search.normalizer.fold_words`) when given,
    otherwise in ``value``.
    """
    if atom.kind is MatchKind.EXACT:
        return value == atom.term
    if atom.kind is MatchKind.STARTS_WITH:
        return value.startswith(atom.term)
    if atom.kind is MatchKind.WORD_PREFIX:
        haystack = value if words is None else words
        return f" {atom.term}" in f" {haystack}"
    return atom.term in value


def evaluate(predicate: Predicate, value: str, words: str | None = None) -> bool:
    """Evaluate a predicate tree against a single folded field value."""
    if isinstance(predicate, Atom):
        return atom_matches(predicate, value, words)
    if isinstance(predicate, AllOf):
        return all(evaluate(child, value, words) for child in predicate.children)
    return any(evaluate(child, value, words) for child in predicate.children)
