# ABOUTME: In-memory SearchBackend holding a token index of a small corpus.
# ABOUTME: Evaluates fuzzy predicates and prefix queries in Python, without a database.

from collections.abc import Iterable, Mapping, Sequence

from bookcafe.metadata.types import BookMetadata
from bookcafe.search.conditions import FuzzyCondition
from bookcafe.search.expression import Field, PrefixQuery, evaluate
from bookcafe.search.normalizer import fold, fold_isbn, fold_words, split_words

# A folded field value and its word-start view.
FoldedValue = tuple[str, str]


class MemoryBackend:
    """SearchBackend over books kept in process memory.

    Each book's title, ISBN, and author names are folded once on insert and
    tokenized the way the full-text index does, punctuation splitting words. The
    full-text score is term density: matched words divided by words in the
    searched columns, so shorter fields full of query terms rank higher.
    """

    def __init__(self, *, index_enabled: bool = True) -> None:
        self._index_enabled = index_enabled
        self._values: dict[int, dict[Field, list[FoldedValue]]] = {}
        self._tokens: dict[int, dict[Field, list[str]]] = {}

    @classmethod
    def from_books(cls, books: Mapping[int, BookMetadata], **kwargs: bool) -> "MemoryBackend":
        """Build a backend from a mapping of book id to metadata."""
        backend = cls(**kwargs)
        for book_id, metadata in books.items():
            backend.add(book_id, metadata)
        return backend

    def add(self, book_id: int, metadata: BookMetadata) -> None:
        """Index a book, replacing any previous entry with the same id."""
        isbn = fold_isbn(metadata.isbn) if metadata.isbn else ""
        self._values[book_id] = {
            Field.TITLE: [(fold(metadata.title), fold_words(metadata.title))],
            Field.ISBN: [(isbn, isbn)] if isbn else [],
            Field.AUTHOR: [(fold(name), fold_words(name)) for name in metadata.authors],
        }
        self._tokens[book_id] = {
            Field.TITLE: split_words(metadata.title),
            Field.ISBN: [isbn] if isbn else [],
            Field.AUTHOR: [word for name in metadata.authors for word in split_words(name)],
        }

    def remove(self, book_id: int) -> None:
        """Drop a book from the index. Unknown ids are ignored."""
        self._values.pop(book_id, None)
        self._tokens.pop(book_id, None)

    def text_search(self, query: PrefixQuery) -> dict[int, float]:
        if not self._index_enabled:
            return {}

        terms = [term.casefold() for term in query.terms]
        scores: dict[int, float] = {}
        for book_id, fields in self._tokens.items():
            words = [word for column in query.columns for word in fields[column]]
            if not words:
                continue
            hits = [sum(1 for word in words if word.startswith(term)) for term in terms]
            if all(hits):
                scores[book_id] = sum(hits) / len(words)
        return scores

    def match_tiers(
        self, conditions: Mapping[Field, Sequence[FuzzyCondition]]
    ) -> dict[int, int]:
        tiers: dict[int, int] = {}
        for book_id, fields in self._values.items():
            best = _best_priority(
                (field_conditions, fields[field]) for field, field_conditions in conditions.items()
            )
            if best is not None:
                tiers[book_id] = best
        return tiers


def _best_priority(
    pairs: Iterable[tuple[Sequence[FuzzyCondition], list[FoldedValue]]],
) -> int | None:
    """Lowest priority any condition reaches against any of its field's values."""
    best: int | None = None
    for conditions, values in pairs:
        for condition in conditions:
            if best is not None and condition.priority >= best:
                break
            if any(evaluate(condition.predicate, value, words) for value, words in values):
                best = condition.priority
                break
    return best
