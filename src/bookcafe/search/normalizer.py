# ABOUTME: Cleans raw user search input into an ordered list of query terms.
# ABOUTME: Also provides the casefolded canonical form used by fuzzy field comparisons.

import re

from bookcafe.metadata.isbn import normalize_isbn

# Anything that is not a Unicode letter, digit, or whitespace. \w admits the
# underscore, so it is stripped explicitly.
_STRIP_RE = re.compile(r"[^\w\s]|_")
_WHITESPACE_RE = re.compile(r"\s+")


def clean(raw: str | None) -> str:
    """Strip punctuation, collapse runs of whitespace to one space, and trim."""
    if not raw:
        return ""
    return _WHITESPACE_RE.sub(" ", _STRIP_RE.sub("", raw)).strip()


def normalize(raw: str | None) -> list[str]:
    """Split raw input into search terms, preserving their order.

    Case is left untouched; the full-text index matches case-insensitively on
    its own. An input with nothing searchable left (``""``, ``"   "``,
    ``"!!!"``) yields an empty list, which every caller treats as "no match".

    Examples:
        >>> normalize("  The Great   Gatsby! ")
        ['The', 'Great', 'Gatsby']
        >>> normalize("978-0-13-468599-1")
        ['9780134685991']
    """
    cleaned = clean(raw)
    return cleaned.split(" ") if cleaned else []


def fold(text: str | None) -> str:
    """Canonical lowercase form of a stored value or a query.

    Fuzzy predicates compare folded query text against folded field values,
    so both sides are cleaned the same way and case never matters. Words in
    the result are separated by exactly one space.
    """
    return clean(text).casefold()


def fold_isbn(text: str | None) -> str:
    """Folded form of an ISBN with every separator removed."""
    return normalize_isbn(fold(text))


def split_words(text: str | None) -> list[str]:
    """Casefolded words of a value with punctuation treated as a word break.

    This is how the full-text index tokenizes, so "Spider-Man" gives
    ``['spider', 'man']`` where :func:`fold` gives ``'spiderman'``.
    """
    if not text:
        return []
    return _STRIP_RE.sub(" ", text).casefold().split()


def fold_words(text: str | None) -> str:
    """Every word a word-boundary match may start at, as one folded string.

    Holds the :func:`fold` form and, when punctuation split any word, the
    :func:`split_words` form after a ``" | "`` separator. A hyphenated
    "Jean-Paul Sartre" thus gives ``'jeanpaul sartre | jean paul sartre'``,
    so "Jean-Paul", "Paul", and "Sartre" all start a word. Query terms never
    contain ``|``, so no phrase can match across the separator.
    """
    joined = fold(text)
    split = " ".join(split_words(text))
    if split == joined:
        return joined
    return f"{joined} | {split}"
