# ABOUTME: ISBN normalization helpers shared by the catalog and the search engine.
# ABOUTME: Folds away hyphens and spaces so dashed and undashed forms compare equal.

import re

_ISBN_STRIP_RE = re.compile(r"[\s-]")
_ISBN_SHAPE_RE = re.compile(r"^\d+x?$")


def normalize_isbn(isbn: str) -> str:
    """Strip hyphens and spaces from an ISBN and lowercase the check digit."""
    return _ISBN_STRIP_RE.sub("", isbn).lower()


def is_isbn_like(text: str) -> bool:
    """Whether a (folded) string could be an ISBN or a fragment of one.

    Digits only, optionally ending in the ISBN-10 check character 'x'.
    """
    return bool(_ISBN_SHAPE_RE.match(normalize_isbn(text)))
