# ABOUTME: Builds the AND-of-prefix-terms full-text query from normalized search terms.
# ABOUTME: Sanitizes each term so nothing can break the index engine's query grammar.

import re
from collections.abc import Iterable, Sequence

from bookcafe.search.expression import Field, PrefixQuery

# Only letters and digits survive into a full-text atom.
_UNSAFE_RE = re.compile(r"[^\w]|_")


def sanitize_token(token: str) -> str:
    """Remove every character that is not a letter or digit."""
    return _UNSAFE_RE.sub("", token)


def build_prefix_query(
    tokens: Iterable[str],
    columns: Sequence[Field] = (Field.TITLE,),
) -> PrefixQuery | None:
    """Turn search terms into a prefix query over the given index columns.

    Each term becomes a prefix atom ("gat" matches "Gatsby", never "Catgate"),
    and all atoms must match. Terms that sanitize to nothing are dropped.

    Returns:
        The query, or None when no term survives. Callers treat None as
        "no full-text results" rather than running a vacuous query.
    """
    terms = tuple(term for term in (sanitize_token(t) for t in tokens) if term)
    if not terms or not columns:
        return None
    return PrefixQuery(terms=terms, columns=tuple(columns))
