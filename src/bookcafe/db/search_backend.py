# ABOUTME: SQLite implementation of the SearchBackend protocol.
# ABOUTME: Compiles prefix queries to FTS5 MATCH strings and fuzzy predicates to bound LIKE clauses.

import logging
import sqlite3
from collections.abc import Mapping, Sequence

from bookcafe.search.conditions import FuzzyCondition
from bookcafe.search.expression import AllOf, Atom, Field, MatchKind, Predicate, PrefixQuery
from bookcafe.search.normalizer import fold, fold_isbn, fold_words

logger = logging.getLogger(__name__)

# bm25 column weights for books_fts(title, isbn, authors). Title matches count most.
_WEIGHT_TITLE = 4.0
_WEIGHT_ISBN = 2.0
_WEIGHT_AUTHORS = 3.0

_FTS_COLUMNS: dict[Field, str] = {
    Field.TITLE: "title",
    Field.ISBN: "isbn",
    Field.AUTHOR: "authors",
}

# Per field: a subquery yielding (id, v, w) where v is the folded value the
# predicates are evaluated against and w its word-start view for word
# prefixes. Authors yield one row per name.
_FIELD_SOURCES: dict[Field, str] = {
    Field.TITLE: "SELECT b.id AS id, fold(b.title) AS v, fold_words(b.title) AS w FROM books b",
    Field.ISBN: (
        "SELECT b.id AS id, fold_isbn(b.isbn) AS v, fold_isbn(b.isbn) AS w "
        "FROM books b WHERE b.isbn IS NOT NULL"
    ),
    Field.AUTHOR: (
        "SELECT ba.book_id AS id, fold(a.name) AS v, fold_words(a.name) AS w "
        "FROM book_authors ba "
        "JOIN authors a ON a.id = ba.author_id"
    ),
}


def register_functions(conn: sqlite3.Connection) -> None:
    """Register the folding functions the compiled predicates call."""
    conn.create_function("fold", 1, fold, deterministic=True)
    conn.create_function("fold_isbn", 1, fold_isbn, deterministic=True)
    conn.create_function("fold_words", 1, fold_words, deterministic=True)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def compile_predicate(predicate: Predicate, params: list[str]) -> str:
    """Compile a predicate over the folded value ``v`` and word view ``w`` into SQL.

    Terms are appended to ``params`` as bound parameters; no user text ever
    becomes part of the SQL string.
    """
    if isinstance(predicate, Atom):
        term = _escape_like(predicate.term)
        if predicate.kind is MatchKind.EXACT:
            params.append(predicate.term)
            return "v = ?"
        if predicate.kind is MatchKind.STARTS_WITH:
            params.append(f"{term}%")
            return "v LIKE ? ESCAPE '\\'"
        if predicate.kind is MatchKind.WORD_PREFIX:
            params.append(f"% {term}%")
            return "(' ' || w) LIKE ? ESCAPE '\\'"
        params.append(f"%{term}%")
        return "v LIKE ? ESCAPE '\\'"

    joiner = " AND " if isinstance(predicate, AllOf) else " OR "
    if not predicate.children:
        return "1" if isinstance(predicate, AllOf) else "0"
    return "(" + joiner.join(compile_predicate(child, params) for child in predicate.children) + ")"


def to_fts5_match(query: PrefixQuery) -> str:
    """Compile a prefix query into an FTS5 MATCH expression.

    Every term is quoted and marked as a prefix, restricted to the query's
    columns, and the atoms are joined with AND::

        {title authors} : "great"* AND {title authors} : "gats"*
    """
    colspec = "{" + " ".join(_FTS_COLUMNS[column] for column in query.columns) + "}"
    atoms = []
    for term in query.terms:
        quoted = term.replace('"', '""')
        atoms.append(f'{colspec} : "{quoted}"*')
    return " AND ".join(atoms)


class SqliteSearchBackend:
    """SearchBackend over a bookcafe SQLite database.

    Fuzzy tiers are computed from the live books/authors tables in one
    statement; full-text scores come from the books_fts index in another.
    If the index is missing or unusable, searches still work from the fuzzy
    tiers alone.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        register_functions(conn)

    def text_search(self, query: PrefixQuery) -> dict[int, float]:
        match = to_fts5_match(query)
        try:
            cursor = self._conn.execute(
                "SELECT books_fts.rowid, "
                f"bm25(books_fts, {_WEIGHT_TITLE}, {_WEIGHT_ISBN}, {_WEIGHT_AUTHORS}) "
                "FROM books_fts JOIN books ON books.id = books_fts.rowid "
                "WHERE books_fts MATCH ?",
                (match,),
            )
            rows = cursor.fetchall()
        except sqlite3.OperationalError as exc:
            logger.warning("Full-text index unavailable, using fuzzy matching only: %s", exc)
            return {}
        # bm25() is lower-is-better; flip it so higher scores rank first.
        return {row[0]: -row[1] for row in rows}

    def match_tiers(
        self, conditions: Mapping[Field, Sequence[FuzzyCondition]]
    ) -> dict[int, int]:
        params: list[str] = []
        selects = []
        for field, field_conditions in conditions.items():
            if not field_conditions:
                continue
            cases = " ".join(
                f"WHEN {compile_predicate(condition.predicate, params)} THEN {int(condition.priority)}"
                for condition in field_conditions
            )
            selects.append(f"SELECT id, CASE {cases} END AS tier FROM ({_FIELD_SOURCES[field]})")

        if not selects:
            return {}

        sql = (
            "SELECT id, MIN(tier) FROM ("
            + " UNION ALL ".join(selects)
            + ") WHERE tier IS NOT NULL GROUP BY id"
        )
        cursor = self._conn.execute(sql, params)
        return {row[0]: row[1] for row in cursor.fetchall()}
