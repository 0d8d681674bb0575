# ABOUTME: Unit tests for the full-text prefix query builder.
# ABOUTME: Validates term sanitization, column selection, and the no-terms case.

from bookcafe.search.expression import Field, PrefixQuery
from bookcafe.search.prefix import build_prefix_query, sanitize_token


class TestSanitizeToken:
    """Tests for sanitize_token()."""

    def test_keeps_letters_and_digits(self) -> None:
        """Plain words pass through unchanged."""
        assert sanitize_token("Gatsby1925") == "Gatsby1925"

    def test_removes_query_syntax(self) -> None:
        """Quotes, stars, colons, and parentheses never reach the index."""
        assert sanitize_token('"title:(gat*)"') == "titlegat"

    def test_removes_underscore(self) -> None:
        """Underscores are dropped too."""
        assert sanitize_token("a_b") == "ab"


class TestBuildPrefixQuery:
    """Tests for build_prefix_query()."""

    def test_defaults_to_title_column(self) -> None:
        """Without columns the query targets titles."""
        query = build_prefix_query(["Great", "Gats"])
        assert query == PrefixQuery(terms=("Great", "Gats"), columns=(Field.TITLE,))

    def test_uses_given_columns(self) -> None:
        """Columns are carried through in order."""
        query = build_prefix_query(["orwell"], (Field.TITLE, Field.AUTHOR))
        assert query is not None
        assert query.columns == (Field.TITLE, Field.AUTHOR)

    def test_drops_terms_that_sanitize_to_nothing(self) -> None:
        """A term made only of syntax characters is skipped."""
        query = build_prefix_query(["Great", "***", "Gat$by"])
        assert query is not None
        assert query.terms == ("Great", "Gatby")

    def test_returns_none_without_terms(self) -> None:
        """No surviving term means no query at all."""
        assert build_prefix_query([]) is None
        assert build_prefix_query(["()", '"']) is None

    def test_returns_none_without_columns(self) -> None:
        """A query over no columns is never built."""
        assert build_prefix_query(["9780134685991"], ()) is None
