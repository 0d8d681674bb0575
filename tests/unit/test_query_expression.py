# ABOUTME: Unit tests for the engine-neutral query representation.
# ABOUTME: Validates atom matching kinds and AllOf/AnyOf evaluation against folded values.

from bookcafe.search.expression import AllOf, AnyOf, Atom, Field, MatchKind, atom_matches, evaluate


def _atom(term: str, kind: MatchKind) -> Atom:
    return Atom(Field.TITLE, term, kind)


class TestAtomMatches:
    """Tests for atom_matches()."""

    def test_exact(self) -> None:
        """Exact requires the whole value."""
        assert atom_matches(_atom("cloud atlas", MatchKind.EXACT), "cloud atlas")
        assert not atom_matches(_atom("cloud", MatchKind.EXACT), "cloud atlas")

    def test_starts_with(self) -> None:
        """Starts-with anchors at the beginning of the value."""
        assert atom_matches(_atom("clo", MatchKind.STARTS_WITH), "cloud atlas")
        assert not atom_matches(_atom("atl", MatchKind.STARTS_WITH), "cloud atlas")

    def test_word_prefix_matches_word_starts_only(self) -> None:
        """Word prefix matches the start of any word, never the middle."""
        assert atom_matches(_atom("atl", MatchKind.WORD_PREFIX), "cloud atlas")
        assert atom_matches(_atom("clo", MatchKind.WORD_PREFIX), "cloud atlas")
        assert not atom_matches(_atom("tla", MatchKind.WORD_PREFIX), "cloud atlas")
        assert not atom_matches(_atom("lou", MatchKind.WORD_PREFIX), "cloud atlas")

    def test_word_prefix_uses_word_view(self) -> None:
        """Word starts come from the word view when one is given."""
        value = "spiderman adventures"
        words = "spiderman adventures | spider man adventures"
        assert not atom_matches(_atom("man", MatchKind.WORD_PREFIX), value)
        assert atom_matches(_atom("man", MatchKind.WORD_PREFIX), value, words)
        assert atom_matches(_atom("spiderman", MatchKind.WORD_PREFIX), value, words)
        assert not atom_matches(_atom("adventures spider", MatchKind.WORD_PREFIX), value, words)

    def test_exact_ignores_word_view(self) -> None:
        """Exact compares the folded value, not the word view."""
        words = "spiderman | spider man"
        assert not atom_matches(_atom("spider man", MatchKind.EXACT), "spiderman", words)

    def test_contains(self) -> None:
        """Contains matches anywhere."""
        assert atom_matches(_atom("685", MatchKind.CONTAINS), "9780134685991")


class TestEvaluate:
    """Tests for evaluate()."""

    def test_all_of_requires_every_child(self) -> None:
        """AllOf is a conjunction."""
        predicate = AllOf(
            (_atom("great", MatchKind.WORD_PREFIX), _atom("gatsby", MatchKind.WORD_PREFIX))
        )
        assert evaluate(predicate, "the great gatsby")
        assert not evaluate(predicate, "great expectations")

    def test_any_of_requires_one_child(self) -> None:
        """AnyOf is a disjunction."""
        predicate = AnyOf((_atom("dune", MatchKind.EXACT), _atom("great", MatchKind.STARTS_WITH)))
        assert evaluate(predicate, "great expectations")
        assert not evaluate(predicate, "cloud atlas")

    def test_empty_combinators(self) -> None:
        """An empty AllOf always holds and an empty AnyOf never does."""
        assert evaluate(AllOf(()), "anything")
        assert not evaluate(AnyOf(()), "anything")
