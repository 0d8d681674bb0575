# ABOUTME: Orders matched books by fuzzy tier, then full-text relevance, then id.
# ABOUTME: Produces a deterministic ranking so identical queries return identical lists.

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

# Tier of a book found only by the full-text index, with no fuzzy predicate hit.
TIER_FULL_TEXT_ONLY = 5


@dataclass(frozen=True)
class Candidate:
    """A book that matched a search, with what is known about how well.

    Attributes:
        book_id: Catalog id of the book.
        tier: Best fuzzy priority the book hit (1 = exact), or None.
        score: Full-text relevance (higher is better), or None when the
            book was not found by the index or the index is unavailable.
    """

    book_id: int
    tier: int | None = None
    score: float | None = None

    @property
    def effective_tier(self) -> int:
        """The tier used for ordering; full-text-only hits rank last."""
        return self.tier if self.tier is not None else TIER_FULL_TEXT_ONLY


def merge_candidates(
    tiers: Mapping[int, int],
    scores: Mapping[int, float],
) -> list[Candidate]:
    """Union fuzzy tiers and full-text scores into one candidate per book."""
    return [
        Candidate(book_id=book_id, tier=tiers.get(book_id), score=scores.get(book_id))
        for book_id in set(tiers) | set(scores)
    ]


def _sort_key(candidate: Candidate) -> tuple[int, int, float, int]:
    has_score = candidate.score is not None
    return (
        candidate.effective_tier,
        0 if has_score else 1,
        -(candidate.score or 0.0),
        candidate.book_id,
    )


def order_candidates(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Sort candidates best first.

    The key is, in order: tier ascending (a lower tier always wins, whatever
    the scores), full-text score descending with unscored books after scored
    ones, and book id ascending as the final tie-break.
    """
    return sorted(candidates, key=_sort_key)


def rank(candidates: Iterable[Candidate]) -> list[int]:
    """Return candidate book ids, best first."""
    return [candidate.book_id for candidate in order_candidates(candidates)]
