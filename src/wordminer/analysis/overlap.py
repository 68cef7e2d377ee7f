"""Vocabulary overlap across articles.

Given a selection of articles, reports how many distinct lemmas they
use in total (union) and how many every one of them uses (intersection).
Lemma sets come from persisted article statistics, never from re-reading
article text.
"""

from collections.abc import Iterable
from typing import Optional, Protocol

from wordminer.models import OverlapResult


class LemmaSetSource(Protocol):
    """Anything that can report the distinct lemmas of a stored article."""

    def query_distinct_lemmas(self, article_id: int) -> set[str]: ...


def compute_overlap(lemma_sets: Iterable[set[str]]) -> Optional[tuple[int, int]]:
    """Union and intersection sizes of lemma sets.

    Args:
        lemma_sets: One set per article

    Returns:
        (unique, shared), or None when no sets were given
    """
    union: Optional[set[str]] = None
    intersection: Optional[set[str]] = None

    for lemmas in lemma_sets:
        if union is None:
            union = set(lemmas)
            intersection = set(lemmas)
        else:
            union |= lemmas
            intersection &= lemmas

    if union is None or intersection is None:
        return None
    return len(union), len(intersection)


class OverlapEngine:
    """Computes overlap over stored article statistics.

    Example:
        >>> engine = OverlapEngine(storage)
        >>> engine.overlap([1, 2])
        OverlapResult(unique=4, shared=2, article_ids=(1, 2))
    """

    def __init__(self, store: LemmaSetSource):
        self._store = store

    def overlap(self, article_ids: Iterable[int]) -> Optional[OverlapResult]:
        """Compute overlap for a selection of article ids.

        Duplicate ids count once. An id with no stored statistics
        contributes an empty set.

        Returns:
            OverlapResult, or None when the selection is empty
        """
        ids = tuple(dict.fromkeys(article_ids))
        if not ids:
            return None

        sizes = compute_overlap(self._store.query_distinct_lemmas(i) for i in ids)
        if sizes is None:
            return None
        unique, shared = sizes
        return OverlapResult(unique=unique, shared=shared, article_ids=ids)
