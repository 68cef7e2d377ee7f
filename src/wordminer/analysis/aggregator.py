"""Frequency aggregation over article text.

Turns raw text into per-lemma and per-tier counts in a single pass:
every token is lemmatized, counted, and bucketed by its dictionary
tier (UNKNOWN when the lemma is not in the dictionary).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from wordminer.analysis.lemmatizer import lemmatize
from wordminer.analysis.tokenizer import tokenize
from wordminer.dictionary.loader import Dictionary
from wordminer.models import (
    AnalysisResult,
    DictionaryEntry,
    Tier,
    Token,
    TokenStat,
    VocabLabel,
)


def _tier(dictionary: Optional[Mapping[str, DictionaryEntry]], lemma: str) -> Tier:
    if dictionary is None:
        return Tier.UNKNOWN
    entry = dictionary.get(lemma)
    return entry.tier if entry is not None else Tier.UNKNOWN


def analyze(
    text: Optional[str],
    dictionary: Optional[Mapping[str, DictionaryEntry]] = None,
) -> AnalysisResult:
    """Count lemmas and tiers in a text.

    The result always satisfies
    ``sum(tier_counts) == sum(lemma_counts) == number of tokens``.

    Args:
        text: Article text (None or empty yields empty counts)
        dictionary: Lemma lookup; None behaves like an empty dictionary

    Returns:
        AnalysisResult with lemma_counts and tier_counts

    Example:
        >>> result = analyze("The cats ran.", Dictionary.empty())
        >>> result.lemma_counts
        {'the': 1, 'cat': 1, 'ran': 1}
        >>> result.tier_counts
        {<Tier.UNKNOWN: 'Unknown'>: 3}
    """
    lemma_counts: dict[str, int] = {}
    tier_counts: dict[Tier, int] = {}

    for token in tokenize(text):
        lemma = lemmatize(token.text)
        lemma_counts[lemma] = lemma_counts.get(lemma, 0) + 1
        tier = _tier(dictionary, lemma)
        tier_counts[tier] = tier_counts.get(tier, 0) + 1

    return AnalysisResult(lemma_counts=lemma_counts, tier_counts=tier_counts)


def snapshot_rows(
    lemma_counts: Mapping[str, int],
    dictionary: Optional[Mapping[str, DictionaryEntry]] = None,
) -> list[TokenStat]:
    """Build one persistable row per distinct lemma.

    The tier on each row is resolved now, against the dictionary given,
    and is stored as-is. A later dictionary change does not touch it.
    """
    return [
        TokenStat(lemma=lemma, count=count, tier=_tier(dictionary, lemma))
        for lemma, count in lemma_counts.items()
    ]


@dataclass(frozen=True)
class AnnotatedToken:
    """A token with everything a reader view needs to decorate it."""

    token: Token
    lemma: str
    entry: Optional[DictionaryEntry]
    label: Optional[VocabLabel]

    @property
    def tier(self) -> Tier:
        return self.entry.tier if self.entry is not None else Tier.UNKNOWN


def annotate(
    text: Optional[str],
    dictionary: Optional[Dictionary] = None,
    labels: Optional[Mapping[str, VocabLabel]] = None,
) -> list[AnnotatedToken]:
    """Pair each token with its lemma, dictionary entry and learner label.

    Args:
        text: Article text
        dictionary: Lemma lookup
        labels: Snapshot of the learner's labels (lemma -> label)

    Returns:
        AnnotatedToken list in text order
    """
    labels = labels or {}
    annotated = []
    for token in tokenize(text):
        lemma = lemmatize(token.text)
        entry = dictionary.get(lemma) if dictionary is not None else None
        annotated.append(
            AnnotatedToken(token=token, lemma=lemma, entry=entry, label=labels.get(lemma))
        )
    return annotated
