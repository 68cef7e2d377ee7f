"""Data models for wordminer.

Defines core entities for text analysis and vocabulary tracking.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from wordminer.exceptions import InvalidLabelError


class Tier(str, Enum):
    """Difficulty tier of a lemma.

    Tiers are ordered from least to most advanced and compare by that
    order. UNKNOWN means the lemma was not found in the dictionary and
    always sorts last.
    """

    MIDDLE_SCHOOL = "Middle School"
    HIGH_SCHOOL = "High School"
    CET4 = "CET-4"
    CET6 = "CET-6"
    POSTGRADUATE = "Postgraduate"
    TOEFL = "TOEFL"
    SAT = "SAT"
    UNKNOWN = "Unknown"

    @property
    def rank(self) -> int:
        """Position in the difficulty order (0 = easiest)."""
        return _TIER_ORDER.index(self)

    # Compare by difficulty, not by label text
    def __lt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def ordered(cls) -> list["Tier"]:
        """All tiers, easiest first, UNKNOWN last."""
        return list(_TIER_ORDER)

    @classmethod
    def from_label(cls, label: Optional[str]) -> "Tier":
        """Parse a persisted tier label.

        Unrecognized labels map to UNKNOWN so that rows written by an
        older dictionary layout still load.
        """
        for tier in cls:
            if tier.value == label:
                return tier
        return cls.UNKNOWN


_TIER_ORDER: tuple[Tier, ...] = tuple(Tier)


class VocabLabel(str, Enum):
    """Learner-controlled familiarity bucket for a lemma."""

    MASTERED = "mastered"
    LEARNING = "learning"
    UNFAMILIAR = "unfamiliar"

    @classmethod
    def parse(cls, value: "VocabLabel | str") -> "VocabLabel":
        """Coerce a label or label string (case-insensitive).

        Raises:
            InvalidLabelError: If value is not one of the three labels
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for label in cls:
                if label.value == normalized:
                    return label
        raise InvalidLabelError(
            f"Invalid vocabulary label: {value!r} "
            f"(expected one of {', '.join(l.value for l in cls)})"
        )


@dataclass(frozen=True)
class Token:
    """A run of ASCII letters and its character offsets in the source.

    Attributes:
        text: The matched letters, unmodified
        start: Offset of the first character
        end: Offset one past the last character
    """

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class Translation:
    """One translation of a headword with its part of speech."""

    translation: str = ""
    type: str = ""

    def to_dict(self) -> dict:
        return {"translation": self.translation, "type": self.type}


@dataclass(frozen=True)
class Phrase:
    """A phrase containing the headword and its translation."""

    phrase: str = ""
    translation: str = ""

    def to_dict(self) -> dict:
        return {"phrase": self.phrase, "translation": self.translation}


@dataclass(frozen=True)
class DictionaryEntry:
    """A normalized dictionary entry.

    Attributes:
        lemma: Lowercase, trimmed headword
        tier: Difficulty tier of the source file the entry came from
        translations: (translation, part-of-speech) pairs
        phrases: (phrase, translation) pairs
    """

    lemma: str
    tier: Tier
    translations: tuple[Translation, ...] = ()
    phrases: tuple[Phrase, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "lemma": self.lemma,
            "tier": self.tier.value,
            "translations": [t.to_dict() for t in self.translations],
            "phrases": [p.to_dict() for p in self.phrases],
        }


@dataclass(frozen=True)
class TokenStat:
    """Persisted occurrence count of one lemma within one article.

    The tier is the one resolved when the article was analyzed, not
    a live dictionary lookup.
    """

    lemma: str
    count: int
    tier: Tier

    def to_dict(self) -> dict:
        return {"lemma": self.lemma, "count": self.count, "tier": self.tier.value}


@dataclass
class AnalysisResult:
    """Lemma frequencies and tier buckets for one text.

    Attributes:
        lemma_counts: Occurrences per lemma
        tier_counts: Occurrences per tier (token-weighted, not per lemma)
    """

    lemma_counts: dict[str, int] = field(default_factory=dict)
    tier_counts: dict[Tier, int] = field(default_factory=dict)

    @property
    def total_tokens(self) -> int:
        """Number of tokens the text produced."""
        return sum(self.lemma_counts.values())

    @property
    def distinct_lemmas(self) -> int:
        return len(self.lemma_counts)

    def to_dict(self) -> dict:
        return {
            "total_tokens": self.total_tokens,
            "distinct_lemmas": self.distinct_lemmas,
            "lemma_counts": dict(self.lemma_counts),
            "tier_counts": {tier.value: n for tier, n in self.tier_counts.items()},
        }


@dataclass(frozen=True)
class OverlapResult:
    """Union and intersection sizes over a selection of articles.

    Attributes:
        unique: Distinct lemmas across all selected articles
        shared: Lemmas present in every selected article
        article_ids: The selection, de-duplicated, in request order
    """

    unique: int
    shared: int
    article_ids: tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {
            "article_ids": list(self.article_ids),
            "unique": self.unique,
            "shared": self.shared,
        }


@dataclass(frozen=True)
class ArticleSummary:
    """Lightweight projection of an article row for listings."""

    id: int
    title: str
    path: Optional[str]
    created_at: str

    @property
    def display_label(self) -> str:
        return f"[{self.id}] {self.title}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "path": self.path,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class Article:
    """Full article record including its text."""

    id: int
    title: str
    path: Optional[str]
    content: str
    created_at: str

    def summary(self) -> ArticleSummary:
        return ArticleSummary(
            id=self.id,
            title=self.title,
            path=self.path,
            created_at=self.created_at,
        )


@dataclass
class ArticleReport:
    """Per-article vocabulary report built from persisted statistics.

    Attributes:
        article: The article the report describes
        word_count: Total tokens (sum of persisted counts)
        tier_breakdown: Tokens per tier, every tier present, easiest first
        top_vocabulary: Most frequent lemmas, count descending
    """

    article: ArticleSummary
    word_count: int
    tier_breakdown: dict[Tier, int]
    top_vocabulary: list[TokenStat] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "article": self.article.to_dict(),
            "word_count": self.word_count,
            "tier_breakdown": {
                tier.value: n for tier, n in self.tier_breakdown.items()
            },
            "top_vocabulary": [stat.to_dict() for stat in self.top_vocabulary],
        }
