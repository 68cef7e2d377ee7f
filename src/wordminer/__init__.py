"""wordminer - Vocabulary mining for English reading practice.

Imports articles, classifies every word by difficulty tier using a
leveled dictionary, tracks the learner's familiarity with each lemma,
and reports vocabulary per article and across articles.

Features:
- Letter-run tokenizer and rule-based lemmatizer
- Tier-ordered dictionary merge (easiest tier wins)
- Per-article lemma and tier counts with tier snapshots
- Mastered / learning / unfamiliar labels
- Union/intersection overlap across articles

Example:
    >>> from wordminer import WordMiner
    >>> miner = WordMiner.open("./wordminer.db", "./data/dictionary")
    >>> article_id, result = miner.import_file("article.txt")
    >>> miner.overlap([article_id])
"""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from wordminer.analysis import analyze, lemmatize, tokenize
from wordminer.api import WordMiner
from wordminer.app_config import AppConfig
from wordminer.dictionary import Dictionary, load_dictionary
from wordminer.ledger import VocabularyLedger
from wordminer.models import (
    AnalysisResult,
    Article,
    ArticleReport,
    ArticleSummary,
    DictionaryEntry,
    OverlapResult,
    Phrase,
    Tier,
    Token,
    TokenStat,
    Translation,
    VocabLabel,
)
from wordminer.storage import SQLiteStorage


def _get_version() -> str:
    """Get version from package metadata or VERSION file."""
    try:
        return version("wordminer")
    except PackageNotFoundError:
        pass

    version_file = Path(__file__).parent.parent.parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()

    return "0.0.0"


__version__ = _get_version()

__all__ = [
    "WordMiner",
    "AppConfig",
    "Dictionary",
    "SQLiteStorage",
    "VocabularyLedger",
    "AnalysisResult",
    "Article",
    "ArticleReport",
    "ArticleSummary",
    "DictionaryEntry",
    "OverlapResult",
    "Phrase",
    "Tier",
    "Token",
    "TokenStat",
    "Translation",
    "VocabLabel",
    "analyze",
    "lemmatize",
    "load_dictionary",
    "tokenize",
]
