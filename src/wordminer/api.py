"""High-level API for wordminer.

Composes the dictionary, the analysis functions and the SQLite store into
the operations a front end needs: importing articles, reports, overlap
and vocabulary labels.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from wordminer.analysis.aggregator import AnnotatedToken, analyze, annotate
from wordminer.analysis.lemmatizer import lemmatize
from wordminer.analysis.overlap import OverlapEngine
from wordminer.constants import DEFAULT_TOP_VOCAB_LIMIT
from wordminer.dictionary.loader import Dictionary, load_dictionary
from wordminer.exceptions import ArticleNotFoundError, DictionaryError, StorageError
from wordminer.ledger import VocabularyLedger
from wordminer.models import (
    AnalysisResult,
    Article,
    ArticleReport,
    ArticleSummary,
    DictionaryEntry,
    OverlapResult,
    Tier,
    VocabLabel,
)
from wordminer.storage.sqlite import SQLiteStorage

logger = logging.getLogger(__name__)


class WordMiner:
    """High-level API for article analysis and vocabulary tracking.

    The dictionary and storage are injected; the caller owns their
    lifecycle. Use ``WordMiner.open`` to build both from paths.

    Example:
        >>> miner = WordMiner.open("./wordminer.db", "./data/dictionary")
        >>> article_id, result = miner.import_text("Intro", "The cats are running.")
        >>> miner.article_report(article_id).tier_breakdown
        {<Tier.MIDDLE_SCHOOL: 'Middle School'>: 3, ...}
        >>> miner.set_label("cat", "mastered")
    """

    def __init__(self, storage: SQLiteStorage, dictionary: Optional[Dictionary] = None):
        """Initialize WordMiner.

        Args:
            storage: Article/statistics/label store
            dictionary: Loaded dictionary snapshot (empty if None)
        """
        self._storage = storage
        self._dictionary = dictionary if dictionary is not None else Dictionary.empty()
        self._ledger = VocabularyLedger(storage)
        self._overlap = OverlapEngine(storage)

    @classmethod
    def open(
        cls,
        db_path: str | Path,
        dictionary_dir: Optional[str | Path] = None,
        require_dictionary: bool = False,
    ) -> "WordMiner":
        """Build storage and dictionary from paths.

        Args:
            db_path: SQLite database (created if not exists)
            dictionary_dir: Folder of tier JSON files; None for no dictionary
            require_dictionary: Raise instead of running with an empty dictionary

        Raises:
            DictionaryError: If require_dictionary and nothing was loaded
        """
        dictionary = (
            load_dictionary(dictionary_dir) if dictionary_dir is not None else Dictionary.empty()
        )
        if require_dictionary and len(dictionary) == 0:
            raise DictionaryError(f"No dictionary entries found in {dictionary_dir}")
        return cls(SQLiteStorage(db_path), dictionary)

    @property
    def storage(self) -> SQLiteStorage:
        return self._storage

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    @property
    def ledger(self) -> VocabularyLedger:
        return self._ledger

    # =========================================================================
    # INGESTION
    # =========================================================================

    def analyze_text(self, text: str) -> AnalysisResult:
        """Analyze text without storing anything."""
        return analyze(text, self._dictionary)

    def import_text(
        self,
        title: str,
        content: str,
        path: Optional[str | Path] = None,
    ) -> tuple[int, AnalysisResult]:
        """Store an article and its statistics.

        Each import is a new analysis run with a new article id; existing
        articles are never edited.

        Args:
            title: Display title
            content: Article text
            path: Source file, if any

        Returns:
            (article_id, analysis result)
        """
        result = analyze(content, self._dictionary)
        article_id = self._storage.add_article(title, content, path)
        try:
            self._storage.upsert_article_tokens(article_id, result.lemma_counts, self._dictionary)
        except StorageError:
            # An article without statistics would report zero words
            self._storage.delete_article(article_id)
            raise
        logger.info(
            f"Imported article {article_id} ({title}): "
            f"{result.total_tokens} tokens, {result.distinct_lemmas} lemmas"
        )
        return article_id, result

    def import_file(self, path: str | Path, encoding: str = "utf-8") -> tuple[int, AnalysisResult]:
        """Read a text file and import it, titled by its file stem.

        Raises:
            StorageError: If the file cannot be read
        """
        path = Path(path)
        try:
            content = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Unable to read article {path}: {e}") from e
        return self.import_text(path.stem, content, path)

    # =========================================================================
    # RETRIEVAL
    # =========================================================================

    def list_articles(self) -> list[ArticleSummary]:
        return self._storage.list_articles()

    def get_article(self, article_id: int) -> Article:
        """Get an article.

        Raises:
            ArticleNotFoundError: If no article has this id
        """
        article = self._storage.get_article(article_id)
        if article is None:
            raise ArticleNotFoundError(f"Article not found: {article_id}")
        return article

    def delete_article(self, article_id: int) -> None:
        """Delete an article and its statistics.

        Raises:
            ArticleNotFoundError: If no article has this id
        """
        if not self._storage.delete_article(article_id):
            raise ArticleNotFoundError(f"Article not found: {article_id}")

    def article_report(
        self,
        article_id: int,
        top_n: int = DEFAULT_TOP_VOCAB_LIMIT,
    ) -> ArticleReport:
        """Build a vocabulary report from an article's stored statistics.

        Tier totals come from the tiers recorded at import, so the report
        is stable even if the dictionary has changed since.

        Args:
            article_id: Article id
            top_n: Number of most frequent lemmas to include

        Raises:
            ArticleNotFoundError: If no article has this id
        """
        article = self.get_article(article_id)
        stats = self._storage.get_article_stats(article_id)
        breakdown = {tier: stats.get(tier, 0) for tier in Tier.ordered()}
        return ArticleReport(
            article=article.summary(),
            word_count=sum(breakdown.values()),
            tier_breakdown=breakdown,
            top_vocabulary=self._storage.get_article_vocab(article_id, limit=top_n),
        )

    def overlap(self, article_ids: Iterable[int]) -> Optional[OverlapResult]:
        """Union/intersection of distinct lemmas across articles.

        Returns:
            OverlapResult, or None for an empty selection
        """
        return self._overlap.overlap(article_ids)

    def annotate_article(self, article_id: int) -> list[AnnotatedToken]:
        """Tokens of an article with dictionary entries and current labels."""
        article = self.get_article(article_id)
        return annotate(article.content, self._dictionary, self._ledger.get_all())

    def lookup(self, word: str) -> Optional[DictionaryEntry]:
        """Find the dictionary entry for a word or its lemma."""
        entry = self._dictionary.lookup(word)
        if entry is None:
            entry = self._dictionary.get(lemmatize(word.strip()))
        return entry

    # =========================================================================
    # VOCABULARY LABELS
    # =========================================================================

    def set_label(self, lemma: str, label: VocabLabel | str) -> VocabLabel:
        return self._ledger.set_label(lemma, label)

    def get_label(self, lemma: str) -> Optional[VocabLabel]:
        return self._ledger.get_label(lemma)

    def list_by_label(self, label: VocabLabel | str) -> list[str]:
        return self._ledger.list_by_label(label)

    def export_vocabulary(self, path: str | Path) -> int:
        """Export all labels to CSV.

        Returns:
            Number of lemmas written
        """
        return self._ledger.export_csv(path)

    def backup(self, destination: str | Path) -> Path:
        return self._storage.backup_to(destination)

    # =========================================================================
    # STATISTICS
    # =========================================================================

    def get_statistics(self) -> dict:
        """Get overall system statistics.

        Returns:
            Dict with article, dictionary and label counts
        """
        return {
            "articles": self._storage.count_articles(),
            "dictionary_entries": len(self._dictionary),
            "dictionary_tiers": {
                tier.value: n for tier, n in self._dictionary.tier_sizes().items()
            },
            "labels": {label.value: n for label, n in self._ledger.counts().items()},
        }
