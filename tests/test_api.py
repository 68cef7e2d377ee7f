"""Tests for wordminer.api module."""

import csv
from unittest.mock import patch

import pytest

from wordminer.api import WordMiner
from wordminer.dictionary.loader import TierSource, merge_sources
from wordminer.exceptions import (
    ArticleNotFoundError,
    DictionaryError,
    InvalidLabelError,
    StorageError,
)
from wordminer.models import Tier, TokenStat, VocabLabel

SCENARIO_TEXT = "The cats are running and the dogs ran."


class TestOpen:
    """Tests for WordMiner.open."""

    def test_open_with_dictionary(self, db_path, dictionary_dir):
        """Test storage and dictionary are built from paths."""
        miner = WordMiner.open(db_path, dictionary_dir)
        assert len(miner.dictionary) == 8
        assert db_path.exists()

    def test_open_without_dictionary(self, db_path):
        """Test no dictionary folder gives an empty dictionary."""
        miner = WordMiner.open(db_path)
        assert len(miner.dictionary) == 0

    def test_require_dictionary(self, db_path, temp_dir):
        """Test a required but missing dictionary raises."""
        with pytest.raises(DictionaryError):
            WordMiner.open(db_path, temp_dir / "missing", require_dictionary=True)


class TestImport:
    """Tests for article import."""

    def test_import_text(self, miner):
        """Test import stores the article and its statistics."""
        article_id, result = miner.import_text("Scenario", SCENARIO_TEXT)
        assert result.total_tokens == 8
        rows = {s.lemma: s for s in miner.storage.query_by_article(article_id)}
        assert rows["the"] == TokenStat("the", 2, Tier.MIDDLE_SCHOOL)
        assert rows["ran"].tier == Tier.UNKNOWN
        assert len(rows) == 7

    def test_reimport_creates_new_article(self, miner):
        """Test importing the same text twice gives two articles."""
        first, _ = miner.import_text("a", SCENARIO_TEXT)
        second, _ = miner.import_text("a", SCENARIO_TEXT)
        assert first != second
        assert len(miner.list_articles()) == 2

    def test_import_file_titles_by_stem(self, miner, article_file):
        """Test file imports use the file name without extension."""
        article_id, _ = miner.import_file(article_file)
        article = miner.get_article(article_id)
        assert article.title == "cats"
        assert article.path == str(article_file)
        assert article.content == SCENARIO_TEXT

    def test_import_missing_file(self, miner, temp_dir):
        """Test unreadable files raise StorageError."""
        with pytest.raises(StorageError):
            miner.import_file(temp_dir / "nope.txt")

    def test_failed_statistics_write_removes_article(self, miner):
        """Test an import whose statistics fail to save leaves no article."""
        with patch.object(
            miner.storage, "upsert_article_tokens", side_effect=StorageError("disk I/O error")
        ):
            with pytest.raises(StorageError):
                miner.import_text("a", SCENARIO_TEXT)
        assert miner.list_articles() == []

    def test_analyze_text_stores_nothing(self, miner):
        """Test analysis alone does not create articles."""
        result = miner.analyze_text(SCENARIO_TEXT)
        assert result.tier_counts[Tier.MIDDLE_SCHOOL] == 6
        assert miner.list_articles() == []


class TestRetrieval:
    """Tests for article retrieval and deletion."""

    def test_get_missing(self, miner):
        with pytest.raises(ArticleNotFoundError):
            miner.get_article(123)

    def test_delete(self, miner):
        """Test delete removes the article and its lemmas."""
        article_id, _ = miner.import_text("a", "cat dog")
        miner.delete_article(article_id)
        assert miner.list_articles() == []
        assert miner.storage.query_distinct_lemmas(article_id) == set()
        with pytest.raises(ArticleNotFoundError):
            miner.delete_article(article_id)


class TestReport:
    """Tests for article reports."""

    def test_report(self, miner):
        """Test breakdown lists every tier and sums to the word count."""
        article_id, _ = miner.import_text("Scenario", SCENARIO_TEXT)
        report = miner.article_report(article_id)
        assert report.article.title == "Scenario"
        assert report.word_count == 8
        assert list(report.tier_breakdown) == Tier.ordered()
        assert report.tier_breakdown[Tier.MIDDLE_SCHOOL] == 6
        assert report.tier_breakdown[Tier.UNKNOWN] == 2
        assert report.tier_breakdown[Tier.SAT] == 0
        assert report.top_vocabulary[0] == TokenStat("the", 2, Tier.MIDDLE_SCHOOL)

    def test_report_top_limit(self, miner):
        article_id, _ = miner.import_text("Scenario", SCENARIO_TEXT)
        assert len(miner.article_report(article_id, top_n=3).top_vocabulary) == 3

    def test_report_uses_stored_tiers(self, storage, miner):
        """Test a report built under a new dictionary keeps import-time tiers."""
        article_id, _ = miner.import_text("Scenario", SCENARIO_TEXT)
        reloaded = WordMiner(
            storage, merge_sources([TierSource(Tier.SAT, [{"word": "the"}])])
        )
        report = reloaded.article_report(article_id)
        assert report.tier_breakdown[Tier.MIDDLE_SCHOOL] == 6
        assert report.tier_breakdown[Tier.SAT] == 0

    def test_report_missing(self, miner):
        with pytest.raises(ArticleNotFoundError):
            miner.article_report(99)


class TestOverlap:
    """Tests for overlap through the API."""

    def test_overlap(self, miner):
        """Test the two-article example end to end."""
        a, _ = miner.import_text("A", "a b c")
        b, _ = miner.import_text("B", "b c d")
        result = miner.overlap([a, b])
        assert (result.unique, result.shared) == (4, 2)

    def test_overlap_empty(self, miner):
        assert miner.overlap([]) is None


class TestLabelsAndLookup:
    """Tests for labels, annotation and lookup."""

    def test_labels(self, miner):
        """Test set, overwrite and listing through the API."""
        miner.set_label("run", "unfamiliar")
        miner.set_label("run", VocabLabel.MASTERED)
        assert miner.get_label("run") == VocabLabel.MASTERED
        assert miner.list_by_label("mastered") == ["run"]

    def test_invalid_label(self, miner):
        with pytest.raises(InvalidLabelError):
            miner.set_label("run", "memorized")

    def test_annotate_article(self, miner):
        """Test annotation reflects current labels."""
        article_id, _ = miner.import_text("a", "Cats ran")
        miner.set_label("cat", "learning")
        tokens = miner.annotate_article(article_id)
        assert tokens[0].lemma == "cat"
        assert tokens[0].label == VocabLabel.LEARNING
        assert tokens[0].tier == Tier.MIDDLE_SCHOOL
        assert tokens[1].label is None

    def test_lookup(self, miner):
        """Test lookup by headword and by inflected form."""
        assert miner.lookup("  CAT ").lemma == "cat"
        assert miner.lookup("Studies").lemma == "study"
        assert miner.lookup("xylograph") is None

    def test_export_vocabulary(self, miner, temp_dir):
        miner.set_label("cat", "mastered")
        path = temp_dir / "vocab.csv"
        assert miner.export_vocabulary(path) == 1
        with open(path, newline="", encoding="utf-8") as f:
            assert list(csv.reader(f))[1] == ["cat", "mastered"]

    def test_backup(self, miner, temp_dir):
        assert miner.backup(temp_dir / "copy.db").exists()


class TestStatistics:
    """Tests for get_statistics."""

    def test_statistics(self, miner):
        miner.import_text("a", "cat")
        miner.set_label("cat", "learning")
        stats = miner.get_statistics()
        assert stats["articles"] == 1
        assert stats["dictionary_entries"] == 8
        assert stats["dictionary_tiers"]["Middle School"] == 5
        assert stats["labels"] == {"mastered": 0, "learning": 1, "unfamiliar": 0}
