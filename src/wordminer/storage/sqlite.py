"""SQLite storage backend for wordminer.

Persists articles, their per-lemma statistics, the learner's vocabulary
labels and simple key/value preferences.
"""

import logging
import shutil
import sqlite3
from collections.abc import Iterable, Mapping
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from wordminer.analysis.aggregator import snapshot_rows
from wordminer.constants import MAX_VOCAB_ROWS
from wordminer.exceptions import StorageError
from wordminer.models import (
    Article,
    ArticleSummary,
    DictionaryEntry,
    Tier,
    TokenStat,
    VocabLabel,
)

logger = logging.getLogger(__name__)

# Schema version for migrations
SCHEMA_VERSION = 1

# SQL schema
SCHEMA_SQL = """
-- Enable foreign keys
PRAGMA foreign_keys = ON;

-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Imported articles
CREATE TABLE IF NOT EXISTS articles (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    title       TEXT NOT NULL,
    path        TEXT,
    content     TEXT NOT NULL,
    created_at  TEXT NOT NULL
);

-- Per-article lemma counts; difficulty is a snapshot taken at import
CREATE TABLE IF NOT EXISTS article_tokens (
    article_id  INTEGER NOT NULL,
    lemma       TEXT NOT NULL,
    word_count  INTEGER NOT NULL,
    difficulty  TEXT NOT NULL,
    PRIMARY KEY (article_id, lemma),
    FOREIGN KEY (article_id) REFERENCES articles(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_tokens_article ON article_tokens(article_id);
CREATE INDEX IF NOT EXISTS idx_tokens_lemma ON article_tokens(lemma);

-- Learner labels, global across articles
CREATE TABLE IF NOT EXISTS vocab_status (
    lemma       TEXT PRIMARY KEY,
    status      TEXT NOT NULL CHECK (status IN ('mastered', 'learning', 'unfamiliar')),
    updated_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_vocab_status ON vocab_status(status);

-- Preferences
CREATE TABLE IF NOT EXISTS preferences (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL
);
"""


class SQLiteStorage:
    """SQLite storage backend for wordminer.

    Every public method opens its own connection and runs as one
    transaction: committed on success, rolled back on error.

    Example:
        >>> storage = SQLiteStorage("./wordminer.db")
        >>> article_id = storage.add_article("intro", "The cats ran.")
        >>> storage.upsert_article_tokens(article_id, {"the": 1, "cat": 1, "ran": 1}, dictionary)
        >>> storage.query_distinct_lemmas(article_id)
        {'the', 'cat', 'ran'}
    """

    def __init__(self, db_path: str | Path):
        """Initialize SQLite storage.

        Args:
            db_path: Path to SQLite database file (created if not exists)

        Raises:
            StorageError: If the database cannot be created or opened
        """
        self.db_path = Path(db_path)
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Unable to initialize storage: {e}") from e
        self._ensure_schema()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connection."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            raise StorageError(f"Unable to open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        """Ensure database schema exists and is up to date."""
        with self._connection() as conn:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
            )
            if cursor.fetchone() is None:
                conn.executescript(SCHEMA_SQL)
                conn.execute(
                    "INSERT INTO schema_version (version) VALUES (?)",
                    [SCHEMA_VERSION],
                )

    # =========================================================================
    # ARTICLE OPERATIONS
    # =========================================================================

    def add_article(
        self,
        title: str,
        content: str,
        path: Optional[str | Path] = None,
    ) -> int:
        """Store a new article.

        Args:
            title: Display title
            content: Full article text
            path: Source file, if the article was imported from disk

        Returns:
            New article id
        """
        created_at = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO articles (title, path, content, created_at)
                VALUES (?, ?, ?, ?)
                """,
                [title, str(path) if path is not None else None, content, created_at],
            )
            return cursor.lastrowid

    def list_articles(self) -> list[ArticleSummary]:
        """List all articles, newest first."""
        with self._connection() as conn:
            cursor = conn.execute(
                "SELECT id, title, path, created_at FROM articles ORDER BY id DESC"
            )
            return [self._row_to_summary(row) for row in cursor.fetchall()]

    def get_article(self, article_id: int) -> Optional[Article]:
        """Get an article by id.

        Returns:
            Article or None if not found
        """
        with self._connection() as conn:
            cursor = conn.execute(
                "SELECT id, title, path, content, created_at FROM articles WHERE id = ?",
                [article_id],
            )
            row = cursor.fetchone()
            if row is None:
                return None

            return Article(
                id=row["id"],
                title=row["title"],
                path=row["path"],
                content=row["content"],
                created_at=row["created_at"],
            )

    def delete_article(self, article_id: int) -> bool:
        """Delete an article and its statistics.

        Returns:
            True if an article was deleted
        """
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM articles WHERE id = ?", [article_id])
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info(f"Deleted article {article_id}")
        return deleted

    def count_articles(self) -> int:
        with self._connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM articles").fetchone()[0]

    # =========================================================================
    # ARTICLE STATISTICS
    # =========================================================================

    def upsert(self, article_id: int, lemma: str, count: int, tier: Tier) -> None:
        """Write a single statistics row, replacing any existing one."""
        self._upsert_rows(article_id, [TokenStat(lemma=lemma, count=count, tier=tier)])

    def upsert_article_tokens(
        self,
        article_id: int,
        lemma_counts: Mapping[str, int],
        dictionary: Optional[Mapping[str, DictionaryEntry]] = None,
    ) -> int:
        """Persist an article's lemma counts with their current tiers.

        The tier of each lemma is resolved against ``dictionary`` at call
        time and stored with the row; it is never recomputed later.

        Args:
            article_id: Article the counts belong to
            lemma_counts: Occurrences per lemma
            dictionary: Lemma lookup used for the tier snapshot

        Returns:
            Number of rows written
        """
        rows = snapshot_rows(lemma_counts, dictionary)
        self._upsert_rows(article_id, rows)
        return len(rows)

    def _upsert_rows(self, article_id: int, rows: Iterable[TokenStat]) -> None:
        with self._connection() as conn:
            conn.executemany(
                """
                INSERT INTO article_tokens (article_id, lemma, word_count, difficulty)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(article_id, lemma)
                DO UPDATE SET word_count = excluded.word_count,
                              difficulty = excluded.difficulty
                """,
                [(article_id, row.lemma, row.count, row.tier.value) for row in rows],
            )

    def query_by_article(self, article_id: int) -> list[TokenStat]:
        """All statistics rows of an article, lemma ascending."""
        with self._connection() as conn:
            cursor = conn.execute(
                """
                SELECT lemma, word_count, difficulty FROM article_tokens
                WHERE article_id = ?
                ORDER BY lemma ASC
                """,
                [article_id],
            )
            return [self._row_to_stat(row) for row in cursor.fetchall()]

    def query_distinct_lemmas(self, article_id: int) -> set[str]:
        """Distinct lemmas recorded for an article."""
        with self._connection() as conn:
            cursor = conn.execute(
                "SELECT lemma FROM article_tokens WHERE article_id = ?",
                [article_id],
            )
            return {row["lemma"] for row in cursor.fetchall()}

    def get_article_stats(self, article_id: int) -> dict[Tier, int]:
        """Token totals per stored tier for an article.

        Only tiers that occur are present.
        """
        stats: dict[Tier, int] = {}
        with self._connection() as conn:
            cursor = conn.execute(
                """
                SELECT difficulty, SUM(word_count) AS total FROM article_tokens
                WHERE article_id = ?
                GROUP BY difficulty
                """,
                [article_id],
            )
            for row in cursor.fetchall():
                tier = Tier.from_label(row["difficulty"])
                stats[tier] = stats.get(tier, 0) + row["total"]
        return stats

    def get_article_vocab(
        self,
        article_id: int,
        limit: int = MAX_VOCAB_ROWS,
    ) -> list[TokenStat]:
        """Most frequent lemmas of an article.

        Args:
            article_id: Article id
            limit: Maximum rows

        Returns:
            TokenStat list, count descending then lemma ascending
        """
        with self._connection() as conn:
            cursor = conn.execute(
                """
                SELECT lemma, word_count, difficulty FROM article_tokens
                WHERE article_id = ?
                ORDER BY word_count DESC, lemma ASC
                LIMIT ?
                """,
                [article_id, limit],
            )
            return [self._row_to_stat(row) for row in cursor.fetchall()]

    # =========================================================================
    # VOCABULARY LABELS
    # =========================================================================

    def get_status(self, lemma: str) -> Optional[VocabLabel]:
        """Get the stored label for a lemma, or None if unlabeled."""
        with self._connection() as conn:
            row = conn.execute(
                "SELECT status FROM vocab_status WHERE lemma = ?",
                [lemma],
            ).fetchone()
            if row is None:
                return None
            return VocabLabel(row["status"])

    def set_status(self, lemma: str, status: VocabLabel) -> None:
        """Insert or overwrite the label for a lemma."""
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO vocab_status (lemma, status) VALUES (?, ?)
                ON CONFLICT(lemma)
                DO UPDATE SET status = excluded.status, updated_at = CURRENT_TIMESTAMP
                """,
                [lemma, status.value],
            )

    def clear_status(self, lemma: str) -> bool:
        """Remove a lemma's label.

        Returns:
            True if a label was removed
        """
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM vocab_status WHERE lemma = ?", [lemma])
            return cursor.rowcount > 0

    def list_by_status(self, status: VocabLabel) -> list[str]:
        """Lemmas carrying a label, ascending."""
        with self._connection() as conn:
            cursor = conn.execute(
                "SELECT lemma FROM vocab_status WHERE status = ? ORDER BY lemma ASC",
                [status.value],
            )
            return [row["lemma"] for row in cursor.fetchall()]

    def get_all_statuses(self) -> dict[str, VocabLabel]:
        """Every labeled lemma and its label."""
        with self._connection() as conn:
            cursor = conn.execute("SELECT lemma, status FROM vocab_status")
            return {row["lemma"]: VocabLabel(row["status"]) for row in cursor.fetchall()}

    # =========================================================================
    # PREFERENCES
    # =========================================================================

    def get_preference(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT value FROM preferences WHERE key = ?",
                [key],
            ).fetchone()
            return row["value"] if row is not None else default

    def set_preference(self, key: str, value: str) -> None:
        with self._connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO preferences (key, value) VALUES (?, ?)",
                [key, value],
            )

    # =========================================================================
    # MAINTENANCE
    # =========================================================================

    def backup_to(self, destination: str | Path) -> Path:
        """Copy the database file to another location.

        Args:
            destination: Target file path (parent folders are created)

        Returns:
            Path of the written backup

        Raises:
            StorageError: If the copy fails
        """
        destination = Path(destination)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.db_path, destination)
        except OSError as e:
            raise StorageError(f"Unable to backup database: {e}") from e
        logger.info(f"Backed up {self.db_path} to {destination}")
        return destination

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _row_to_summary(row: sqlite3.Row) -> ArticleSummary:
        return ArticleSummary(
            id=row["id"],
            title=row["title"],
            path=row["path"],
            created_at=row["created_at"],
        )

    @staticmethod
    def _row_to_stat(row: sqlite3.Row) -> TokenStat:
        return TokenStat(
            lemma=row["lemma"],
            count=row["word_count"],
            tier=Tier.from_label(row["difficulty"]),
        )
