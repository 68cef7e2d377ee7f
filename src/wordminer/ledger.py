"""Vocabulary ledger.

Tracks the learner's familiarity label for each lemma. Labels are global
(not tied to any article), only change through explicit calls, and live
until the learner changes or clears them.
"""

import csv
import logging
from pathlib import Path
from typing import Optional, Protocol

from wordminer.constants import VOCAB_EXPORT_HEADER
from wordminer.models import VocabLabel

logger = logging.getLogger(__name__)


class LabelStore(Protocol):
    """Persistence the ledger writes through to."""

    def get_status(self, lemma: str) -> Optional[VocabLabel]: ...

    def set_status(self, lemma: str, status: VocabLabel) -> None: ...

    def clear_status(self, lemma: str) -> bool: ...

    def list_by_status(self, status: VocabLabel) -> list[str]: ...

    def get_all_statuses(self) -> dict[str, VocabLabel]: ...


def _normalize_lemma(lemma: str) -> str:
    normalized = (lemma or "").strip().lower()
    if not normalized:
        raise ValueError("Lemma must be a non-empty string")
    return normalized


class VocabularyLedger:
    """Learner labels keyed by lemma.

    Example:
        >>> ledger = VocabularyLedger(SQLiteStorage("./wordminer.db"))
        >>> ledger.set_label("run", "learning")
        >>> ledger.get_label("run")
        <VocabLabel.LEARNING: 'learning'>
        >>> ledger.list_by_label(VocabLabel.LEARNING)
        ['run']
    """

    def __init__(self, store: LabelStore):
        self._store = store

    def set_label(self, lemma: str, label: VocabLabel | str) -> VocabLabel:
        """Set or overwrite a lemma's label.

        Args:
            lemma: Lemma to label
            label: VocabLabel or its string value

        Returns:
            The stored label

        Raises:
            InvalidLabelError: If label is not a known value
            ValueError: If lemma is empty
        """
        parsed = VocabLabel.parse(label)
        key = _normalize_lemma(lemma)
        self._store.set_status(key, parsed)
        logger.debug(f"Labeled {key!r} as {parsed.value}")
        return parsed

    def get_label(self, lemma: str) -> Optional[VocabLabel]:
        """Current label of a lemma, None if unlabeled."""
        return self._store.get_status(_normalize_lemma(lemma))

    def clear_label(self, lemma: str) -> bool:
        """Return a lemma to the unlabeled state."""
        return self._store.clear_status(_normalize_lemma(lemma))

    def list_by_label(self, label: VocabLabel | str) -> list[str]:
        """Lemmas carrying a label, sorted ascending."""
        return self._store.list_by_status(VocabLabel.parse(label))

    def get_all(self) -> dict[str, VocabLabel]:
        return self._store.get_all_statuses()

    def counts(self) -> dict[VocabLabel, int]:
        """Number of lemmas per label, every label present."""
        totals = {label: 0 for label in VocabLabel}
        for label in self.get_all().values():
            totals[label] += 1
        return totals

    def export_csv(self, path: str | Path) -> int:
        """Write all labels to a CSV file.

        Rows are grouped by label (mastered, learning, unfamiliar) and
        sorted by lemma within each group.

        Args:
            path: Output file path

        Returns:
            Number of lemmas written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        written = 0
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(VOCAB_EXPORT_HEADER)
            for label in VocabLabel:
                for lemma in self._store.list_by_status(label):
                    writer.writerow([lemma, label.value])
                    written += 1
        logger.info(f"Exported {written} labeled lemmas to {path}")
        return written
