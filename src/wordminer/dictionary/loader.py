"""Leveled dictionary loading.

A dictionary is built from one word list per difficulty tier. Lists are
merged easiest tier first and the first tier a headword appears in wins,
so a word listed for both middle school and CET-6 is classified as
middle school.

Source files live in a single directory and are matched to tiers by
filename prefix:

    dictionary/
        1-middle-school.json
        2-high-school.json
        3-CET4.json
        ...

Each file holds a JSON list of records:

    {"word": "run",
     "translations": [{"translation": "跑", "type": "v"}],
     "phrases": [{"phrase": "run out", "translation": "用完"}]}

Missing or malformed data never aborts loading. A missing directory is
an empty dictionary; a broken file or record is skipped with a warning.
"""

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from wordminer.constants import DICTIONARY_FILE_SUFFIX, TIER_FILE_PREFIXES
from wordminer.models import DictionaryEntry, Phrase, Tier, Translation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TierSource:
    """One tier-labeled, ordered list of raw dictionary records."""

    tier: Tier
    records: Iterable[Any]
    name: str = ""


def normalize_headword(word: Optional[str]) -> str:
    """Trim and lowercase a headword into a lemma key."""
    if word is None:
        return ""
    return word.strip().lower()


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _items(value: Any) -> Iterator[dict]:
    if not isinstance(value, list):
        return
    for item in value:
        if isinstance(item, dict):
            yield item


def parse_record(raw: Any, tier: Tier) -> Optional[DictionaryEntry]:
    """Parse one raw record into a typed entry.

    Args:
        raw: Decoded JSON value for a single record
        tier: Tier of the source the record came from

    Returns:
        DictionaryEntry, or None when the record has no usable headword
    """
    if not isinstance(raw, dict):
        return None

    lemma = normalize_headword(_text(raw.get("word")))
    if not lemma:
        return None

    translations = tuple(
        Translation(
            translation=_text(item.get("translation")),
            type=_text(item.get("type")),
        )
        for item in _items(raw.get("translations"))
    )
    phrases = tuple(
        Phrase(
            phrase=_text(item.get("phrase")),
            translation=_text(item.get("translation")),
        )
        for item in _items(raw.get("phrases"))
    )

    return DictionaryEntry(
        lemma=lemma,
        tier=tier,
        translations=translations,
        phrases=phrases,
    )


class Dictionary(Mapping[str, DictionaryEntry]):
    """Read-only lemma -> entry mapping.

    Built once and shared; nothing mutates it after construction, so
    concurrent readers are safe.

    Example:
        >>> d = load_dictionary("./data/dictionary")
        >>> d.get("run")
        DictionaryEntry(lemma='run', tier=<Tier.MIDDLE_SCHOOL: 'Middle School'>, ...)
        >>> d.tier_of("xylograph")
        <Tier.UNKNOWN: 'Unknown'>
    """

    def __init__(self, entries: Optional[Mapping[str, DictionaryEntry]] = None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def empty(cls) -> "Dictionary":
        return cls()

    def __getitem__(self, lemma: str) -> DictionaryEntry:
        return self._entries[lemma]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, lemma: str, default: Optional[DictionaryEntry] = None) -> Optional[DictionaryEntry]:
        """Exact-match lookup; no normalization, no fuzzy fallback."""
        return self._entries.get(lemma, default)

    def lookup(self, word: Optional[str]) -> Optional[DictionaryEntry]:
        """Look up a raw headword after trimming and lowercasing it."""
        if word is None:
            return None
        return self._entries.get(normalize_headword(word))

    def tier_of(self, lemma: str) -> Tier:
        """Tier for a lemma, UNKNOWN when absent."""
        entry = self._entries.get(lemma)
        return entry.tier if entry is not None else Tier.UNKNOWN

    def tier_sizes(self) -> dict[Tier, int]:
        """Number of entries per tier, easiest first."""
        sizes = {tier: 0 for tier in Tier.ordered()}
        for entry in self._entries.values():
            sizes[entry.tier] += 1
        return sizes

    def __repr__(self) -> str:
        return f"Dictionary({len(self)} entries)"


def merge_sources(sources: Iterable[TierSource]) -> Dictionary:
    """Merge tier sources into one dictionary, first tier wins.

    Sources are consumed in the order given; callers pass them easiest
    tier first. A lemma already present is skipped entirely, including
    its translations and phrases.

    Args:
        sources: Tier-labeled record lists

    Returns:
        Merged Dictionary
    """
    entries: dict[str, DictionaryEntry] = {}

    for source in sources:
        added = 0
        skipped = 0
        for raw in source.records:
            entry = parse_record(raw, source.tier)
            if entry is None:
                skipped += 1
                continue
            if entry.lemma in entries:
                continue
            entries[entry.lemma] = entry
            added += 1
        if skipped:
            logger.debug(
                f"Skipped {skipped} malformed records in {source.name or source.tier.value}"
            )
        logger.debug(f"Loaded {added} entries from {source.name or source.tier.value}")

    return Dictionary(entries)


def tier_for_filename(filename: str) -> Tier:
    """Resolve a source file's tier from its filename prefix."""
    for prefix, label in TIER_FILE_PREFIXES:
        if filename.startswith(prefix):
            return Tier(label)
    return Tier.UNKNOWN


def _difficulty_index(path: Path) -> int:
    for index, (prefix, _) in enumerate(TIER_FILE_PREFIXES):
        if path.name.startswith(prefix):
            return index
    return len(TIER_FILE_PREFIXES)


def discover_sources(directory: str | Path) -> list[Path]:
    """List dictionary files in a directory, easiest tier first."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    files = [
        p for p in directory.iterdir()
        if p.is_file() and p.name.endswith(DICTIONARY_FILE_SUFFIX)
    ]
    return sorted(files, key=lambda p: (_difficulty_index(p), p.name))


def read_source(path: Path) -> Optional[TierSource]:
    """Read one dictionary file.

    Returns:
        TierSource, or None if the file is unreadable or not a JSON list
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Skipping dictionary file {path.name}: {e}")
        return None

    if not isinstance(data, list):
        logger.warning(f"Skipping dictionary file {path.name}: root is not a list")
        return None

    return TierSource(tier=tier_for_filename(path.name), records=data, name=path.name)


def load_dictionary(directory: str | Path) -> Dictionary:
    """Load and merge every tier file in a directory.

    Args:
        directory: Folder containing the per-tier JSON files

    Returns:
        Merged Dictionary; empty if the folder is missing
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning(f"Dictionary directory not found: {directory}")
        return Dictionary.empty()

    sources = (
        source
        for source in (read_source(path) for path in discover_sources(directory))
        if source is not None
    )
    dictionary = merge_sources(sources)
    logger.info(f"Loaded {len(dictionary)} dictionary entries from {directory}")
    return dictionary
