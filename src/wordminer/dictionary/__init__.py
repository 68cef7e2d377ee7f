"""Leveled dictionary loading and lookup."""

from wordminer.dictionary.loader import (
    Dictionary,
    TierSource,
    load_dictionary,
    merge_sources,
    normalize_headword,
    parse_record,
    tier_for_filename,
)

__all__ = [
    "Dictionary",
    "TierSource",
    "load_dictionary",
    "merge_sources",
    "normalize_headword",
    "parse_record",
    "tier_for_filename",
]
