"""Application-wide constants.

Centralizes magic numbers and strings to avoid hardcoding throughout the codebase.
"""

import re
from enum import Enum
from typing import Final

# =============================================================================
# VERSION AND METADATA
# =============================================================================

APP_NAME: Final[str] = "wordminer"

# =============================================================================
# TEXT ANALYSIS
# =============================================================================

# Maximal runs of ASCII letters; everything else separates tokens
WORD_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z]+")

# =============================================================================
# DICTIONARY
# =============================================================================

DICTIONARY_FILE_SUFFIX: Final[str] = ".json"

# Filename prefix -> tier label, easiest first
TIER_FILE_PREFIXES: Final[tuple[tuple[str, str], ...]] = (
    ("1-middle-school", "Middle School"),
    ("2-high-school", "High School"),
    ("3-CET4", "CET-4"),
    ("4-CET6", "CET-6"),
    ("5-postgraduate", "Postgraduate"),
    ("6-TOEFL", "TOEFL"),
    ("7-SAT", "SAT"),
)

# =============================================================================
# STORAGE / REPORTS
# =============================================================================

DEFAULT_DB_FILENAME: Final[str] = "wordminer.db"
DEFAULT_DICTIONARY_DIRNAME: Final[str] = "dictionary"

DEFAULT_TOP_VOCAB_LIMIT: Final[int] = 20
MAX_VOCAB_ROWS: Final[int] = 500

# Accepted article file types for `wordminer import`
ARTICLE_EXTENSIONS: Final[frozenset[str]] = frozenset({".txt", ".md"})

VOCAB_EXPORT_HEADER: Final[tuple[str, str]] = ("lemma", "status")

# =============================================================================
# ERROR CODES
# =============================================================================

class ExitCode(int, Enum):
    """CLI exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    INVALID_INPUT = 3
    STORAGE_ERROR = 4
    KEYBOARD_INTERRUPT = 130
