"""Custom exceptions for WordMiner.

Each exception type represents a category of error.
Catch specific exceptions to handle errors appropriately.
"""


class WordMinerError(Exception):
    """Base exception for all WordMiner errors."""

    pass


class ConfigError(WordMinerError):
    """Raised when configuration is invalid or missing."""

    pass


class StorageError(WordMinerError):
    """Raised when the article/vocabulary database cannot be read or written."""

    pass


class ArticleNotFoundError(StorageError):
    """Raised when a requested article id doesn't exist."""

    pass


class DictionaryError(WordMinerError):
    """Raised when a caller requires a dictionary and none could be loaded."""

    pass


class InvalidLabelError(WordMinerError, ValueError):
    """Raised when a vocabulary label is not one of the known values."""

    pass
