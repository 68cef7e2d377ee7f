"""Storage backends for wordminer.

Provides database abstraction for articles, statistics and labels.
"""

from wordminer.storage.sqlite import SQLiteStorage

__all__ = ["SQLiteStorage"]
