"""App-specific data locations for wordminer.

Provides isolated paths per app name so that separate learners or
experiments keep separate databases and dictionaries.

Example:
    >>> from wordminer.app_config import AppConfig
    >>> config = AppConfig("wordminer")
    >>> config.database
    PosixPath('/home/me/.wordminer/data/wordminer.db')
"""

from pathlib import Path

from wordminer.constants import APP_NAME, DEFAULT_DB_FILENAME, DEFAULT_DICTIONARY_DIRNAME


class AppConfig:
    """App-specific configuration for data paths.

    Each app gets isolated storage in its own directory:
    - ~/.{app_name}/data/wordminer.db - Articles, statistics, labels
    - ~/.{app_name}/data/dictionary/ - Per-tier dictionary JSON files
    - ~/.{app_name}/exports/ - Vocabulary exports and backups

    Args:
        app_name: Unique app identifier (default: wordminer)
        base_dir: Override base directory (default: ~/.{app_name})
    """

    def __init__(
        self,
        app_name: str = APP_NAME,
        base_dir: Path | None = None,
    ):
        self.app_name = app_name
        self._base_dir = Path(base_dir) if base_dir else Path.home() / f".{app_name}"
        self._data_dir = self._base_dir / "data"

    @property
    def base_dir(self) -> Path:
        """Base directory for all app data."""
        return self._base_dir

    @property
    def data_dir(self) -> Path:
        """Data directory (created on access)."""
        self._data_dir.mkdir(parents=True, exist_ok=True)
        return self._data_dir

    @property
    def database(self) -> Path:
        """Path to the SQLite database."""
        return self.data_dir / DEFAULT_DB_FILENAME

    @property
    def dictionary_dir(self) -> Path:
        """Directory holding the dictionary source files.

        Not created on access: a missing folder means "no dictionary".
        """
        return self.data_dir / DEFAULT_DICTIONARY_DIRNAME

    @property
    def exports_dir(self) -> Path:
        """Directory for CSV exports and database backups."""
        path = self._base_dir / "exports"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def __repr__(self) -> str:
        return f"AppConfig(app_name={self.app_name!r}, base_dir={self._base_dir})"
