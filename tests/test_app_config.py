"""Tests for wordminer.app_config module."""

from wordminer.app_config import AppConfig


class TestAppConfig:
    """Tests for AppConfig paths."""

    def test_default_base_dir(self):
        """Test the base dir is a dot-folder named after the app."""
        assert AppConfig("study").base_dir.name == ".study"

    def test_paths(self, temp_dir):
        """Test database and dictionary live under the data dir."""
        config = AppConfig("wordminer", base_dir=temp_dir)
        assert config.database == temp_dir / "data" / "wordminer.db"
        assert config.dictionary_dir == temp_dir / "data" / "dictionary"
        assert config.data_dir.is_dir()
        assert not config.dictionary_dir.exists()

    def test_exports_dir_created(self, temp_dir):
        config = AppConfig(base_dir=temp_dir)
        assert config.exports_dir.is_dir()
