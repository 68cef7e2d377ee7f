"""Pytest configuration and fixtures."""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from wordminer.api import WordMiner
from wordminer.dictionary.loader import load_dictionary
from wordminer.storage.sqlite import SQLiteStorage

SCENARIO_TEXT = "The cats are running and the dogs ran."

MIDDLE_SCHOOL_WORDS = [
    {"word": "the"},
    {
        "word": "cat",
        "translations": [{"translation": "猫", "type": "n"}],
        "phrases": [{"phrase": "cat nap", "translation": "小睡"}],
    },
    {"word": "run", "translations": [{"translation": "跑", "type": "v"}]},
    {"word": "and", "translations": [{"translation": "和", "type": "conj"}]},
    {"word": "dog"},
]

CET4_WORDS = [
    {"word": "Run", "translations": [{"translation": "经营", "type": "v"}]},
    {"word": "study"},
    {"word": "  Abandon  "},
    {"nope": 1},
    {"word": ""},
    "junk",
]

TOEFL_WORDS = [
    {"word": "ubiquitous", "translations": "not a list", "phrases": [{"phrase": "ubiquitous computing"}]},
]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Keep config reads and writes out of the real home directory."""
    config_path = tmp_path / "config" / "config.toml"
    with patch("wordminer.utils.config.get_config_path", return_value=config_path):
        yield config_path


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def dictionary_dir(temp_dir):
    """Create a dictionary folder with three good files and one broken one."""
    path = temp_dir / "dictionary"
    path.mkdir()
    (path / "1-middle-school.json").write_text(json.dumps(MIDDLE_SCHOOL_WORDS), encoding="utf-8")
    (path / "3-CET4.json").write_text(json.dumps(CET4_WORDS), encoding="utf-8")
    (path / "6-TOEFL.json").write_text(json.dumps(TOEFL_WORDS), encoding="utf-8")
    (path / "2-high-school.json").write_text("{not json", encoding="utf-8")
    (path / "README.txt").write_text("ignored", encoding="utf-8")
    return path


@pytest.fixture
def dictionary(dictionary_dir):
    """Dictionary loaded from the fixture folder."""
    return load_dictionary(dictionary_dir)


@pytest.fixture
def db_path(temp_dir):
    return temp_dir / "wordminer.db"


@pytest.fixture
def storage(db_path):
    """Fresh SQLite storage."""
    return SQLiteStorage(db_path)


@pytest.fixture
def miner(storage, dictionary):
    """WordMiner wired to the fixture storage and dictionary."""
    return WordMiner(storage, dictionary)


@pytest.fixture
def article_file(temp_dir):
    """A text article on disk."""
    path = temp_dir / "cats.txt"
    path.write_text(SCENARIO_TEXT, encoding="utf-8")
    return path
