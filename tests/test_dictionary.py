"""Tests for wordminer.dictionary.loader module."""

import json
import logging

from wordminer.dictionary.loader import (
    Dictionary,
    TierSource,
    discover_sources,
    load_dictionary,
    merge_sources,
    normalize_headword,
    parse_record,
    read_source,
    tier_for_filename,
)
from wordminer.models import DictionaryEntry, Phrase, Tier, Translation


class TestParseRecord:
    """Tests for parse_record function."""

    def test_full_record(self):
        """Test translations and phrases are carried over."""
        entry = parse_record(
            {
                "word": "Run",
                "translations": [{"translation": "跑", "type": "v"}],
                "phrases": [{"phrase": "run out", "translation": "用完"}],
            },
            Tier.MIDDLE_SCHOOL,
        )
        assert entry == DictionaryEntry(
            lemma="run",
            tier=Tier.MIDDLE_SCHOOL,
            translations=(Translation("跑", "v"),),
            phrases=(Phrase("run out", "用完"),),
        )

    def test_headword_trimmed_and_lowercased(self):
        """Test the lemma key is normalized."""
        assert parse_record({"word": "  Abandon "}, Tier.CET4).lemma == "abandon"

    def test_missing_word(self):
        """Test records without a word are rejected."""
        assert parse_record({"translations": []}, Tier.CET4) is None
        assert parse_record({"word": "   "}, Tier.CET4) is None
        assert parse_record({"word": 42}, Tier.CET4) is None

    def test_not_a_mapping(self):
        """Test non-object records are rejected."""
        assert parse_record("run", Tier.CET4) is None
        assert parse_record(None, Tier.CET4) is None

    def test_malformed_lists_become_empty(self):
        """Test bad translation/phrase fields degrade to empty tuples."""
        entry = parse_record(
            {"word": "x", "translations": "oops", "phrases": [1, {"phrase": "p"}]},
            Tier.SAT,
        )
        assert entry.translations == ()
        assert entry.phrases == (Phrase("p", ""),)


class TestMergeSources:
    """Tests for merge_sources function."""

    def test_first_tier_wins(self):
        """Test a word listed in two tiers keeps the earlier tier."""
        dictionary = merge_sources([
            TierSource(Tier.MIDDLE_SCHOOL, [{"word": "run"}]),
            TierSource(Tier.CET6, [{"word": "run", "translations": [{"translation": "t"}]}]),
        ])
        entry = dictionary["run"]
        assert entry.tier == Tier.MIDDLE_SCHOOL
        assert entry.translations == ()

    def test_first_tier_wins_within_a_tier(self):
        """Test duplicates inside one source keep the first record."""
        dictionary = merge_sources([
            TierSource(Tier.CET4, [{"word": "a", "phrases": [{"phrase": "1"}]}, {"word": "A"}]),
        ])
        assert dictionary["a"].phrases == (Phrase("1", ""),)

    def test_malformed_records_skipped(self):
        """Test bad records do not abort the merge."""
        dictionary = merge_sources([
            TierSource(Tier.CET4, ["junk", {"word": ""}, {"word": "ok"}]),
        ])
        assert list(dictionary) == ["ok"]

    def test_no_sources(self):
        """Test merging nothing gives an empty dictionary."""
        assert len(merge_sources([])) == 0


class TestDictionary:
    """Tests for Dictionary mapping."""

    def test_get_is_exact(self):
        """Test get does not normalize its key."""
        dictionary = merge_sources([TierSource(Tier.CET4, [{"word": "run"}])])
        assert dictionary.get("run") is not None
        assert dictionary.get("Run") is None
        assert dictionary.get(" run") is None

    def test_lookup_normalizes(self):
        """Test lookup trims and lowercases the headword."""
        dictionary = merge_sources([TierSource(Tier.CET4, [{"word": "run"}])])
        assert dictionary.lookup("  RUN ").lemma == "run"
        assert dictionary.lookup(None) is None

    def test_tier_of(self):
        """Test tier_of falls back to UNKNOWN."""
        dictionary = merge_sources([TierSource(Tier.TOEFL, [{"word": "ubiquitous"}])])
        assert dictionary.tier_of("ubiquitous") == Tier.TOEFL
        assert dictionary.tier_of("xylograph") == Tier.UNKNOWN

    def test_is_read_only(self):
        """Test the mapping cannot be mutated."""
        dictionary = Dictionary.empty()
        assert not hasattr(dictionary, "__setitem__")

    def test_empty(self):
        """Test the empty dictionary."""
        dictionary = Dictionary.empty()
        assert len(dictionary) == 0
        assert dictionary.get("anything") is None


class TestFileDiscovery:
    """Tests for tier_for_filename and discover_sources."""

    def test_tier_for_filename(self):
        """Test each difficulty prefix maps to its tier."""
        assert tier_for_filename("1-middle-school.json") == Tier.MIDDLE_SCHOOL
        assert tier_for_filename("2-high-school.json") == Tier.HIGH_SCHOOL
        assert tier_for_filename("3-CET4.json") == Tier.CET4
        assert tier_for_filename("4-CET6.json") == Tier.CET6
        assert tier_for_filename("5-postgraduate.json") == Tier.POSTGRADUATE
        assert tier_for_filename("6-TOEFL.json") == Tier.TOEFL
        assert tier_for_filename("7-SAT.json") == Tier.SAT
        assert tier_for_filename("extra.json") == Tier.UNKNOWN

    def test_discover_orders_easiest_first(self, temp_dir):
        """Test files come back in difficulty order regardless of disk order."""
        for name in ["7-SAT.json", "extra.json", "3-CET4.json", "1-middle-school.json", "notes.txt"]:
            (temp_dir / name).write_text("[]")
        names = [p.name for p in discover_sources(temp_dir)]
        assert names == ["1-middle-school.json", "3-CET4.json", "7-SAT.json", "extra.json"]

    def test_discover_missing_dir(self, temp_dir):
        """Test a missing directory yields no files."""
        assert discover_sources(temp_dir / "missing") == []

    def test_read_source_not_a_list(self, temp_dir, caplog):
        """Test a JSON object root is skipped with a warning."""
        path = temp_dir / "1-middle-school.json"
        path.write_text(json.dumps({"word": "run"}))
        with caplog.at_level(logging.WARNING):
            assert read_source(path) is None
        assert "not a list" in caplog.text

    def test_read_source_bad_json(self, temp_dir):
        """Test unparsable files are skipped."""
        path = temp_dir / "3-CET4.json"
        path.write_text("{not json")
        assert read_source(path) is None


class TestLoadDictionary:
    """Tests for load_dictionary function."""

    def test_loads_fixture_folder(self, dictionary):
        """Test every good record from every good file is loaded."""
        assert sorted(dictionary) == [
            "abandon", "and", "cat", "dog", "run", "study", "the", "ubiquitous",
        ]

    def test_cross_tier_duplicate(self, dictionary):
        """Test 'Run' in CET-4 does not override the middle school entry."""
        entry = dictionary["run"]
        assert entry.tier == Tier.MIDDLE_SCHOOL
        assert entry.translations == (Translation("跑", "v"),)

    def test_entry_details(self, dictionary):
        """Test nested translation and phrase data survives loading."""
        cat = dictionary["cat"]
        assert cat.translations == (Translation("猫", "n"),)
        assert cat.phrases == (Phrase("cat nap", "小睡"),)
        assert dictionary["ubiquitous"].translations == ()

    def test_tier_sizes(self, dictionary):
        """Test per-tier counts include empty tiers."""
        sizes = dictionary.tier_sizes()
        assert list(sizes) == Tier.ordered()
        assert sizes[Tier.MIDDLE_SCHOOL] == 5
        assert sizes[Tier.HIGH_SCHOOL] == 0
        assert sizes[Tier.CET4] == 2
        assert sizes[Tier.TOEFL] == 1
        assert sum(sizes.values()) == len(dictionary)

    def test_missing_directory(self, temp_dir, caplog):
        """Test a missing folder gives an empty dictionary and a warning."""
        with caplog.at_level(logging.WARNING):
            dictionary = load_dictionary(temp_dir / "nowhere")
        assert len(dictionary) == 0
        assert "not found" in caplog.text

    def test_broken_file_skipped(self, dictionary_dir, caplog):
        """Test the unparsable high school file is reported and skipped."""
        with caplog.at_level(logging.WARNING):
            dictionary = load_dictionary(dictionary_dir)
        assert "2-high-school.json" in caplog.text
        assert dictionary.tier_sizes()[Tier.HIGH_SCHOOL] == 0


class TestNormalizeHeadword:
    """Tests for normalize_headword function."""

    def test_normalize(self):
        assert normalize_headword("  Hello ") == "hello"
        assert normalize_headword(None) == ""
