"""Feature dictionary unit tests"""
import textwrap

import pytest
from sticker_sync.core.exceptions import FeatureDictionaryException
from sticker_sync.dictionary import (
    FeatureDictionary,
    clear_feature_dictionary_cache,
    load_feature_dictionary,
)


class TestFeatureDictionary:
    """Forward and reverse lookups"""

    def test_aliases_in_preference_order(self, small_dictionary):
        assert small_dictionary.aliases_of("Backup Camera") == ["Rear View Camera", "Backup Camera"]

    def test_lookup_case_insensitive(self, small_dictionary):
        assert small_dictionary.aliases_of("  backup CAMERA ") == ["Rear View Camera", "Backup Camera"]

    def test_unknown_feature(self, small_dictionary):
        assert small_dictionary.aliases_of("Jet Pack") == []
        assert small_dictionary.canonicals_of("Jet Pack") == []

    def test_reverse_lookup(self, small_dictionary):
        assert small_dictionary.canonicals_of("rear view camera") == ["Backup Camera"]

    def test_reverse_lookup_several_canonicals(self):
        dictionary = FeatureDictionary({
            "Heated Seats": ["Heated Seats", "Seat Heater"],
            "Heated Front Seats": ["Heated Seats"],
        })
        assert dictionary.canonicals_of("Heated Seats") == ["Heated Seats", "Heated Front Seats"]

    def test_returned_lists_are_copies(self, small_dictionary):
        """Callers cannot mutate the dictionary through results"""
        aliases = small_dictionary.aliases_of("Sunroof")
        aliases.append("Glass Roof")
        assert small_dictionary.aliases_of("Sunroof") == ["Sunroof", "Moonroof"]

    def test_duplicate_aliases_collapse(self):
        dictionary = FeatureDictionary({"Sunroof": ["Sunroof", "SUNROOF", "Moonroof"]})
        assert dictionary.aliases_of("Sunroof") == ["Sunroof", "Moonroof"]

    def test_single_string_alias(self):
        dictionary = FeatureDictionary({"Android Auto": "Android Auto"})
        assert dictionary.aliases_of("Android Auto") == ["Android Auto"]

    def test_container_protocol(self, small_dictionary):
        assert "sunroof" in small_dictionary
        assert "Moonroof" not in small_dictionary
        assert 42 not in small_dictionary
        assert len(small_dictionary) == 3
        assert small_dictionary.canonical_names() == ["Backup Camera", "Bluetooth Connectivity", "Sunroof"]

    def test_empty(self):
        dictionary = FeatureDictionary.empty()
        assert len(dictionary) == 0
        assert dictionary.aliases_of("Sunroof") == []


class TestFeatureDictionaryInvariants:
    """Construction rejects broken tables"""

    def test_empty_alias_list(self):
        with pytest.raises(FeatureDictionaryException) as exc_info:
            FeatureDictionary({"Sunroof": []})
        assert exc_info.value.error_code == "FEATURE_DICTIONARY_ERROR"

    def test_blank_aliases_only(self):
        with pytest.raises(FeatureDictionaryException):
            FeatureDictionary({"Sunroof": ["  ", ""]})

    def test_duplicate_canonical(self):
        """Canonical names are unique case-insensitively"""
        with pytest.raises(FeatureDictionaryException):
            FeatureDictionary({"Sunroof": ["Sunroof"], "SUNROOF": ["Moonroof"]})

    def test_empty_canonical(self):
        with pytest.raises(FeatureDictionaryException):
            FeatureDictionary({"  ": ["Sunroof"]})


class TestBundledDictionary:
    """resources/feature_dictionary.yaml"""

    def test_loads(self):
        dictionary = load_feature_dictionary()
        assert len(dictionary) > 50
        assert "Rear View Camera" in dictionary.aliases_of("Backup Camera")

    def test_reverse_index_complete(self):
        """Every alias maps back to each canonical that lists it"""
        dictionary = load_feature_dictionary()
        for canonical, aliases in dictionary.items():
            for alias in aliases:
                assert canonical in dictionary.canonicals_of(alias), (canonical, alias)

    def test_every_alias_list_non_empty(self):
        dictionary = load_feature_dictionary()
        assert all(aliases for _, aliases in dictionary.items())

    def test_cached(self):
        assert load_feature_dictionary() is load_feature_dictionary()

    def test_cache_clear(self):
        first = load_feature_dictionary()
        clear_feature_dictionary_cache()
        assert load_feature_dictionary() is not first


class TestDictionaryLoader:
    """Loading from arbitrary files"""

    def test_custom_file(self, tmp_path):
        path = tmp_path / "dictionary.yaml"
        path.write_text(textwrap.dedent("""
            mapping:
              Remote Start: [Remote Start, Remote Engine Start]
        """), encoding="utf-8")
        dictionary = load_feature_dictionary(str(path))
        assert dictionary.canonicals_of("remote engine start") == ["Remote Start"]

    def test_missing_file_gives_empty_dictionary(self, tmp_path):
        dictionary = load_feature_dictionary(str(tmp_path / "missing.yaml"))
        assert len(dictionary) == 0

    def test_malformed_entry_raises(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("mapping:\n  Sunroof: []\n", encoding="utf-8")
        with pytest.raises(FeatureDictionaryException):
            load_feature_dictionary(str(path))

    def test_mapping_not_a_dict(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("mapping:\n  - Sunroof\n", encoding="utf-8")
        assert len(load_feature_dictionary(str(path))) == 0
