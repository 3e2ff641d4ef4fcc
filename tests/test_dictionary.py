"""
Tests for the in-memory bidirectional dictionary.

Run with: pytest tests/test_dictionary.py -v
"""

import pytest

from tehthu.log import DiagnosticsLog
from tehthu.translate import DictionaryNotFoundError, DictionarySource, DictionaryStore, Direction
from tehthu.translate.sources import MappingPair


class RowSource(DictionarySource):
    """In-memory source handing out prepared mapping pairs."""

    def __init__(self, path, pairs):
        super().__init__(path)
        self._pairs = pairs

    @property
    def format_name(self):
        return "rows"

    @property
    def row_count(self):
        return len(self._pairs)

    def next_config_line(self):
        return None

    def next_mapping(self):
        pair = self._pairs[self._index]
        self._index += 1
        return pair


@pytest.fixture
def store(spanish_dict):
    s = DictionaryStore(spanish_dict)
    assert s.reparse()
    return s


class TestParsing:
    """Tests for building tables from a file."""

    def test_language_names(self, store):
        assert store.left_name == "English"
        assert store.right_name == "Spanish"
        assert store.language_name(Direction.RIGHT_TO_LEFT) == "Spanish"

    def test_default_names_without_stanza(self, write_dict):
        s = DictionaryStore(write_dict("cat|gato\n"), left_name="Cat", right_name="Gato")
        s.reparse()
        assert (s.left_name, s.right_name) == ("Cat", "Gato")

    def test_lookup_case_insensitive(self, store):
        assert store.lookup("HELLO", Direction.LEFT_TO_RIGHT) == ["hola"]
        assert store.lookup("Hola", Direction.RIGHT_TO_LEFT) == ["hello"]
        assert store.lookup("zebra", Direction.LEFT_TO_RIGHT) is None

    def test_candidates_keep_original_case(self, store):
        assert store.lookup("iphone", Direction.LEFT_TO_RIGHT) == ["iPhone"]

    def test_symmetry(self, store):
        """Every left-to-right mapping has its right-to-left counterpart."""
        snap = store.snapshot
        for key, candidates in snap.ltr.items():
            for value in candidates:
                reverse = [c.lower() for c in snap.rtl[value.lower()]]
                assert key in reverse

    def test_ambiguity_keeps_file_order(self, store):
        assert store.lookup("bank", Direction.LEFT_TO_RIGHT) == ["banco", "orilla"]
        assert store.ambiguous_keys(Direction.LEFT_TO_RIGHT) == {"bank": ["banco", "orilla"]}
        assert store.ambiguous_keys(Direction.RIGHT_TO_LEFT) == {}

    def test_ambiguity_noted(self, spanish_dict):
        log = DiagnosticsLog()
        log.attach()
        DictionaryStore(spanish_dict, log=log).reparse()

        notes = [line for line in log.drain() if line.startswith("Note:")]
        assert len(notes) == 1
        assert "Multiple definitions for English word `bank'" in notes[0]
        assert "\tbanco\n" in notes[0] and "\torilla\n" in notes[0]

    def test_parse_brackets_info_lines(self, spanish_dict):
        log = DiagnosticsLog()
        log.attach()
        DictionaryStore(spanish_dict, log=log).reparse()

        lines = log.drain()
        assert lines[0] == "Info: Parsing plain text started."
        assert lines[-1] == "Info: Parsing complete."

    def test_stats(self, store):
        stats = store.stats()
        assert stats.ltr_entries == len(store) == 7
        assert stats.rtl_entries == 8
        assert stats.ltr_suffixes == stats.rtl_suffixes == 1
        assert stats.to_dict()["ltr_ambiguous"] == 1


class TestReparse:
    """Tests for rebuilding and switching files."""

    def test_reparse_is_idempotent(self, store):
        before = store.snapshot
        assert store.reparse()
        after = store.snapshot
        assert after is not before
        assert after == before

    def test_reparse_picks_up_edits(self, write_dict):
        path = write_dict("cat|gato\n")
        s = DictionaryStore(path)
        s.reparse()
        path.write_text("dog|perro\n", encoding="utf-8")
        s.reparse()

        assert s.lookup("cat", Direction.LEFT_TO_RIGHT) is None
        assert s.lookup("dog", Direction.LEFT_TO_RIGHT) == ["perro"]

    def test_set_file(self, store, write_dict):
        assert store.set_file(write_dict("[Cat] [Gato]\ncat|gato\n", "other.teh"))
        assert store.left_name == "Cat"
        assert store.lookup("hello", Direction.LEFT_TO_RIGHT) is None

    def test_set_file_missing(self, store, tmp_path):
        with pytest.raises(DictionaryNotFoundError):
            store.set_file(tmp_path / "missing.teh")
        assert store.lookup("hello", Direction.LEFT_TO_RIGHT) == ["hola"]

    def test_missing_file_at_construction(self, tmp_path):
        with pytest.raises(DictionaryNotFoundError):
            DictionaryStore(tmp_path / "missing.teh")

    def test_set_delimiter(self, write_dict):
        s = DictionaryStore(write_dict("cat;gato\n"))
        s.reparse()
        assert s.lookup("cat", Direction.LEFT_TO_RIGHT) is None
        assert s.set_delimiter(";")
        assert s.lookup("cat", Direction.LEFT_TO_RIGHT) == ["gato"]

    @pytest.mark.parametrize("delimiter", ["", None])
    def test_empty_delimiter_rejected(self, store, delimiter):
        with pytest.raises(ValueError):
            store.set_delimiter(delimiter)

    def test_unreadable_spreadsheet_leaves_store_empty(self, store, tmp_path, monkeypatch):
        pandas = pytest.importorskip("pandas")
        monkeypatch.setattr(pandas, "read_excel", lambda *args, **kwargs: {})
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"")
        log = DiagnosticsLog()
        log.attach()
        store.log = log

        assert store.set_file(path) is False
        assert len(store) == 0
        assert any(line.startswith("Critical error:") for line in log.drain())

    def test_one_sided_rows_skipped(self, store, spanish_dict):
        """A row without a right-hand side is reported, not inserted."""
        log = DiagnosticsLog()
        log.attach()
        store.log = log
        pairs = [MappingPair("solo", "", 1), MappingPair("cat", "gato", 2)]

        store.build(RowSource(spanish_dict, pairs))

        assert store.lookup("solo", Direction.LEFT_TO_RIGHT) is None
        assert store.lookup("cat", Direction.LEFT_TO_RIGHT) == ["gato"]
        assert store.stats().ltr_entries == 1
        assert store.ambiguous_keys(Direction.LEFT_TO_RIGHT) == {}
        warnings = [line for line in log.drain() if line.startswith("Warning:")]
        assert len(warnings) == 1
        assert "Line 1: Missing translation for `solo'" in warnings[0]


class TestSuffixRules:
    def test_longest_first(self, write_dict):
        s = DictionaryStore(write_dict("{s}|{es}\n{ning}|{iendo}\n{ing}|{ando}\n"))
        s.reparse()
        assert s.suffix_rules(Direction.LEFT_TO_RIGHT) == [
            ("ning", "iendo"), ("ing", "ando"), ("s", "es"),
        ]
        assert s.suffix_rules(Direction.RIGHT_TO_LEFT)[0] == ("iendo", "ning")

    def test_ties_keep_registration_order(self, write_dict):
        s = DictionaryStore(write_dict("{ed}|{ado}\n{er}|{or}\n"))
        s.reparse()
        assert [r[0] for r in s.suffix_rules(Direction.LEFT_TO_RIGHT)] == ["ed", "er"]

    def test_add_suffix_mapping(self, store):
        store.add_suffix_mapping("ed", "ado")
        assert ("ed", "ado") in store.suffix_rules(Direction.LEFT_TO_RIGHT)
        assert ("ado", "ed") in store.suffix_rules(Direction.RIGHT_TO_LEFT)


class TestDirection:
    def test_reverse(self):
        assert Direction.LEFT_TO_RIGHT.reverse is Direction.RIGHT_TO_LEFT
        assert Direction.RIGHT_TO_LEFT.reverse is Direction.LEFT_TO_RIGHT
