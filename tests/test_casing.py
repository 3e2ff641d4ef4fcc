"""
Tests for letter-case detection and transformation.

Run with: pytest tests/test_casing.py -v
"""

import pytest

from tehthu.casing import CaseType, apply, classify


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize("word,expected", [
        ("A", CaseType.CAPS),
        ("Ab", CaseType.PROPER),
        ("aB", CaseType.MIXED),
        ("-*+A", CaseType.CAPS),
        ("", CaseType.NULL),
        (None, CaseType.NULL),
    ])
    def test_reference_table(self, word, expected):
        """Single letters, symbols and empty input classify as expected."""
        assert classify(word) is expected

    def test_common_words(self):
        assert classify("HELLO") is CaseType.CAPS
        assert classify("Hello") is CaseType.PROPER
        assert classify("hello") is CaseType.LOWER
        assert classify("hEllo") is CaseType.MIXED
        assert classify("iPhone") is CaseType.MIXED

    def test_symbols_ignored(self):
        """Only letters decide the case."""
        assert classify('"Hello,"') is CaseType.PROPER
        assert classify("don't") is CaseType.LOWER
        assert classify("123") is CaseType.NULL
        assert classify("?!") is CaseType.NULL

    def test_non_ascii_letters(self):
        assert classify("Días") is CaseType.PROPER
        assert classify("ÉTÉ") is CaseType.CAPS


class TestApply:
    """Tests for apply()."""

    def test_caps(self):
        assert apply("hola", CaseType.CAPS) == "HOLA"

    def test_lower(self):
        assert apply("HoLa", CaseType.LOWER) == "hola"

    def test_proper(self):
        assert apply("hOLA", CaseType.PROPER) == "Hola"
        assert apply("buenos días", CaseType.PROPER) == "Buenos días"

    def test_proper_skips_leading_symbols(self):
        assert apply("¿qué", CaseType.PROPER) == "¿Qué"

    def test_mixed_is_unchanged(self):
        assert apply("iPhone", CaseType.MIXED) == "iPhone"

    def test_null(self):
        """NULL and None input both yield None."""
        assert apply("hola", CaseType.NULL) is None
        assert apply(None, CaseType.CAPS) is None

    @pytest.mark.parametrize("case_type", [CaseType.CAPS, CaseType.PROPER, CaseType.LOWER])
    def test_apply_then_classify(self, case_type):
        """Applying a case to a multi-letter word makes it classify as that case."""
        assert classify(apply("hola", case_type)) is case_type
