"""Tests for the entity and code point tables."""

import unittest

from charrefs.entities import (
    DECODE_MAP,
    DECODE_MAP_LEGACY,
    DECODE_MAP_OVERRIDES,
    ENCODE_MAP,
    ENCODE_PAIRED_SYMBOLS,
    INVALID_RAW_CODE_POINTS,
    INVALID_REFERENCE_CODE_POINTS,
    LEGACY_REFERENCES,
    NAMED_REFERENCES,
)


class TestDecodeTables(unittest.TestCase):
    def test_sizes(self):
        assert len(DECODE_MAP) == 2125
        assert len(DECODE_MAP_LEGACY) == 106

    def test_names_have_no_semicolon(self):
        assert not any(name.endswith(";") for name in DECODE_MAP)
        assert not any(name.endswith(";") for name in DECODE_MAP_LEGACY)

    def test_legacy_names_also_decode_with_semicolon(self):
        for name, value in DECODE_MAP_LEGACY.items():
            with self.subTest(name=name):
                assert DECODE_MAP[name] == value

    def test_lookups(self):
        assert DECODE_MAP["amp"] == "&"
        assert DECODE_MAP["NotEqualTilde"] == "\u2242\u0338"
        assert DECODE_MAP_LEGACY["not"] == "\xac"
        assert "notin" not in DECODE_MAP_LEGACY

    def test_longest_names_first(self):
        assert len(NAMED_REFERENCES[0]) == max(len(name) for name in DECODE_MAP)
        assert len(LEGACY_REFERENCES[-1]) == min(len(name) for name in DECODE_MAP_LEGACY)
        assert NAMED_REFERENCES.index("notin") < NAMED_REFERENCES.index("not")


class TestEncodeTable(unittest.TestCase):
    def test_shortest_name_wins(self):
        assert ENCODE_MAP["\xa0"] == "nbsp"
        assert ENCODE_MAP["["] == "lsqb"
        assert ENCODE_MAP["\u2242\u0338"] == "nesim"

    def test_fewer_uppercase_letters_win_ties(self):
        assert ENCODE_MAP["&"] == "amp"
        assert ENCODE_MAP["<"] == "lt"

    def test_every_name_decodes_back(self):
        for text, name in ENCODE_MAP.items():
            with self.subTest(name=name):
                assert DECODE_MAP[name] == text

    def test_paired_symbols(self):
        assert all(len(text) > 1 for text in ENCODE_PAIRED_SYMBOLS)
        assert "fj" in ENCODE_PAIRED_SYMBOLS
        assert "\u2242\u0338" in ENCODE_PAIRED_SYMBOLS
        assert set(ENCODE_PAIRED_SYMBOLS) == {text for text in ENCODE_MAP if len(text) > 1}


class TestCodePointTables(unittest.TestCase):
    def test_overrides(self):
        assert DECODE_MAP_OVERRIDES[0x00] == "\ufffd"
        assert DECODE_MAP_OVERRIDES[0x80] == "\u20ac"
        assert 0x81 not in DECODE_MAP_OVERRIDES
        assert len(DECODE_MAP_OVERRIDES) == 28

    def test_reference_and_raw_sets_differ(self):
        assert 0x0D in INVALID_REFERENCE_CODE_POINTS
        assert 0x0D not in INVALID_RAW_CODE_POINTS
        assert 0x00 not in INVALID_RAW_CODE_POINTS
        assert 0x00 not in INVALID_REFERENCE_CODE_POINTS

    def test_shared_members(self):
        for code in (0x01, 0x0B, 0x7F, 0x9F, 0xFDD0, 0xFDEF, 0xFFFE, 0x1FFFF, 0x10FFFF):
            with self.subTest(code=hex(code)):
                assert code in INVALID_REFERENCE_CODE_POINTS
                assert code in INVALID_RAW_CODE_POINTS

    def test_whitespace_is_allowed(self):
        for code in (0x09, 0x0A, 0x0C, 0x20):
            with self.subTest(code=hex(code)):
                assert code not in INVALID_REFERENCE_CODE_POINTS
                assert code not in INVALID_RAW_CODE_POINTS
