"""Tests for code point classification and range sets."""

import re
import unittest

from charrefs.codepoints import (
    ASCII_WHITELIST,
    ASTRAL_RANGE,
    BMP_WHITELIST,
    AsciiCodePointSet,
    CodePointRangeSet,
    has_invalid_raw_code_point,
    is_ascii_safe,
    is_astral,
    is_bmp_whitelisted,
    is_invalid_raw,
    is_invalid_reference,
    is_surrogate,
    resolve_override,
)


class TestCodePointRangeSet(unittest.TestCase):
    def test_ranges_are_sorted_and_merged(self):
        ranges = CodePointRangeSet([(5, 10), (1, 3), (4, 4), (8, 12)])
        assert ranges.ranges == ((1, 12),)

    def test_from_code_points(self):
        ranges = CodePointRangeSet.from_code_points({7, 1, 2, 3, 9})
        assert ranges.ranges == ((1, 3), (7, 7), (9, 9))
        assert list(ranges) == [1, 2, 3, 7, 9]
        assert len(ranges) == 5

    def test_membership(self):
        ranges = CodePointRangeSet([(0x41, 0x5A), (0x61, 0x7A)])
        assert 0x41 in ranges
        assert 0x5A in ranges
        assert 0x60 not in ranges
        assert 0x7B not in ranges
        assert 0x00 not in ranges

    def test_difference(self):
        ranges = CodePointRangeSet([(0, 10), (20, 30)])
        removed = CodePointRangeSet([(2, 3), (5, 5), (9, 21), (30, 40)])
        assert ranges.difference(removed).ranges == ((0, 1), (4, 4), (6, 8), (22, 29))

    def test_union(self):
        ranges = CodePointRangeSet([(0, 3)]).union(CodePointRangeSet([(4, 6), (10, 10)]))
        assert ranges.ranges == ((0, 6), (10, 10))

    def test_to_pattern(self):
        ranges = CodePointRangeSet([(0x41, 0x43), (0x61, 0x62), (0xE9, 0xE9), (0x1D306, 0x1D306)])
        pattern = ranges.to_pattern()
        assert pattern == "[\\x41-\\x43\\x61\\x62\\xe9\\U0001d306]"
        assert re.findall(pattern, "ABCDab\xe9z\U0001d306") == ["A", "B", "C", "a", "b", "\xe9", "\U0001d306"]

    def test_empty_set_pattern_never_matches(self):
        empty = CodePointRangeSet()
        assert not empty
        assert re.search(empty.to_pattern(), "anything") is None

    def test_invalid_range(self):
        with self.assertRaises(ValueError):
            CodePointRangeSet([(10, 1)])

    def test_equality(self):
        assert CodePointRangeSet([(1, 2), (3, 4)]) == CodePointRangeSet([(1, 4)])
        assert CodePointRangeSet([(1, 2)]) != CodePointRangeSet([(1, 3)])


class TestAsciiCodePointSet(unittest.TestCase):
    def test_membership(self):
        chars = AsciiCodePointSet([0x41, 0x7F])
        assert 0x41 in chars
        assert 0x7F in chars
        assert 0x42 not in chars
        assert 0x141 not in chars

    def test_rejects_non_ascii(self):
        with self.assertRaises(ValueError):
            AsciiCodePointSet([0xE9])


class TestStaticRanges(unittest.TestCase):
    def test_ascii_whitelist_excludes_null(self):
        assert ASCII_WHITELIST.ranges == ((0x01, 0x7F),)

    def test_bmp_whitelist(self):
        for code in (0x01, 0x09, 0x0B, 0x7F, 0x81, 0xA0, 0xD800, 0xFFFF):
            with self.subTest(code=hex(code)):
                assert code in BMP_WHITELIST
                assert is_bmp_whitelisted(code)
        for code in (0x00, 0x0A, 0x0D, 0x20, 0x41, 0x7E, 0x80, 0x9F, 0x10000):
            with self.subTest(code=hex(code)):
                assert code not in BMP_WHITELIST
                assert not is_bmp_whitelisted(code)

    def test_astral_range(self):
        assert ASTRAL_RANGE.ranges == ((0x10000, 0x10FFFF),)


class TestClassifiers(unittest.TestCase):
    def test_is_ascii_safe(self):
        assert is_ascii_safe(ord("a"))
        assert is_ascii_safe(ord(" "))
        assert is_ascii_safe(ord("~"))
        for ch in "\"&'<>`":
            assert not is_ascii_safe(ord(ch))
        assert not is_ascii_safe(0x1F)
        assert not is_ascii_safe(0x7F)
        assert not is_ascii_safe(0xE9)

    def test_is_astral(self):
        assert is_astral(0x10000)
        assert is_astral(0x10FFFF)
        assert not is_astral(0xFFFF)

    def test_is_surrogate(self):
        assert is_surrogate(0xD800)
        assert is_surrogate(0xDFFF)
        assert not is_surrogate(0xD7FF)
        assert not is_surrogate(0xE000)

    def test_is_invalid_reference(self):
        for code in (0x01, 0x0B, 0x0D, 0x1F, 0x7F, 0x80, 0x9F, 0xD800, 0xFDD0, 0xFFFE, 0x2FFFF, 0x110000):
            with self.subTest(code=hex(code)):
                assert is_invalid_reference(code)
        for code in (0x00, 0x09, 0x0A, 0x0C, 0x20, 0xA0, 0xFFFD, 0x1D306):
            with self.subTest(code=hex(code)):
                assert not is_invalid_reference(code)

    def test_is_invalid_raw(self):
        assert is_invalid_raw(0x01)
        assert not is_invalid_raw(0x00)
        assert is_invalid_raw(0xDC00)
        assert not is_invalid_raw(0x0D)
        assert not is_invalid_raw(0x0A)

    def test_resolve_override(self):
        assert resolve_override(0x80) == "\u20ac"
        assert resolve_override(0x00) == "\ufffd"
        assert resolve_override(0x81) is None
        assert resolve_override(0x41) is None

    def test_has_invalid_raw_code_point(self):
        assert not has_invalid_raw_code_point("plain text \r\n\t")
        assert not has_invalid_raw_code_point("a\x00b")
        assert not has_invalid_raw_code_point("\U0001f600")
        assert has_invalid_raw_code_point("\ud83d")
        assert has_invalid_raw_code_point("\ude00x")
        assert has_invalid_raw_code_point("a\x0b")
        assert has_invalid_raw_code_point("\U0010fffe")
