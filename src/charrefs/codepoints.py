"""Code point classification.

Membership tests over the static ranges the encoder and decoder care about.
`CodePointRangeSet` stores closed intervals and can render itself as a regex
character class, so the same definition backs both `cp in SET` checks and the
compiled substitution patterns.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Iterable, Iterator

from .entities import DECODE_MAP_OVERRIDES, INVALID_RAW_CODE_POINTS, INVALID_REFERENCE_CODE_POINTS

MAX_CODE_POINT = 0x10FFFF
MAX_BMP_CODE_POINT = 0xFFFF
SURROGATE_START = 0xD800
SURROGATE_END = 0xDFFF

# `"&'<>` plus backtick, escaped unless the caller allows unsafe symbols
UNSAFE_SYMBOLS = "\"&'<>`"


class AsciiCodePointSet:
    """Bitmask set of ASCII code points."""

    __slots__ = ("_mask",)

    def __init__(self, code_points: Iterable[int]) -> None:
        mask = 0
        for code in code_points:
            if not 0 <= code < 128:
                raise ValueError(f"AsciiCodePointSet only supports ASCII, got {code:#x}")
            mask |= 1 << code
        self._mask = mask

    def __contains__(self, code: int) -> bool:
        if not 0 <= code < 128:
            return False
        return (self._mask >> code) & 1 == 1


def _escape_for_class(code: int) -> str:
    if code <= 0xFF:
        return f"\\x{code:02x}"
    if code <= MAX_BMP_CODE_POINT:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


class CodePointRangeSet:
    """Immutable set of code points stored as sorted, merged closed intervals."""

    __slots__ = ("_ranges", "_starts")

    def __init__(self, ranges: Iterable[tuple[int, int]] = ()) -> None:
        merged: list[tuple[int, int]] = []
        for start, end in sorted(ranges):
            if start > end:
                raise ValueError(f"Invalid range {start:#x}-{end:#x}")
            if merged and start <= merged[-1][1] + 1:
                if end > merged[-1][1]:
                    merged[-1] = (merged[-1][0], end)
            else:
                merged.append((start, end))
        self._ranges = tuple(merged)
        self._starts = tuple(start for start, _ in merged)

    @classmethod
    def from_code_points(cls, code_points: Iterable[int]) -> CodePointRangeSet:
        return cls((code, code) for code in code_points)

    @property
    def ranges(self) -> tuple[tuple[int, int], ...]:
        return self._ranges

    def __contains__(self, code: int) -> bool:
        index = bisect_right(self._starts, code) - 1
        return index >= 0 and code <= self._ranges[index][1]

    def __iter__(self) -> Iterator[int]:
        for start, end in self._ranges:
            yield from range(start, end + 1)

    def __len__(self) -> int:
        return sum(end - start + 1 for start, end in self._ranges)

    def __bool__(self) -> bool:
        return bool(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodePointRangeSet):
            return NotImplemented
        return self._ranges == other._ranges

    __hash__ = None  # Unhashable since we define __eq__

    def __repr__(self) -> str:
        parts = ", ".join(f"{start:#x}-{end:#x}" for start, end in self._ranges)
        return f"CodePointRangeSet({parts})"

    def union(self, other: CodePointRangeSet) -> CodePointRangeSet:
        return CodePointRangeSet(self._ranges + other._ranges)

    def difference(self, other: CodePointRangeSet) -> CodePointRangeSet:
        result: list[tuple[int, int]] = []
        for start, end in self._ranges:
            for other_start, other_end in other._ranges:
                if other_end < start:
                    continue
                if other_start > end:
                    break
                if other_start > start:
                    result.append((start, other_start - 1))
                start = other_end + 1
                if start > end:
                    break
            if start <= end:
                result.append((start, end))
        return CodePointRangeSet(result)

    def to_pattern(self) -> str:
        """Render as a regex character class, e.g. `[\\x01-\\x7f]`."""
        if not self._ranges:
            return "(?!)"
        parts = []
        for start, end in self._ranges:
            if start == end:
                parts.append(_escape_for_class(start))
            elif end == start + 1:
                parts.append(_escape_for_class(start) + _escape_for_class(end))
            else:
                parts.append(f"{_escape_for_class(start)}-{_escape_for_class(end)}")
        return "[" + "".join(parts) + "]"


OVERRIDE_CODE_POINTS = CodePointRangeSet.from_code_points(DECODE_MAP_OVERRIDES)

# All ASCII except the override keys (U+0000)
ASCII_WHITELIST = CodePointRangeSet([(0x00, 0x7F)]).difference(OVERRIDE_CODE_POINTS)

# All BMP code points except ASCII newlines, printable ASCII and override keys.
# Anything in here is escaped numerically by encode().
BMP_WHITELIST = (
    CodePointRangeSet([(0x0000, MAX_BMP_CODE_POINT)])
    .difference(CodePointRangeSet([(0x0A, 0x0A), (0x0D, 0x0D), (0x20, 0x7E)]))
    .difference(OVERRIDE_CODE_POINTS)
)

ASTRAL_RANGE = CodePointRangeSet([(MAX_BMP_CODE_POINT + 1, MAX_CODE_POINT)])
INVALID_RAW_RANGE = CodePointRangeSet.from_code_points(INVALID_RAW_CODE_POINTS)

_ASCII_SAFE = AsciiCodePointSet(code for code in range(0x20, 0x7F) if chr(code) not in UNSAFE_SYMBOLS)

# A surrogate that is not half of a well-formed pair
LONE_SURROGATE_PATTERN = r"[\ud800-\udbff](?![\udc00-\udfff])|(?<![\ud800-\udbff])[\udc00-\udfff]"
SURROGATE_PAIR_PATTERN = r"[\ud800-\udbff][\udc00-\udfff]"

INVALID_RAW_RE = re.compile(f"{INVALID_RAW_RANGE.to_pattern()}|{LONE_SURROGATE_PATTERN}")


def is_ascii_safe(code):
    """Printable ASCII that never needs escaping."""
    return code in _ASCII_SAFE


def is_bmp_whitelisted(code):
    return code in BMP_WHITELIST


def is_astral(code):
    return code > MAX_BMP_CODE_POINT


def is_surrogate(code):
    return SURROGATE_START <= code <= SURROGATE_END


def is_invalid_reference(code):
    """True if a numeric reference to `code` is a parse error."""
    return code in INVALID_REFERENCE_CODE_POINTS or is_surrogate(code) or code > MAX_CODE_POINT


def is_invalid_raw(code):
    """True if `code` may not appear unescaped in an HTML input stream."""
    return code in INVALID_RAW_CODE_POINTS or is_surrogate(code)


def resolve_override(code):
    return DECODE_MAP_OVERRIDES.get(code)


def has_invalid_raw_code_point(text):
    """Search `text` for a forbidden raw code point or a lone surrogate."""
    return INVALID_RAW_RE.search(text) is not None
