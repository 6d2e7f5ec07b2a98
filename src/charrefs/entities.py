"""HTML5 character reference tables.

Everything here is derived once, at import time, from Python's copy of the
WHATWG entity list (`html.entities.html5`, 2231 entries). Keys in that list
carry the trailing semicolon ("amp;") except for the legacy names that may
appear without one ("amp").

Tables:
    DECODE_MAP              name -> text, for references written with `;`
    DECODE_MAP_LEGACY       name -> character, for references without `;`
    DECODE_MAP_OVERRIDES    numeric reference -> substitute (§13.2.5.80)
    ENCODE_MAP              text -> shortest name
    ENCODE_PAIRED_SYMBOLS   the multi-code-point keys of ENCODE_MAP
    INVALID_REFERENCE_CODE_POINTS, INVALID_RAW_CODE_POINTS
"""

import html.entities
import logging

logger = logging.getLogger(__name__)

_HTML5_ENTITIES = html.entities.html5

DECODE_MAP = {}
DECODE_MAP_LEGACY = {}
ENCODE_MAP = {}


def _uppercase_count(name):
    return sum(1 for ch in name if "A" <= ch <= "Z")


def _prefer(candidate, current):
    """Return True if `candidate` is a better encode name than `current`.

    Shorter names win; on equal length, fewer uppercase letters win.
    """
    if len(candidate) != len(current):
        return len(candidate) < len(current)
    return _uppercase_count(candidate) < _uppercase_count(current)


# Sorted so that full ties resolve the same way on every run
for _key in sorted(_HTML5_ENTITIES):
    _value = _HTML5_ENTITIES[_key]
    if not _key.endswith(";"):
        DECODE_MAP_LEGACY[_key] = _value
        continue
    _name = _key[:-1]
    DECODE_MAP[_name] = _value
    _current = ENCODE_MAP.get(_value)
    if _current is None or _prefer(_name, _current):
        ENCODE_MAP[_value] = _name

del _key, _value, _name, _current

ENCODE_PAIRED_SYMBOLS = tuple(sorted(text for text in ENCODE_MAP if len(text) > 1))


def _longest_first(names):
    # Longest first so regex alternation finds the longest name
    return tuple(sorted(names, key=lambda name: (-len(name), name)))


NAMED_REFERENCES = _longest_first(DECODE_MAP)
LEGACY_REFERENCES = _longest_first(DECODE_MAP_LEGACY)

# Numeric references the tokenizer replaces instead of decoding literally.
# U+0000 becomes U+FFFD; the C1 range is read as Windows-1252.
DECODE_MAP_OVERRIDES = {
    0x00: "\ufffd",  # NULL
    0x80: "\u20ac",  # EURO SIGN
    0x82: "\u201a",  # SINGLE LOW-9 QUOTATION MARK
    0x83: "\u0192",  # LATIN SMALL LETTER F WITH HOOK
    0x84: "\u201e",  # DOUBLE LOW-9 QUOTATION MARK
    0x85: "\u2026",  # HORIZONTAL ELLIPSIS
    0x86: "\u2020",  # DAGGER
    0x87: "\u2021",  # DOUBLE DAGGER
    0x88: "\u02c6",  # MODIFIER LETTER CIRCUMFLEX ACCENT
    0x89: "\u2030",  # PER MILLE SIGN
    0x8a: "\u0160",  # LATIN CAPITAL LETTER S WITH CARON
    0x8b: "\u2039",  # SINGLE LEFT-POINTING ANGLE QUOTATION MARK
    0x8c: "\u0152",  # LATIN CAPITAL LIGATURE OE
    0x8e: "\u017d",  # LATIN CAPITAL LETTER Z WITH CARON
    0x91: "\u2018",  # LEFT SINGLE QUOTATION MARK
    0x92: "\u2019",  # RIGHT SINGLE QUOTATION MARK
    0x93: "\u201c",  # LEFT DOUBLE QUOTATION MARK
    0x94: "\u201d",  # RIGHT DOUBLE QUOTATION MARK
    0x95: "\u2022",  # BULLET
    0x96: "\u2013",  # EN DASH
    0x97: "\u2014",  # EM DASH
    0x98: "\u02dc",  # SMALL TILDE
    0x99: "\u2122",  # TRADE MARK SIGN
    0x9a: "\u0161",  # LATIN SMALL LETTER S WITH CARON
    0x9b: "\u203a",  # SINGLE RIGHT-POINTING ANGLE QUOTATION MARK
    0x9c: "\u0153",  # LATIN SMALL LIGATURE OE
    0x9e: "\u017e",  # LATIN SMALL LETTER Z WITH CARON
    0x9f: "\u0178",  # LATIN CAPITAL LETTER Y WITH DIAERESIS
}

# U+FFFE and U+FFFF of every plane
_PLANE_END_NONCHARACTERS = frozenset(
    (plane << 16) | low for plane in range(17) for low in (0xFFFE, 0xFFFF)
)

# Noncharacters and controls other than ASCII whitespace. U+000D counts here
# because a numeric reference to it is a control-character-reference error.
INVALID_REFERENCE_CODE_POINTS = frozenset(
    [*range(0x01, 0x09), 0x0B, *range(0x0D, 0x20), *range(0x7F, 0xA0), *range(0xFDD0, 0xFDF0)]
) | _PLANE_END_NONCHARACTERS

# Code points that may not appear raw in an input stream. Unlike the reference
# set this excludes U+000D.
INVALID_RAW_CODE_POINTS = frozenset(
    [*range(0x01, 0x09), 0x0B, *range(0x0E, 0x20), *range(0x7F, 0xA0), *range(0xFDD0, 0xFDF0)]
) | _PLANE_END_NONCHARACTERS

logger.debug(
    "Loaded %d named references (%d legacy), %d encodable symbols (%d paired)",
    len(DECODE_MAP),
    len(DECODE_MAP_LEGACY),
    len(ENCODE_MAP),
    len(ENCODE_PAIRED_SYMBOLS),
)
