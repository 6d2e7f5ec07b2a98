"""Encoding text with character references.

`encode()` runs a fixed sequence of global substitutions. Which ones run
depends on the options:

    encode_everything     every ASCII symbol, then (named) non-ASCII symbols
    use_named_references  unsafe symbols by name, then non-ASCII symbols by name
    default               unsafe symbols as numeric escapes

After that, astral symbols and every remaining BMP symbol that is not
printable ASCII or a newline are escaped numerically in all modes.
With `encode_everything` and named references, the hexadecimal pair
`&#x66;&#x6A;` becomes `&fjlig;`; decimal output keeps `&#102;&#106;`.
"""

import re

from .codepoints import (
    ASCII_WHITELIST,
    ASTRAL_RANGE,
    BMP_WHITELIST,
    SURROGATE_PAIR_PATTERN,
    CodePointRangeSet,
    has_invalid_raw_code_point,
)
from .entities import ENCODE_MAP, ENCODE_PAIRED_SYMBOLS
from .errors import ForbiddenCharacterError
from .escape import ESCAPE_RE
from .options import ENCODE_DEFAULTS, resolve_options

_ENCODE_NON_ASCII_SINGLES = CodePointRangeSet.from_code_points(
    ord(text) for text in ENCODE_MAP if len(text) == 1
).difference(CodePointRangeSet([(0x00, 0x7F)]))

# Paired symbols first: U+2242 U+0338 (&nesim;) must win over U+2242 alone
ENCODE_NON_ASCII_RE = re.compile(
    "|".join(
        [re.escape(text) for text in ENCODE_PAIRED_SYMBOLS if not text.isascii()]
        + [_ENCODE_NON_ASCII_SINGLES.to_pattern()]
    )
)
ASCII_WHITELIST_RE = re.compile(ASCII_WHITELIST.to_pattern())
ASTRAL_RE = re.compile(f"{SURROGATE_PAIR_PATTERN}|{ASTRAL_RANGE.to_pattern()}")
BMP_WHITELIST_RE = re.compile(BMP_WHITELIST.to_pattern())

# Two-symbol references whose first symbol was already escaped on its own
_LINE_OVERLAY_SHORTCUTS = (
    ("&gt;\u20d2", "&nvgt;"),
    ("&lt;\u20d2", "&nvlt;"),
)

# Only the hexadecimal escapes of `fj` are folded into `&fjlig;`
_EVERYTHING_SHORTCUTS = (*_LINE_OVERLAY_SHORTCUTS, ("&#x66;&#x6A;", "&fjlig;"))


def hex_escape(code_point):
    return f"&#x{code_point:X};"


def decimal_escape(code_point):
    return f"&#{code_point};"


def _named_reference(match):
    return f"&{ENCODE_MAP[match.group()]};"


def _astral_code_point(symbol):
    if len(symbol) == 2:
        high, low = ord(symbol[0]), ord(symbol[1])
        return (high - 0xD800) * 0x400 + low - 0xDC00 + 0x10000
    return ord(symbol)


def _apply_shortcuts(text, shortcuts):
    for sequence, reference in shortcuts:
        text = text.replace(sequence, reference)
    return text


def encode(text, options=None, **overrides):
    """Replace symbols in `text` with character references.

    Args:
        text: the text to encode
        options: an EncodeOptions; keyword overrides (`encode_everything`,
            `use_named_references`, `allow_unsafe_symbols`, `strict`,
            `decimal`) are applied on top of it

    Raises:
        ForbiddenCharacterError: strict mode and `text` holds a code point that
            may not appear in HTML

    Returns:
        str: the encoded text
    """
    if not isinstance(text, str):
        raise TypeError(f"encode() expects str, got {type(text).__name__}")
    options = resolve_options(options, ENCODE_DEFAULTS, overrides)
    if options.strict and has_invalid_raw_code_point(text):
        raise ForbiddenCharacterError("forbidden code point")

    escape_code_point = decimal_escape if options.decimal else hex_escape
    use_named_references = options.use_named_references

    def escape_bmp_symbol(match):
        return escape_code_point(ord(match.group()))

    if options.encode_everything:

        def encode_ascii(match):
            symbol = match.group()
            if use_named_references and symbol in ENCODE_MAP:
                return f"&{ENCODE_MAP[symbol]};"
            return escape_code_point(ord(symbol))

        text = ASCII_WHITELIST_RE.sub(encode_ascii, text)
        if use_named_references:
            text = _apply_shortcuts(text, _EVERYTHING_SHORTCUTS)
            text = ENCODE_NON_ASCII_RE.sub(_named_reference, text)
    elif use_named_references:
        if not options.allow_unsafe_symbols:
            text = ESCAPE_RE.sub(_named_reference, text)
        text = _apply_shortcuts(text, _LINE_OVERLAY_SHORTCUTS)
        text = ENCODE_NON_ASCII_RE.sub(_named_reference, text)
    elif not options.allow_unsafe_symbols:
        text = ESCAPE_RE.sub(escape_bmp_symbol, text)

    text = ASTRAL_RE.sub(lambda match: escape_code_point(_astral_code_point(match.group())), text)
    return BMP_WHITELIST_RE.sub(escape_bmp_symbol, text)
