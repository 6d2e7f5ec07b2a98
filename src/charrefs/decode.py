"""HTML5 character reference decoding.

Implements the character reference state of the WHATWG tokenizer (§13.2.5.72
onwards) over a flat string. A single composite regex finds every reference;
its alternatives are tried in this order:

    1. named reference terminated by `;`          &amp;  &NotEqualTilde;
    2. legacy reference without `;`, one lookahead &amp   &notit
    3. decimal reference                          &#38;  &#38
    4. hexadecimal reference                      &#x26; &#X26
    5. ambiguous ampersand                        &foo
"""

import re

from .codepoints import MAX_CODE_POINT, is_surrogate, resolve_override
from .entities import DECODE_MAP, DECODE_MAP_LEGACY, INVALID_REFERENCE_CODE_POINTS, LEGACY_REFERENCES, NAMED_REFERENCES
from .errors import ForbiddenCharacterError, MalformedDataError, OutOfRangeError, ParseError
from .options import DECODE_DEFAULTS, resolve_options

_NAMED_REFERENCE_SOURCE = "&(?P<named>" + "|".join(NAMED_REFERENCES) + ");"
_LEGACY_REFERENCE_SOURCE = "&(?P<legacy>" + "|".join(LEGACY_REFERENCES) + ")(?!;)(?P<next>[=a-zA-Z0-9]?)"
_DECIMAL_ESCAPE_SOURCE = "&#(?P<decimal>[0-9]+)(?P<decimal_semicolon>;?)"
_HEXADECIMAL_ESCAPE_SOURCE = "&#[xX](?P<hexadecimal>[a-fA-F0-9]+)(?P<hexadecimal_semicolon>;?)"
_AMBIGUOUS_AMPERSAND_SOURCE = "&(?P<ambiguous>[0-9a-zA-Z]+)"

DECODE_RE = re.compile(
    "|".join(
        (
            _NAMED_REFERENCE_SOURCE,
            _LEGACY_REFERENCE_SOURCE,
            _DECIMAL_ESCAPE_SOURCE,
            _HEXADECIMAL_ESCAPE_SOURCE,
            _AMBIGUOUS_AMPERSAND_SOURCE,
        )
    )
)

# `&#` followed by something that can't start a numeric reference
_INVALID_ENTITY_RE = re.compile(r"&#(?:[xX][^a-fA-F0-9]|[^0-9xX])")

# Longest digit strings (leading zeros stripped) that can still be <= U+10FFFF
_MAX_DIGITS = {10: len(str(MAX_CODE_POINT)), 16: len(f"{MAX_CODE_POINT:x}")}


def parse_code_point(digits, base):
    """Parse a reference's digits, clamping absurdly long values.

    Anything too long to be a code point comes back as MAX_CODE_POINT + 1
    without converting the whole string.
    """
    digits = digits.lstrip("0")
    if len(digits) > _MAX_DIGITS[base]:
        return MAX_CODE_POINT + 1
    return int(digits or "0", base)


def code_point_to_symbol(code_point, strict=False):
    """Resolve the value of a numeric character reference.

    Args:
        code_point: the referenced number
        strict: raise instead of substituting

    Raises:
        OutOfRangeError: surrogate or > U+10FFFF, in strict mode
        ForbiddenCharacterError: override or disallowed code point, in strict mode

    Returns:
        str: the character the reference stands for
    """
    if is_surrogate(code_point) or code_point > MAX_CODE_POINT:
        if strict:
            raise OutOfRangeError("character reference outside the permissible Unicode range")
        return "\ufffd"
    override = resolve_override(code_point)
    if override is not None:
        if strict:
            raise ForbiddenCharacterError("disallowed character reference")
        return override
    if strict and code_point in INVALID_REFERENCE_CODE_POINTS:
        raise ForbiddenCharacterError("disallowed character reference")
    return chr(code_point)


def _decode_match(match, options):
    named = match.group("named")
    if named is not None:
        return DECODE_MAP[named]

    legacy = match.group("legacy")
    if legacy is not None:
        next_char = match.group("next")
        # In attributes, `&amp=` and `&ampx` stay as written (§13.2.5.73)
        if next_char and options.is_attribute_value:
            if options.strict and next_char == "=":
                raise ParseError("`&` did not start a character reference")
            return match.group(0)
        if options.strict:
            raise ParseError("named character reference was not terminated by a semicolon")
        return DECODE_MAP_LEGACY[legacy] + next_char

    digits = match.group("decimal")
    if digits is not None:
        if options.strict and not match.group("decimal_semicolon"):
            raise ParseError("character reference was not terminated by a semicolon")
        return code_point_to_symbol(parse_code_point(digits, 10), options.strict)

    digits = match.group("hexadecimal")
    if digits is not None:
        if options.strict and not match.group("hexadecimal_semicolon"):
            raise ParseError("character reference was not terminated by a semicolon")
        return code_point_to_symbol(parse_code_point(digits, 16), options.strict)

    # Only the ambiguous ampersand is left
    if options.strict:
        raise ParseError("ambiguous ampersand in strict mode")
    return match.group(0)


def decode(html, options=None, **overrides):
    """Decode every character reference in `html`.

    Args:
        html: text possibly containing references
        options: a DecodeOptions; keyword overrides (`is_attribute_value`,
            `strict`) are applied on top of it

    Raises:
        ParseError, OutOfRangeError, ForbiddenCharacterError: in strict mode only

    Returns:
        str: the decoded text
    """
    if not isinstance(html, str):
        raise TypeError(f"decode() expects str, got {type(html).__name__}")
    options = resolve_options(options, DECODE_DEFAULTS, overrides)
    if options.strict and _INVALID_ENTITY_RE.search(html):
        raise MalformedDataError("malformed character reference")
    if "&" not in html:
        return html
    return DECODE_RE.sub(lambda match: _decode_match(match, options), html)


unescape = decode
