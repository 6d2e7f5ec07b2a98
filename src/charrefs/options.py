"""Immutable option sets for `decode()` and `encode()`.

Both functions take an optional options object plus keyword overrides:

    decode(text, DecodeOptions(strict=True))
    decode(text, strict=True)
    encode(text, ENCODE_DEFAULTS, use_named_references=True)

Overrides produce a new options value via `dataclasses.replace`; the module
level defaults are never modified.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace


@dataclass(frozen=True, slots=True)
class DecodeOptions:
    """Options for `charrefs.decode`.

    - `is_attribute_value`: the input is an attribute value. Legacy references
      followed by `=` or an alphanumeric are then left undecoded.
    - `strict`: raise on any parse error instead of recovering.
    """

    is_attribute_value: bool = False
    strict: bool = False

    def __post_init__(self) -> None:
        _coerce_flags(self)


@dataclass(frozen=True, slots=True)
class EncodeOptions:
    """Options for `charrefs.encode`.

    - `encode_everything`: escape every ASCII symbol, not just the unsafe ones.
    - `use_named_references`: prefer `&copy;` over `&#xA9;` where a name exists.
    - `allow_unsafe_symbols`: leave ``"&'<>` `` untouched.
    - `strict`: raise `ForbiddenCharacterError` on code points that may not
      appear in HTML.
    - `decimal`: emit `&#169;` instead of `&#xA9;`.
    """

    encode_everything: bool = False
    use_named_references: bool = False
    allow_unsafe_symbols: bool = False
    strict: bool = False
    decimal: bool = False

    def __post_init__(self) -> None:
        _coerce_flags(self)


def _coerce_flags(options) -> None:
    for f in fields(options):
        value = getattr(options, f.name)
        if not isinstance(value, bool):
            object.__setattr__(options, f.name, bool(value))


DECODE_DEFAULTS = DecodeOptions()
ENCODE_DEFAULTS = EncodeOptions()


def resolve_options(options, defaults, overrides):
    """Merge an optional options object with keyword overrides.

    Raises TypeError for an options object of the wrong type or an unknown
    override name.
    """
    if options is None:
        options = defaults
    elif not isinstance(options, type(defaults)):
        raise TypeError(f"expected {type(defaults).__name__}, got {type(options).__name__}")
    if overrides:
        options = replace(options, **overrides)
    return options
