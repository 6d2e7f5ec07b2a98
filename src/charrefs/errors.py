"""Exceptions raised by strict-mode encoding and decoding.

Non-strict calls never raise these; they fall back to the substitutions the
HTML Standard prescribes for each error (U+FFFD, the Windows-1252 overrides,
or leaving the text untouched).
"""


class CharacterReferenceError(ValueError):
    """Base class for all character reference errors."""

    def __init__(self, message):
        self.reason = message
        super().__init__(f"Parse error: {message}")


class ParseError(CharacterReferenceError):
    """Malformed or ambiguous reference syntax (missing `;`, stray `&`)."""


class MalformedDataError(ParseError):
    """A numeric reference opener `&#` that cannot start a valid escape."""


class OutOfRangeError(CharacterReferenceError):
    """A numeric reference to a surrogate or to a value above U+10FFFF."""


class ForbiddenCharacterError(CharacterReferenceError):
    """A code point that may not be referenced, or may not appear raw."""
