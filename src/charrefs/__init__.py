from .decode import decode, unescape
from .encode import encode
from .errors import (
    CharacterReferenceError,
    ForbiddenCharacterError,
    MalformedDataError,
    OutOfRangeError,
    ParseError,
)
from .escape import escape
from .options import DecodeOptions, EncodeOptions

__version__ = "1.0.0"

__all__ = [
    "CharacterReferenceError",
    "DecodeOptions",
    "EncodeOptions",
    "ForbiddenCharacterError",
    "MalformedDataError",
    "OutOfRangeError",
    "ParseError",
    "__version__",
    "decode",
    "encode",
    "escape",
    "unescape",
]
