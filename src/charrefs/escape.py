"""Minimal escaping for embedding text in HTML.

Independent of `encode()`: always the same six replacements, no options.
`>` only needs escaping inside tags and unquoted attribute values, and the
backtick can end an attribute value in old Internet Explorer, so both are
covered here for markup and XML alike.
"""

import re

ESCAPE_MAP = {
    '"': "&quot;",
    "&": "&amp;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "`": "&#x60;",
}

ESCAPE_RE = re.compile("[\"&'<>`]")


def escape(text):
    """Escape `"&'<>` and backtick. Not idempotent: `&` is escaped again."""
    if not isinstance(text, str):
        raise TypeError(f"escape() expects str, got {type(text).__name__}")
    return ESCAPE_RE.sub(lambda match: ESCAPE_MAP[match.group()], text)
