"""Command-line interface: `charrefs` / `python -m charrefs`.

    charrefs --escape '<img src="x">'
    charrefs --encode --use-named-refs 'foo © bar'
    echo '&lt;p&gt;' | charrefs --decode

Each TEXT argument is transformed and printed on its own line. Without TEXT,
standard input is transformed as a whole.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .decode import decode
from .encode import encode
from .errors import CharacterReferenceError
from .escape import escape
from .options import DecodeOptions, EncodeOptions

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="charrefs",
        description="Encode, decode or escape HTML character references",
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--escape", dest="action", action="store_const", const="escape", help="Escape the six unsafe symbols")
    action.add_argument("--encode", dest="action", action="store_const", const="encode", help="Encode text using character references")
    action.add_argument(
        "--decode", dest="action", action="store_const", const="decode", help="Decode character references (default)"
    )

    encoding = parser.add_argument_group("encode options")
    encoding.add_argument("--use-named-refs", action="store_true", help="Use named references where possible")
    encoding.add_argument("--everything", action="store_true", help="Encode every symbol, including printable ASCII")
    encoding.add_argument("--allow-unsafe", action="store_true", help="Leave \"&'<>` unencoded")
    encoding.add_argument("--decimal", action="store_true", help="Use decimal instead of hexadecimal escapes")

    decoding = parser.add_argument_group("decode options")
    decoding.add_argument("--attribute", action="store_true", help="Treat the input as an attribute value")

    parser.add_argument("--strict", action="store_true", help="Fail on parse errors instead of recovering")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("text", nargs="*", help="Text to process (default: read standard input)")
    parser.set_defaults(action="decode")
    return parser


def make_transform(args):
    """Return a one-argument function applying the action chosen in `args`."""
    if args.action == "escape":
        return escape
    if args.action == "encode":
        options = EncodeOptions(
            encode_everything=args.everything,
            use_named_references=args.use_named_refs,
            allow_unsafe_symbols=args.allow_unsafe,
            strict=args.strict,
            decimal=args.decimal,
        )
        return lambda text: encode(text, options)
    options = DecodeOptions(is_attribute_value=args.attribute, strict=args.strict)
    return lambda text: decode(text, options)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    transform = make_transform(args)
    logger.debug("Running %s on %s", args.action, "arguments" if args.text else "stdin")

    try:
        if args.text:
            for text in args.text:
                print(transform(text))
        else:
            sys.stdout.write(transform(sys.stdin.read()))
    except CharacterReferenceError as e:
        logger.debug("Strict %s failed: %s", args.action, e.reason)
        print(f"charrefs: {e}", file=sys.stderr)
        return 1
    return 0
