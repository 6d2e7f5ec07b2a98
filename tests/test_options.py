"""Tests for encode and decode option sets."""

import dataclasses
import unittest

from charrefs.options import (
    DECODE_DEFAULTS,
    ENCODE_DEFAULTS,
    DecodeOptions,
    EncodeOptions,
    resolve_options,
)


class TestDefaults(unittest.TestCase):
    def test_decode_defaults(self):
        assert DECODE_DEFAULTS == DecodeOptions(is_attribute_value=False, strict=False)

    def test_encode_defaults(self):
        assert ENCODE_DEFAULTS == EncodeOptions()
        assert not any(getattr(ENCODE_DEFAULTS, f.name) for f in dataclasses.fields(EncodeOptions))

    def test_defaults_are_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            DECODE_DEFAULTS.strict = True


class TestResolveOptions(unittest.TestCase):
    def test_none_gives_defaults(self):
        assert resolve_options(None, DECODE_DEFAULTS, {}) is DECODE_DEFAULTS

    def test_overrides_do_not_touch_defaults(self):
        options = resolve_options(None, ENCODE_DEFAULTS, {"decimal": True})
        assert options.decimal is True
        assert ENCODE_DEFAULTS.decimal is False

    def test_overrides_are_coerced(self):
        options = resolve_options(None, DECODE_DEFAULTS, {"strict": "yes"})
        assert options.strict is True

    def test_wrong_options_type(self):
        with self.assertRaises(TypeError):
            resolve_options(DECODE_DEFAULTS, ENCODE_DEFAULTS, {})

    def test_unknown_override(self):
        with self.assertRaises(TypeError):
            resolve_options(None, DECODE_DEFAULTS, {"strict_mode": True})
