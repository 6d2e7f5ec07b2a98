#!/usr/bin/env python3
"""
Random fuzzer for the charrefs codec.
Generates malformed references and odd code points to check that
non-strict decoding never raises, strict mode only raises its own errors,
and encoded text always decodes back to the input.
"""

import argparse
import random
import string
import sys
import time
import traceback

from charrefs import CharacterReferenceError, decode, encode
from charrefs.entities import DECODE_MAP, DECODE_MAP_LEGACY

SPECIAL_CHARS = [
    "\x00", "\x01", "\x0b", "\x0c", "\x0d", "\x0e", "\x7f",  # Control chars
    "\x80", "\x81", "\x9f",  # C1 controls, some with overrides
    "\xa0", "\xa9", "\xe9",
    "\u20d2", "\u0338", "\u2242",  # Parts of paired references
    "\ufdd0", "\ufffd", "\ufffe", "\uffff",
    "\ud800", "\udfff",  # Lone surrogates
    "\U0001d306", "\U0001d504", "\U0010ffff",
]

REFERENCES = [
    "&", "&amp;", "&amp", "&ampamp;", "&am", "&#", "&#x", "&#X", "&#;", "&#x;",
    "&#123", "&#x1f;", "&#xdeadbeef;", "&#99999999;", "&#-1;", "&unknown;",
    "&AMP;", "&AMP", "&notin;", "&notit;", "&not=", "&copy=", "&fjlig;",
    "&#0;", "&#x0D;", "&#128;", "&#x9F;", "&#xD800;", "&#x10FFFF;", "&#x110000;",
    "&CounterClockwiseContourIntegral;",
]

_NAMES = sorted(DECODE_MAP)
_LEGACY_NAMES = sorted(DECODE_MAP_LEGACY)


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_code_point():
    """Any code point, weighted towards the interesting ranges."""
    roll = random.random()
    if roll < 0.4:
        return chr(random.randint(0x00, 0x7F))
    if roll < 0.7:
        return chr(random.randint(0x80, 0xFFFF))
    return chr(random.randint(0x10000, 0x10FFFF))


def fuzz_named_reference():
    name = random.choice(_NAMES)
    suffix = random.choice([";", "", "=", random_string(1, 2)])
    return f"&{name}{suffix}"


def fuzz_legacy_reference():
    return f"&{random.choice(_LEGACY_NAMES)}{random.choice(['', '=', 'x', '1', ';', ' '])}"


def fuzz_numeric_reference():
    hexadecimal = random.random() < 0.5
    value = random.choice([random.randint(0, 0x10FFFF), random.randint(0, 0xFF), random.randint(0xD800, 0xDFFF)])
    digits = f"{value:x}" if hexadecimal else str(value)
    if random.random() < 0.1:
        digits = "0" * random.randint(1, 50) + digits
    if random.random() < 0.05:
        digits = "9" * random.randint(10, 2000)
    prefix = random.choice(["&#x", "&#X"]) if hexadecimal else "&#"
    return prefix + digits + random.choice([";", "", " ", "z"])


def fuzz_text():
    return random.choice([random_string(1, 10), " ", "\n", "\r\n", "\t", "<", ">", '"', "'", "`"])


def generate_fuzzed_input():
    """Generate one random piece of HTML text."""
    generators = [
        fuzz_named_reference,
        fuzz_legacy_reference,
        fuzz_numeric_reference,
        fuzz_text,
        random_code_point,
        lambda: random.choice(REFERENCES),
        lambda: random.choice(SPECIAL_CHARS),
    ]
    return "".join(random.choice(generators)() for _ in range(random.randint(1, 30)))


def check_case(text):
    """Run every codec property against `text`. Returns an error message or None."""
    decode(text)
    decode(text, is_attribute_value=True)
    for options in ({}, {"is_attribute_value": True}):
        try:
            decode(text, strict=True, **options)
        except CharacterReferenceError:
            pass

    for options in (
        {},
        {"use_named_references": True},
        {"encode_everything": True},
        {"encode_everything": True, "use_named_references": True},
        {"decimal": True},
    ):
        encoded = encode(text, **options)
        decoded = decode(encoded)
        if decoded != _expected_round_trip(text):
            return f"round trip failed with {options}: {encoded[:100]!r}"
    return None


def _expected_round_trip(text):
    # Surrogate pairs come back combined and lone surrogates as U+FFFD
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    """Run the fuzzer against the codec."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    failures = []
    hangs = []
    successes = 0

    print(f"Fuzzing charrefs with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        text = generate_fuzzed_input()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            message = check_case(text)
            elapsed = time.perf_counter() - start

            if message is not None:
                failures.append({"test_num": i, "text": text, "error": message})
                if verbose:
                    print(f"  FAIL: Test {i}: {message}")
            elif elapsed > 5.0:
                hangs.append({"test_num": i, "text": text, "time": elapsed})
                if verbose:
                    print(f"  HANG: Test {i} took {elapsed:.2f}s")
            else:
                successes += 1

        except Exception as e:
            crashes.append({
                "test_num": i,
                "text": text,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")

    elapsed_total = time.time() - start_time

    print(f"\n{'='*60}")
    print("FUZZING RESULTS: charrefs")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Failures:       {len(failures)}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests/elapsed_total:.1f}")

    for title, items in (("FAILURE DETAILS", failures), ("CRASH DETAILS", crashes)):
        if not items:
            continue
        print(f"\n{'='*60}")
        print(f"{title}:")
        print(f"{'='*60}")
        for item in items[:10]:
            print(f"\nTest #{item['test_num']}:")
            print(f"  Input: {item['text'][:200]!r}")
            print(f"  Error: {item['error']}")
        if len(items) > 10:
            print(f"\n... and {len(items) - 10} more")

    if save_failures and (crashes or failures or hangs):
        filename = f"fuzz_failures_charrefs_{int(time.time())}.txt"
        with open(filename, "w", encoding="utf-8", errors="backslashreplace") as f:
            f.write(f"Seed: {seed}\n\n")
            for failure in failures:
                f.write(f"=== FAILURE #{failure['test_num']} ===\n")
                f.write(f"Input: {failure['text']!r}\n")
                f.write(f"Error: {failure['error']}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"Input: {crash['text']!r}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"Input: {hang['text']!r}\n\n")
        print(f"\nFailures saved to {filename}")

    return not crashes and not failures and not hangs


def main():
    parser = argparse.ArgumentParser(description="Fuzz the charrefs encoder and decoder with random input")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed inputs (no checks)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            print(repr(generate_fuzzed_input()))
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
