#!/usr/bin/env python3
"""
Performance benchmark for charrefs against the standard library's
html.escape and html.unescape.
Runs over synthetic documents, or over .html files from a directory.
"""

# ruff: noqa: BLE001
from __future__ import annotations

import argparse
import html
import pathlib
import random
import sys
import time

from charrefs import decode, encode, escape

_SNIPPETS = [
    "<p class=\"intro\">Hello, world!</p>\n",
    "Fish &amp; chips &copy; 2024 &mdash; &#8220;quoted&#8221; &#x1F600;\n",
    "<a href=\"/search?q=1&lang=en&copy=2\">link</a>\n",
    "caf\xe9 na\xefve r\xe9sum\xe9 \u2260 \u2264 \u2208 \U0001d306\n",
    "&notit; &amp &lt &gt &#38 &#x26 &foo; &#;\n",
    "Plain ASCII text without any references at all, repeated often.\n",
]


def synthetic_documents(count: int, size: int, seed: int = 0) -> list:
    rng = random.Random(seed)
    docs = []
    for i in range(count):
        parts = []
        length = 0
        while length < size:
            snippet = rng.choice(_SNIPPETS)
            parts.append(snippet)
            length += len(snippet)
        docs.append((f"synthetic-{i:04d}", "".join(parts)))
    return docs


def load_documents(directory: pathlib.Path, limit: int | None) -> list:
    docs = []
    for path in sorted(directory.glob("*.html")):
        docs.append((path.name, path.read_text(encoding="utf-8", errors="replace")))
        if limit and len(docs) >= limit:
            break
    return docs


def run_timed(fn, docs: list, iterations: int = 1) -> dict:
    """Time `fn` over every document, collecting per-document errors."""
    all_times = []
    errors = 0
    error_files = []
    if docs:
        fn(docs[0][1])
    for _ in range(iterations):
        for filename, text in docs:
            try:
                start = time.perf_counter()
                fn(text)
                all_times.append(time.perf_counter() - start)
            except Exception as e:
                errors += 1
                error_files.append((filename, str(e)))
    return {
        "total_time": sum(all_times),
        "mean_time": sum(all_times) / len(all_times) if all_times else 0,
        "min_time": min(all_times) if all_times else 0,
        "max_time": max(all_times) if all_times else 0,
        "errors": errors,
        "success_count": len(all_times),
        "error_files": error_files,
    }


BENCHMARKS = {
    "decode": decode,
    "html.unescape": html.unescape,
    "escape": escape,
    "html.escape": html.escape,
    "encode": encode,
    "encode-named": lambda text: encode(text, use_named_references=True),
}

# Each charrefs operation and the standard library function it is compared to
BASELINES = {
    "decode": "html.unescape",
    "escape": "html.escape",
}


def print_results(results: dict, doc_count: int, iterations: int = 1):
    """Pretty print benchmark results."""
    print("\n" + "=" * 80)
    if iterations > 1:
        print(f"BENCHMARK RESULTS ({doc_count} documents x {iterations} iterations)")
    else:
        print(f"BENCHMARK RESULTS ({doc_count} documents)")
    print("=" * 80)

    print(f"\n{'Function':<15} {'Total (s)':<10} {'Mean (ms)':<10} {'Errors':<8}")
    print("-" * 80)
    for name, result in results.items():
        print(f"{name:<15} {result['total_time']:<10.3f} {result['mean_time'] * 1000:<10.3f} {result['errors']:<8}")
    print("\n" + "=" * 80)

    comparisons = [(name, baseline) for name, baseline in BASELINES.items() if name in results and baseline in results]
    if comparisons:
        print("\ncharrefs vs standard library:")
        for name, baseline in comparisons:
            ours = results[name]["total_time"]
            theirs = results[baseline]["total_time"]
            if ours > 0:
                ratio = theirs / ours
                print(f"  {name:<15} {ratio:>6.2f}x {'slower' if ratio < 1 else 'faster'} than {baseline}")
        print()

    for name, result in results.items():
        if result["error_files"]:
            print(f"\nErrors for {name}:")
            for filename, error_msg in result["error_files"]:
                print(f"  {filename}: {error_msg}")
            print()


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark charrefs against html.escape and html.unescape",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--files", type=pathlib.Path, help="Directory of .html files to use instead of synthetic input")
    parser.add_argument(
        "--limit", type=int, default=100, help="Limit number of documents (default: 100, use 0 for all)",
    )
    parser.add_argument("--size", type=int, default=20_000, help="Characters per synthetic document (default: 20000)")
    parser.add_argument(
        "--iterations", type=int, default=5, help="Number of iterations to run for averaging (default: 5)",
    )
    parser.add_argument(
        "--functions",
        nargs="+",
        choices=list(BENCHMARKS),
        default=list(BENCHMARKS),
        help="Functions to benchmark (default: all)",
    )
    args = parser.parse_args()

    limit = args.limit if args.limit > 0 else None
    if args.files:
        print(f"Loading HTML files from {args.files}...")
        docs = load_documents(args.files, limit)
    else:
        docs = synthetic_documents(limit or 100, args.size)
    if not docs:
        print("ERROR: No documents loaded")
        sys.exit(1)
    total_chars = sum(len(text) for _, text in docs)
    print(f"Loaded {len(docs)} documents ({total_chars / 1024 / 1024:.2f} M characters)")

    results = {}
    for name in args.functions:
        print(f"\nBenchmarking {name}...", end="", flush=True)
        results[name] = run_timed(BENCHMARKS[name], docs, args.iterations)
        print(f" DONE ({results[name]['total_time']:.3f}s)")

    print_results(results, len(docs), args.iterations)


if __name__ == "__main__":
    main()
