"""Mapping empty strings to None without cutting the sequence short."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable

ITEMS = ("alfa", "bravo", "charlie", "", "delta", "echo")


def refine(items: Iterable[str]) -> list[str | None]:
    """Replace each empty string with None; every item is kept, in order."""
    return [item if item != "" else None for item in items]


def main(argv: list[str] | None = None) -> int:
    """Print the refined items, the built-in examples by default, to stderr."""
    parser = argparse.ArgumentParser(description="Map empty strings to None.")
    parser.add_argument("items", nargs="*", help="items to refine")
    args = parser.parse_args(argv)
    items = args.items if args.items else ITEMS
    print(f"refined = {refine(items)!r}", file=sys.stderr)
    return 0