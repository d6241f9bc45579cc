"""Line and character position of the end of a text."""

from __future__ import annotations

import argparse

import regex


def last_position(text: str) -> tuple[int, int]:
    """Return the zero-based line and grapheme column just past the last character.

    Lines are split on ``\\n`` with a trailing ``\\r`` dropped; a trailing
    newline starts a new, empty last line.
    """
    lines = f"{text}\n".split("\n")[:-1]
    last_line = lines[-1].removesuffix("\r")
    return len(lines) - 1, len(regex.findall(r"\X", last_line))


def main(argv: list[str] | None = None) -> int:
    """Print the last position of the given text, an empty text by default."""
    parser = argparse.ArgumentParser(
        description="Print the line and character of the end of a text."
    )
    parser.add_argument("text", nargs="?", default="", help="text to measure")
    args = parser.parse_args(argv)
    print(last_position(args.text))
    return 0