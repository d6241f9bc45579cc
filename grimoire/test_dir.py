"""Test cases kept as files in a directory.

Each ``.customtest`` file holds an input and an expected value separated by
a line of ``_____``.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

SEPARATOR = "_____"
EXTENSION = ".customtest"


def _parse_expected(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


@dataclass(frozen=True)
class DirTestCase:
    """One case: its name, the input text and the expected value as written."""

    name: str
    text: str
    expected: str

    def check(self, function: Callable[[str], Any]) -> Any:
        """Call ``function`` on the input and compare with the expected value.

        The expected value is read as JSON where it parses (``true``, ``3``,
        ``"x"``) and as plain text otherwise. Returns the result; raises
        AssertionError when it differs.
        """
        actual = function(self.text)
        expected = _parse_expected(self.expected)
        if actual != expected:
            raise AssertionError(f"{self.name}: {actual!r} != {expected!r}")
        return actual


def read_test_case(path: str | os.PathLike[str]) -> DirTestCase:
    """Read one test case file; its name is the file stem."""
    path = Path(path)
    parts = [part.strip() for part in path.read_text().split(SEPARATOR)]
    if len(parts) < 2:
        raise ValueError(f"No '{SEPARATOR}' separator in test case: {path}")
    return DirTestCase(name=path.stem, text=parts[0], expected=parts[1])


def collect_test_cases(directory: str | os.PathLike[str]) -> list[DirTestCase]:
    """Read every ``.customtest`` file directly inside ``directory``, by name."""
    paths = sorted(
        path
        for path in Path(directory).iterdir()
        if path.suffix == EXTENSION and path.is_file()
    )
    return [read_test_case(path) for path in paths]


def widget_testing(text: str) -> bool:
    """Return whether the text is ``hello``."""
    return text == "hello"