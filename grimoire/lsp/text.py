"""Reading words out of open documents."""

from __future__ import annotations

import itertools
from typing import Any

import regex

from grimoire.lsp.documents import GlobalState


def _lines(text: str) -> list[str]:
    """Split ``text`` into lines on ``\\n``, dropping a trailing ``\\r``.

    A final newline does not start another line, and empty text has none.
    """
    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return [part.removesuffix("\r") for part in parts]


def _graphemes(text: str) -> list[str]:
    return regex.findall(r"\X", text)


def string_at_position(params: dict[str, Any], state: GlobalState) -> str:
    """Return the text before ``params``' position, back to the nearest space.

    ``params`` holds a ``textDocument`` with a ``uri`` and a ``position``
    with a zero-based ``line`` and grapheme ``character``. Raises LookupError
    if the document is not open and IndexError if the line does not exist.
    """
    uri = params["textDocument"]["uri"]
    line = params["position"]["line"]
    character = params["position"]["character"]
    document = state.mem_docs.get(uri)
    if document is None:
        raise LookupError(f"No open document at: {uri}")
    lines = _lines(document.data)
    if not 0 <= line < len(lines):
        raise IndexError(f"Line {line} is not in document: {uri}")
    before = _graphemes(lines[line])[:character]
    word = itertools.takewhile(lambda grapheme: grapheme != " ", reversed(before))
    return "".join(reversed(list(word)))