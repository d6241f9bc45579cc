"""Answering requests and handling responses sent by the client."""

from __future__ import annotations

import contextlib
import logging
from typing import Any

from grimoire.last_position import last_position
from grimoire.lsp.documents import GlobalState
from grimoire.lsp.protocol import Connection, ProtocolError, Request, Response
from grimoire.lsp.text import _graphemes, _lines, string_at_position

_log = logging.getLogger(__name__)
_TRACE = 5

WORD_LIST = ("-- test", "al", "alfa", "bravo", "braavo", "charlie")
_HIGHLIGHT = ["a", "l", "f", "a"]
_HIGHLIGHT_TOKEN_TYPE = 2


def dispatch_request(message: Request, state: GlobalState) -> Response:
    """Return the response to ``message`` from the handler for its method."""
    handlers = {
        "textDocument/completion": completion,
        "textDocument/formatting": formatting,
        "textDocument/semanticTokens/full": semantic_tokens_full,
    }
    handler = handlers.get(message.method)
    if handler is None:
        return unknown_request(message)
    return handler(message, state)


def handle_request(message: Request, connection: Connection, state: GlobalState) -> None:
    """Answer ``message`` over ``connection``; a failed send is ignored."""
    response = dispatch_request(message, state)
    with contextlib.suppress(OSError):
        connection.send(response)


def _extract(message: Request, method: str) -> dict[str, Any] | None:
    try:
        _, params = message.extract(method)
    except ProtocolError as error:
        _log.error("%s", error)
        return None
    _log.log(_TRACE, "%r", params)
    return params


def _document_text(state: GlobalState, params: dict[str, Any]) -> str:
    uri = params["textDocument"]["uri"]
    document = state.mem_docs.get(uri)
    if document is None:
        raise LookupError(f"No open document at: {uri}")
    return document.data


def completion(message: Request, state: GlobalState) -> Response:
    """Offer the words that start with the text before the cursor."""
    params = _extract(message, "textDocument/completion")
    if params is None:
        return Response(message.id)
    return Response(message.id, filter_words(string_at_position(params, state)))


def formatting(message: Request, state: GlobalState) -> Response:
    """Replace the whole document with its formatted text."""
    params = _extract(message, "textDocument/formatting")
    if params is None:
        return Response(message.id)
    initial_text = _document_text(state, params)
    new_text = formatted_text(initial_text)
    end_line, end_character = max(last_position(new_text), last_position(initial_text))
    edit = {
        "range": {
            "start": {"line": 0, "character": 0},
            "end": {"line": end_line, "character": end_character},
        },
        "newText": new_text,
    }
    return Response(message.id, [edit])


def semantic_tokens_full(message: Request, state: GlobalState) -> Response:
    """Return highlight tokens for the whole document."""
    params = _extract(message, "textDocument/semanticTokens/full")
    if params is None:
        return Response(message.id)
    return Response(message.id, highlight_tokens(_document_text(state, params)))


def unknown_request(message: Request) -> Response:
    """Log a request that has no handler and answer it with an empty result."""
    _log.error("%r", message)
    return Response(message.id)


def handle_response(message: Response) -> None:
    """Log a response from the client; none are expected."""
    _log.error("%r", message)


def filter_words(text: str) -> dict[str, Any]:
    """Return a completion list of the known words starting with ``text``."""
    items = [
        {"label": word, "detail": f"This is the {word}"}
        for word in WORD_LIST
        if word.lower().startswith(text)
    ]
    return {"isIncomplete": bool(items), "items": items}


def formatted_text(text: str) -> str:
    """Start every line with a ``.``, adding one where it is missing."""
    return "\n".join(line if line.startswith(".") else f".{line}" for line in _lines(text))


def highlight_tokens(text: str) -> dict[str, Any]:
    """Return semantic tokens marking every ``alfa`` in ``text``.

    Tokens are encoded relative to the previous one, five numbers each:
    line delta, start delta, length, token type and modifiers.
    """
    positions = []
    for line_index, line in enumerate(_lines(text)):
        graphemes = _graphemes(line)
        positions.extend(
            (line_index, start)
            for start in range(len(graphemes) - len(_HIGHLIGHT) + 1)
            if graphemes[start : start + len(_HIGHLIGHT)] == _HIGHLIGHT
        )
    data: list[int] = []
    previous_line = previous_start = 0
    for line, start in positions:
        delta_line = line - previous_line
        delta_start = start - previous_start if delta_line == 0 else start
        data.extend((delta_line, delta_start, len(_HIGHLIGHT), _HIGHLIGHT_TOKEN_TYPE, 0))
        previous_line, previous_start = line, start
    return {"data": data}