"""Handling notifications sent by the client."""

from __future__ import annotations

import logging

from grimoire.lsp.documents import DocumentData, GlobalState
from grimoire.lsp.protocol import Notification, ProtocolError

_log = logging.getLogger(__name__)
_TRACE = 5
_DECODE_ERRORS = (ProtocolError, KeyError, TypeError)


def handle_notification(message: Notification, state: GlobalState) -> None:
    """Pass ``message`` to the handler for its method."""
    handlers = {
        "textDocument/didChange": did_change_text_document,
        "textDocument/didClose": did_close_text_document,
        "textDocument/didOpen": did_open_text_document,
    }
    handler = handlers.get(message.method)
    if handler is None:
        unknown_notification(message)
    else:
        handler(message, state)


def did_change_text_document(message: Notification, state: GlobalState) -> None:
    """Replace a document with the full text of its first change."""
    try:
        params = message.extract("textDocument/didChange")
        uri = params["textDocument"]["uri"]
        version = params["textDocument"]["version"]
        changes = list(params["contentChanges"])
    except _DECODE_ERRORS as error:
        _log.error("%s", error)
        return
    _log.log(_TRACE, "%r", params)
    state.mem_docs.insert(uri, DocumentData(version, changes[0]["text"]))


def did_close_text_document(message: Notification, state: GlobalState) -> None:
    """Forget a closed document."""
    try:
        params = message.extract("textDocument/didClose")
        uri = params["textDocument"]["uri"]
    except _DECODE_ERRORS as error:
        _log.error("%s", error)
        return
    _log.log(_TRACE, "%r", params)
    try:
        state.mem_docs.remove(uri)
    except KeyError:
        pass


def did_open_text_document(message: Notification, state: GlobalState) -> None:
    """Store a newly opened document."""
    try:
        params = message.extract("textDocument/didOpen")
        document = params["textDocument"]
        uri, version, text = document["uri"], document["version"], document["text"]
    except _DECODE_ERRORS as error:
        _log.error("%s", error)
        return
    _log.log(_TRACE, "%r", params)
    state.mem_docs.insert(uri, DocumentData(version, text))


def unknown_notification(message: Notification) -> None:
    """Log a notification that has no handler."""
    _log.error("%r", message)