"""A language server that prefixes every line with a dot when formatting.

The backend keeps the latest full text of each changed document and answers
initialize, completion, formatting and shutdown requests.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, BinaryIO

from grimoire.last_position import last_position
from grimoire.lsp.protocol import (
    SERVER_NOT_INITIALIZED,
    Connection,
    Message,
    Notification,
    ProtocolError,
    Request,
    Response,
)
from grimoire.lsp.text import _lines

_log = logging.getLogger(__name__)

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602

MESSAGE_TYPE_INFO = 3
TEXT_DOCUMENT_SYNC_FULL = 1

_PARAM_ERRORS = (ProtocolError, KeyError, TypeError, IndexError)

_COMPLETIONS = (("Hello", "Some detail"), ("Bye", "More detail"))


def update_text(text: str) -> str:
    """Return ``text`` with a ``.`` put in front of every line."""
    return "\n".join(f".{line}" for line in _lines(text))


def _error(request_id: int | str, code: int, message: str) -> Response:
    return Response(request_id, error={"code": code, "message": message})


class Backend:
    """Handles the messages of one client connection."""

    def __init__(self, connection: Connection) -> None:
        self.connection = connection
        self.document_map: dict[str, str] = {}
        self._initialized = False
        self._shut_down = False

    def initialize(self, params: Any) -> dict[str, Any]:
        """Return the initialize result announcing this server's capabilities."""
        return {
            "capabilities": {
                "documentFormattingProvider": {"workDoneProgress": True},
                "completionProvider": {},
                "textDocumentSync": TEXT_DOCUMENT_SYNC_FULL,
            }
        }

    def initialized(self, params: Any) -> None:
        """Tell the client the server is ready."""
        self.connection.send(
            Notification(
                "window/logMessage",
                {
                    "type": MESSAGE_TYPE_INFO,
                    "message": "Tower LSP Example Server Initialized!",
                },
            )
        )

    def shutdown(self) -> None:
        """Mark the server as shutting down; later requests are refused."""
        self._shut_down = True

    def completion(self, params: Any) -> list[dict[str, str]]:
        """Offer the same two completion items everywhere."""
        _log.debug("Completion requested: %r", params)
        return [{"label": label, "detail": detail} for label, detail in _COMPLETIONS]

    def formatting(self, params: dict[str, Any]) -> list[dict[str, Any]] | None:
        """Return the edit that formats the document, or None if it is unknown."""
        return self.get_update(params)

    def did_change(self, params: dict[str, Any]) -> None:
        """Store the full text of the document's first change."""
        uri = params["textDocument"]["uri"]
        self.document_map[uri] = params["contentChanges"][0]["text"]

    def get_update(self, params: dict[str, Any]) -> list[dict[str, Any]] | None:
        """Build a single edit replacing the document with its dotted text."""
        initial_text = self.document_map.get(params["textDocument"]["uri"])
        if initial_text is None:
            return None
        text = update_text(initial_text)
        line, character = last_position(text)
        return [
            {
                "range": {
                    "start": {"line": 0, "character": 0},
                    "end": {"line": line, "character": character},
                },
                "newText": text,
            }
        ]

    def handle(self, message: Message) -> Response | None:
        """Handle one message; return the response a request needs, if any."""
        if isinstance(message, Request):
            return self._handle_request(message)
        if isinstance(message, Notification):
            self._handle_notification(message)
        else:
            _log.debug("Ignoring response: %r", message)
        return None

    def _handle_request(self, request: Request) -> Response:
        if self._shut_down:
            return _error(request.id, INVALID_REQUEST, "server is shutting down")
        if request.method == "initialize":
            if self._initialized:
                return _error(request.id, INVALID_REQUEST, "server is already initialized")
            self._initialized = True
            return Response(request.id, self.initialize(request.params))
        if not self._initialized:
            return _error(request.id, SERVER_NOT_INITIALIZED, "server is not initialized")
        handlers = {
            "shutdown": lambda _params: self.shutdown(),
            "textDocument/completion": self.completion,
            "textDocument/formatting": self.formatting,
        }
        handler = handlers.get(request.method)
        if handler is None:
            return _error(
                request.id, METHOD_NOT_FOUND, f"method not found: {request.method}"
            )
        try:
            result = handler(request.params)
        except _PARAM_ERRORS as error:
            return _error(request.id, INVALID_PARAMS, f"invalid params: {error!r}")
        return Response(request.id, result)

    def _handle_notification(self, notification: Notification) -> None:
        if notification.method == "exit":
            return
        if not self._initialized:
            _log.debug("Dropping notification before initialize: %r", notification)
            return
        if notification.method == "initialized":
            self.initialized(notification.params)
        elif notification.method == "textDocument/didChange":
            try:
                self.did_change(notification.params)
            except _PARAM_ERRORS as error:
                _log.error("invalid didChange params: %r", error)
        else:
            _log.debug("Ignoring notification: %r", notification)


def serve(reader: BinaryIO, writer: BinaryIO) -> None:
    """Answer messages from ``reader`` on ``writer`` until ``exit`` or end of input."""
    connection = Connection(reader, writer)
    backend = Backend(connection)
    for message in connection:
        response = backend.handle(message)
        if response is not None:
            connection.send(response)


def main(argv: list[str] | None = None) -> int:
    """Serve on standard input and output."""
    parser = argparse.ArgumentParser(description="Run the dot-formatting language server.")
    parser.parse_args(argv)
    try:
        serve(sys.stdin.buffer, sys.stdout.buffer)
    except ProtocolError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0