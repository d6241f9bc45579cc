"""A small language server speaking over standard input and output."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, BinaryIO

from grimoire.logger import init_logger
from grimoire.lsp.capabilities import server_capabilities
from grimoire.lsp.documents import GlobalState
from grimoire.lsp.notifications import handle_notification
from grimoire.lsp.protocol import Connection, ProtocolError, Request, Response
from grimoire.lsp.requests import handle_request, handle_response

_log = logging.getLogger(__name__)


def main_loop(connection: Connection, params: Any) -> None:
    """Handle messages until shutdown, ``exit`` or the end of input."""
    _log.debug("Starting main loop")
    state = GlobalState()
    for message in connection:
        if isinstance(message, Request):
            if connection.handle_shutdown(message):
                return
            handle_request(message, connection, state)
        elif isinstance(message, Response):
            handle_response(message)
        else:
            handle_notification(message, state)


def serve(reader: BinaryIO, writer: BinaryIO) -> None:
    """Run the initialize handshake and then the main loop on two streams.

    Raises ProtocolError if the handshake or shutdown goes wrong.
    """
    connection = Connection(reader, writer)
    params = connection.initialize(server_capabilities())
    main_loop(connection, params)


def main(argv: list[str] | None = None) -> int:
    """Serve on standard input and output, logging JSON lines to files."""
    parser = argparse.ArgumentParser(description="Run the language server on stdio.")
    parser.add_argument("--log-dir", default=".", help="directory for log files")
    args = parser.parse_args(argv)
    handler = init_logger(args.log_dir, "hourly", "json-lines")
    _log.debug("Starting generic LSP server")
    try:
        serve(sys.stdin.buffer, sys.stdout.buffer)
    except ProtocolError as error:
        _log.error("%s", error)
        print(f"Error: {error}", file=sys.stderr)
        return 1
    finally:
        handler.flush()
    _log.debug("Shutting down gracefully")
    return 0