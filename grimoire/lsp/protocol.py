"""Language server messages framed by ``Content-Length`` headers.

Messages are read from and written to binary streams, such as the standard
input and output of the server process.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, BinaryIO, Union

SERVER_NOT_INITIALIZED = -32002


class ProtocolError(Exception):
    """A malformed message, or a message that breaks the protocol's order.

    ``disconnected`` is true when the input ended.
    """

    def __init__(self, message: str, disconnected: bool = False) -> None:
        super().__init__(message)
        self.disconnected = disconnected


@dataclass
class Request:
    """A request that expects a response with the same id."""

    id: int | str
    method: str
    params: Any = None

    def extract(self, method: str) -> tuple[int | str, dict[str, Any]]:
        """Return the id and params if this is a ``method`` request.

        Raises ProtocolError for another method or params that are not an
        object.
        """
        if self.method != method:
            raise ProtocolError(f"method mismatch: expected {method!r}, got {self.method!r}")
        if not isinstance(self.params, dict):
            raise ProtocolError(f"invalid params for {method!r}: {self.params!r}")
        return self.id, self.params

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"jsonrpc": "2.0", "id": self.id, "method": self.method}
        if self.params is not None:
            data["params"] = self.params
        return data


@dataclass
class Response:
    """A reply to a request: a result, or an error object."""

    id: int | str | None
    result: Any = None
    error: dict[str, Any] | None = None

    def to_json(self) -> dict[str, Any]:
        """Return the message as a JSON-ready dict."""
        data: dict[str, Any] = {"jsonrpc": "2.0", "id": self.id}
        if self.error is not None:
            data["error"] = self.error
        else:
            data["result"] = self.result
        return data


@dataclass
class Notification:
    """A message that expects no reply."""

    method: str
    params: Any = None

    def extract(self, method: str) -> dict[str, Any]:
        """Return the params if this is a ``method`` notification.

        Raises ProtocolError for another method or params that are not an
        object.
        """
        if self.method != method:
            raise ProtocolError(f"method mismatch: expected {method!r}, got {self.method!r}")
        if not isinstance(self.params, dict):
            raise ProtocolError(f"invalid params for {method!r}: {self.params!r}")
        return self.params

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"jsonrpc": "2.0", "method": self.method}
        if self.params is not None:
            data["params"] = self.params
        return data


Message = Union[Request, Response, Notification]


def read_message(stream: BinaryIO) -> Any | None:
    """Read one framed message and return its decoded JSON, or None at end of input."""
    length = None
    first = True
    while True:
        line = stream.readline()
        if not line:
            if first:
                return None
            raise ProtocolError("input ended inside a message header", disconnected=True)
        first = False
        if not line.endswith(b"\r\n"):
            raise ProtocolError(f"malformed header line: {line!r}")
        line = line[:-2]
        if not line:
            break
        name, sep, value = line.decode("ascii", errors="replace").partition(": ")
        if not sep:
            raise ProtocolError(f"malformed header line: {line!r}")
        if name.lower() == "content-length":
            try:
                length = int(value)
            except ValueError:
                raise ProtocolError(f"invalid Content-Length: {value!r}") from None
    if length is None:
        raise ProtocolError("no Content-Length header")
    body = stream.read(length)
    if len(body) < length:
        raise ProtocolError("input ended inside a message body", disconnected=True)
    try:
        return json.loads(body)
    except ValueError as error:
        raise ProtocolError(f"invalid JSON in message: {error}") from error


def write_message(stream: BinaryIO, payload: Any) -> None:
    """Write ``payload`` as JSON behind a ``Content-Length`` header."""
    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    stream.write(b"Content-Length: %d\r\n\r\n" % len(body) + body)
    stream.flush()


def parse_message(payload: Any) -> Message:
    """Turn decoded JSON into a Request, Response or Notification."""
    if not isinstance(payload, dict):
        raise ProtocolError(f"message is not an object: {payload!r}")
    if "method" in payload:
        if "id" in payload:
            return Request(payload["id"], payload["method"], payload.get("params"))
        return Notification(payload["method"], payload.get("params"))
    if "id" in payload:
        return Response(payload["id"], payload.get("result"), payload.get("error"))
    raise ProtocolError(f"message is neither request, response nor notification: {payload!r}")


class Connection:
    """A two-way message channel over a pair of binary streams."""

    def __init__(self, reader: BinaryIO, writer: BinaryIO) -> None:
        self.reader = reader
        self.writer = writer

    def receive(self) -> Message | None:
        """Return the next message, or None when the input has ended."""
        payload = read_message(self.reader)
        if payload is None:
            return None
        return parse_message(payload)

    def send(self, message: Message) -> None:
        """Write one message."""
        write_message(self.writer, message.to_json())

    def __iter__(self) -> Iterator[Message]:
        """Yield messages until the input ends or an ``exit`` notification arrives.

        The ``exit`` notification itself is yielded.
        """
        while True:
            message = self.receive()
            if message is None:
                return
            yield message
            if isinstance(message, Notification) and message.method == "exit":
                return

    def _initialize_start(self) -> Request:
        while True:
            message = self.receive()
            if message is None:
                raise ProtocolError("input ended before initialize", disconnected=True)
            if isinstance(message, Request):
                if message.method == "initialize":
                    return message
                self.send(
                    Response(
                        message.id,
                        error={
                            "code": SERVER_NOT_INITIALIZED,
                            "message": f"expected initialize request, got {message!r}",
                        },
                    )
                )
            elif isinstance(message, Notification) and message.method != "exit":
                continue
            else:
                raise ProtocolError(f"expected initialize request, got {message!r}")

    def initialize(self, capabilities: Any) -> Any:
        """Run the initialize handshake and return the client's initialize params.

        Requests before ``initialize`` get a server-not-initialized error;
        other notifications are skipped. Raises ProtocolError if the exchange
        goes wrong or the input ends.
        """
        request = self._initialize_start()
        self.send(Response(request.id, result={"capabilities": capabilities}))
        message = self.receive()
        if message is None:
            raise ProtocolError("input ended before initialized", disconnected=True)
        if not (isinstance(message, Notification) and message.method == "initialized"):
            raise ProtocolError(f"expected initialized notification, got: {message!r}")
        return request.params

    def handle_shutdown(self, request: Request) -> bool:
        """Answer a ``shutdown`` request and wait for ``exit``.

        Returns False for any other request, True once ``exit`` arrives.
        Raises ProtocolError if something else arrives instead.
        """
        if request.method != "shutdown":
            return False
        self.send(Response(request.id, result=None))
        message = self.receive()
        if message is None:
            raise ProtocolError(
                "input ended waiting for exit notification", disconnected=True
            )
        if isinstance(message, Notification) and message.method == "exit":
            return True
        raise ProtocolError(f"unexpected message during shutdown: {message!r}")