"""Logging to the console and to rolling files, with span context.

``span`` marks a region of code by name; records logged inside it carry the
names of all enclosing spans. ``MiniFormatter`` writes a short multi-line
text form and ``JsonFormatter`` writes one JSON object per line.
"""

from __future__ import annotations

import contextlib
import contextvars
import copy
import json
import logging
import os
import sys
from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path

_SPANS: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar(
    "grimoire_spans", default=()
)
_INSTALLED = "_grimoire_installed"

_LEVELS = {
    "TRACE": 5,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    try:
        return _LEVELS[str(level).upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None


def _level_name(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "ERROR"
    if levelno >= logging.WARNING:
        return "WARN"
    if levelno >= logging.INFO:
        return "INFO"
    if levelno >= logging.DEBUG:
        return "DEBUG"
    return "TRACE"


def _timestamp(record: logging.LogRecord) -> str:
    moment = datetime.fromtimestamp(record.created, timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _record_spans(record: logging.LogRecord) -> tuple[str, ...]:
    spans = getattr(record, "spans", None)
    return tuple(spans) if spans is not None else _SPANS.get()


def _attach_spans(record: logging.LogRecord) -> bool:
    if not hasattr(record, "spans"):
        record.spans = _SPANS.get()
    return True


@contextlib.contextmanager
def span(name: str) -> Iterator[None]:
    """Enter a named span; usable as a context manager or a decorator."""
    token = _SPANS.set(_SPANS.get() + (name,))
    try:
        yield
    finally:
        _SPANS.reset(token)


class MiniFormatter(logging.Formatter):
    """Level and time, then location and spans, then the message."""

    def format(self, record: logging.LogRecord) -> str:
        head = f"{_level_name(record.levelno)}-{_timestamp(record)}"
        location = record.pathname or ""
        if record.lineno:
            location += f" Line: {record.lineno}"
        spans = _record_spans(record)
        context = "".join(f"{name}:" for name in spans) + (" " if spans else "")
        message = record.getMessage()
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return f"{head}\n{location} {context}\n{message}"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with fields, target and spans."""

    def format(self, record: logging.LogRecord) -> str:
        fields = {"message": record.getMessage()}
        if record.exc_info:
            fields["exception"] = self.formatException(record.exc_info)
        data: dict[str, object] = {
            "timestamp": _timestamp(record),
            "level": _level_name(record.levelno),
            "fields": fields,
            "target": record.name,
        }
        spans = _record_spans(record)
        if spans:
            data["span"] = {"name": spans[-1]}
            data["spans"] = [{"name": name} for name in spans]
        return json.dumps(data)


class _RollingFileHandler(logging.StreamHandler):
    """Writes to a file named after the current period, keeping a few files."""

    _PATTERNS = {
        "minutely": "%Y-%m-%d-%H-%M",
        "hourly": "%Y-%m-%d-%H",
        "daily": "%Y-%m-%d",
    }

    def __init__(
        self,
        directory: str | os.PathLike[str],
        when: str = "daily",
        prefix: str | None = None,
        suffix: str | None = None,
        max_files: int | None = None,
    ) -> None:
        if when not in self._PATTERNS:
            raise ValueError(f"Unknown rotation: {when!r}")
        super().__init__()
        self.stream = None
        self.directory = Path(directory)
        self.prefix = prefix
        self.suffix = suffix
        self.max_files = max_files
        self._pattern = self._PATTERNS[when]
        self.current_path: Path | None = None
        self.directory.mkdir(parents=True, exist_ok=True)
        self._open(self._path_for(datetime.now(timezone.utc).timestamp()))

    def _path_for(self, created: float) -> Path:
        stamp = datetime.fromtimestamp(created, timezone.utc).strftime(self._pattern)
        return self.directory / ".".join(p for p in (self.prefix, stamp, self.suffix) if p)

    def _matches(self, name: str) -> bool:
        if self.prefix and not name.startswith(f"{self.prefix}."):
            return False
        if self.suffix and not name.endswith(f".{self.suffix}"):
            return False
        return True

    def _open(self, path: Path) -> None:
        if self.stream is not None:
            self.stream.close()
        self.stream = open(path, "a", encoding="utf-8")
        self.current_path = path
        self._prune()

    def _prune(self) -> None:
        if not self.max_files:
            return
        logs = sorted(
            p for p in self.directory.iterdir() if p.is_file() and self._matches(p.name)
        )
        for old in logs[: -self.max_files]:
            if old != self.current_path:
                old.unlink(missing_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            path = self._path_for(record.created)
            if self.stream is None or path != self.current_path:
                self._open(path)
        except Exception:
            self.handleError(record)
            return
        super().emit(record)

    def close(self) -> None:
        self.acquire()
        try:
            if self.stream is not None:
                self.stream.flush()
                self.stream.close()
                self.stream = None
        finally:
            self.release()
        logging.Handler.close(self)


def _ensure_not_installed() -> None:
    if any(getattr(h, _INSTALLED, False) for h in logging.getLogger().handlers):
        raise RuntimeError("A global logger has already been installed")


def _install(handlers: list[logging.Handler]) -> None:
    root = logging.getLogger()
    for handler in handlers:
        handler.addFilter(_attach_spans)
        setattr(handler, _INSTALLED, True)
        root.addHandler(handler)
    if handlers:
        root.setLevel(min(handler.level for handler in handlers))


class Logger:
    """Builder for console and rolling-file log outputs."""

    def __init__(self) -> None:
        self.guards: list[logging.Handler] = []
        self._stdout: int | None = None
        self._stderr: int | None = None
        self._json_dir: Path | None = None
        self._json_level: int | None = None
        self._txt_dir: Path | None = None
        self._txt_level: int | None = None

    @classmethod
    def setup(cls) -> Logger:
        """Start a builder with no outputs."""
        return cls()

    def _with(self, **changes: object) -> Logger:
        new = copy.copy(self)
        new.guards = list(self.guards)
        for key, value in changes.items():
            setattr(new, f"_{key}", value)
        return new

    def with_stdout(self, level: int | str) -> Logger:
        """Also write short text records at ``level`` and above to stdout."""
        return self._with(stdout=_level(level))

    def with_stderr(self, level: int | str) -> Logger:
        """Also write short text records at ``level`` and above to stderr."""
        return self._with(stderr=_level(level))

    def to_json_dir(self, directory: str | os.PathLike[str], level: int | str) -> Logger:
        """Also write JSON lines to daily files in ``directory``."""
        return self._with(json_dir=Path(directory), json_level=_level(level))

    def to_txt_dir(self, directory: str | os.PathLike[str], level: int | str) -> Logger:
        """Also write short text records to daily files in ``directory``."""
        return self._with(txt_dir=Path(directory), txt_level=_level(level))

    def init(self) -> list[logging.Handler]:
        """Install the outputs on the root logger and return the file handlers.

        Raises RuntimeError if outputs have already been installed.
        """
        _ensure_not_installed()
        handlers: list[logging.Handler] = []
        if self._json_dir is not None and self._json_level is not None:
            handler = _RollingFileHandler(self._json_dir, "daily", "log", "json-lines", 2)
            handler.setFormatter(JsonFormatter())
            handler.setLevel(self._json_level)
            handlers.append(handler)
            self.guards.append(handler)
        for stream, level in ((sys.stderr, self._stderr), (sys.stdout, self._stdout)):
            if level is not None:
                console = logging.StreamHandler(stream)
                console.setFormatter(MiniFormatter())
                console.setLevel(level)
                handlers.append(console)
        if self._txt_dir is not None and self._txt_level is not None:
            handler = _RollingFileHandler(self._txt_dir, "daily", "log", "log", 2)
            handler.setFormatter(MiniFormatter())
            handler.setLevel(self._txt_level)
            handlers.append(handler)
            self.guards.append(handler)
        _install(handlers)
        return self.guards


def init_logger(
    log_dir: str | os.PathLike[str], when: str = "daily", suffix: str = "log"
) -> logging.Handler:
    """Send every record as JSON lines to rolling files in ``log_dir``.

    Two files are kept. Returns the file handler. Raises ValueError for an
    unknown rotation and RuntimeError if outputs are already installed.
    """
    _ensure_not_installed()
    handler = _RollingFileHandler(log_dir, when, None, suffix, 2)
    handler.setFormatter(JsonFormatter())
    _install([handler])
    return handler


_log = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Log a few events to the console and to files under ``test-output``."""
    guards = (
        Logger.setup()
        .with_stdout("INFO")
        .with_stderr("INFO")
        .to_json_dir(Path("test-output/json"), "INFO")
        .to_txt_dir(Path("test-output/txt"), "INFO")
        .init()
    )
    try:
        with span("main"):
            _log.info("In main")
            _log.info("In alfa")
            with span("bravo"):
                _log.info("In bravo")
                with span("charlie"):
                    _log.info("In charlie")
        print("process complete.")
    finally:
        for guard in guards:
            guard.flush()
    return 0