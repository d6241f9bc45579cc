"""Open documents held in memory by the language server."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class DocumentData:
    """A document's version number and full text."""

    version: int
    data: str


class MemDocs:
    """Documents keyed by URI, noting whether the set of keys has changed."""

    def __init__(self) -> None:
        self._docs: dict[str, DocumentData] = {}
        self._added_or_removed = False

    def __contains__(self, path: object) -> bool:
        return path in self._docs

    def __len__(self) -> int:
        return len(self._docs)

    def insert(self, path: str, data: DocumentData) -> DocumentData | None:
        """Store ``data`` under ``path``; return the document it replaced, if any."""
        self._added_or_removed = True
        previous = self._docs.get(path)
        self._docs[path] = data
        return previous

    def remove(self, path: str) -> DocumentData:
        """Remove and return the document at ``path``; KeyError if there is none."""
        self._added_or_removed = True
        return self._docs.pop(path)

    def get(self, path: str) -> DocumentData | None:
        """Return the document at ``path``, or None.

        The document is returned itself, so changes to it are kept; they do
        not count as a change to the set of documents.
        """
        return self._docs.get(path)

    def __iter__(self) -> Iterator[str]:
        return iter(self._docs)

    def take_changes(self) -> bool:
        """Return whether documents were added or removed since the last call."""
        changed, self._added_or_removed = self._added_or_removed, False
        return changed


@dataclass
class GlobalState:
    """State shared by all message handlers."""

    mem_docs: MemDocs = field(default_factory=MemDocs)