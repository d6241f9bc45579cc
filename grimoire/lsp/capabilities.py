"""The capabilities this language server announces to clients."""

from __future__ import annotations

import logging
from typing import Any

_log = logging.getLogger(__name__)

TEXT_DOCUMENT_SYNC_FULL = 1

TOKEN_TYPES = (
    "class",
    "comment",
    "decorator",
    "enum",
    "enumMember",
    "event",
    "function",
    "interface",
    "keyword",
    "macro",
    "method",
    "modifier",
    "namespace",
    "number",
    "operator",
    "parameter",
    "property",
    "regexp",
    "string",
    "struct",
    "type",
    "typeParameter",
    "variable",
)

TOKEN_MODIFIERS = (
    "abstract",
    "async",
    "declaration",
    "defaultLibrary",
    "definition",
    "deprecated",
    "documentation",
    "modification",
    "readonly",
    "static",
)


def server_capabilities() -> dict[str, Any]:
    """Return a fresh capabilities object for the initialize response.

    Offers completion triggered by ``-``, whole-document formatting, full
    semantic tokens, and full-text document sync with open/close events.
    """
    _log.debug("Defining server capabilities")
    return {
        "textDocumentSync": {
            "openClose": True,
            "change": TEXT_DOCUMENT_SYNC_FULL,
        },
        "completionProvider": {"triggerCharacters": ["-"]},
        "documentFormattingProvider": True,
        "semanticTokensProvider": {
            "legend": {
                "tokenTypes": list(TOKEN_TYPES),
                "tokenModifiers": list(TOKEN_MODIFIERS),
            },
            "full": True,
        },
    }