import logging

import pytest

from grimoire.lsp.documents import DocumentData, GlobalState
from grimoire.lsp.notifications import (
    did_change_text_document,
    did_close_text_document,
    did_open_text_document,
    handle_notification,
    unknown_notification,
)
from grimoire.lsp.protocol import Notification

URI = "file:///notes.txt"
LOGGER = "grimoire.lsp.notifications"


def _open(text="first", version=1):
    return Notification(
        "textDocument/didOpen",
        {"textDocument": {"uri": URI, "languageId": "text", "version": version, "text": text}},
    )


def _change(text, version=2):
    return Notification(
        "textDocument/didChange",
        {"textDocument": {"uri": URI, "version": version}, "contentChanges": [{"text": text}]},
    )


def _close():
    return Notification("textDocument/didClose", {"textDocument": {"uri": URI}})


def test_open_stores_document():
    state = GlobalState()
    handle_notification(_open("first", 1), state)
    assert state.mem_docs.get(URI) == DocumentData(1, "first")


def test_change_replaces_text_and_version():
    state = GlobalState()
    handle_notification(_open("first", 1), state)
    handle_notification(_change("second", 2), state)
    assert state.mem_docs.get(URI) == DocumentData(2, "second")


def test_close_removes_document():
    state = GlobalState()
    handle_notification(_open(), state)
    handle_notification(_close(), state)
    assert URI not in state.mem_docs
    assert len(state.mem_docs) == 0


def test_close_of_unknown_document_is_ignored():
    state = GlobalState()
    did_close_text_document(_close(), state)
    assert len(state.mem_docs) == 0
    assert state.mem_docs.take_changes() is True


def test_direct_handlers():
    state = GlobalState()
    did_open_text_document(_open("a"), state)
    did_change_text_document(_change("b"), state)
    assert state.mem_docs.get(URI).data == "b"


def test_change_with_no_changes_raises():
    state = GlobalState()
    message = Notification(
        "textDocument/didChange",
        {"textDocument": {"uri": URI, "version": 2}, "contentChanges": []},
    )
    with pytest.raises(IndexError):
        did_change_text_document(message, state)


def test_wrong_method_is_logged(caplog):
    state = GlobalState()
    with caplog.at_level(logging.ERROR, logger=LOGGER):
        did_open_text_document(_close(), state)
    assert len(state.mem_docs) == 0
    assert any(record.levelno == logging.ERROR for record in caplog.records)


def test_missing_fields_are_logged(caplog):
    state = GlobalState()
    message = Notification("textDocument/didOpen", {"textDocument": {"uri": URI}})
    with caplog.at_level(logging.ERROR, logger=LOGGER):
        handle_notification(message, state)
    assert URI not in state.mem_docs
    assert [r.levelno for r in caplog.records] == [logging.ERROR]


def test_unknown_method_is_logged(caplog):
    state = GlobalState()
    message = Notification("workspace/didChangeConfiguration", {"settings": {}})
    with caplog.at_level(logging.ERROR, logger=LOGGER):
        handle_notification(message, state)
    assert len(state.mem_docs) == 0
    assert "workspace/didChangeConfiguration" in caplog.text


def test_unknown_notification_logs_message(caplog):
    with caplog.at_level(logging.ERROR, logger=LOGGER):
        unknown_notification(Notification("custom/thing"))
    assert "custom/thing" in caplog.text