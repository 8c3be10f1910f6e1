"""Shared test fixtures for the spectree test suite.

Provides a session QApplication, node factories and recording fakes for
the editor and error notifier collaborators.
"""

import asyncio
import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from spectree.core.editor import TextDocument, TextEditor
from spectree.core.node import ROOT_KEY, SpecNode
from spectree.core.outline import Outline
from spectree.gui.async_loop import create_event_loop


@pytest.fixture(scope="session")
def qapp():
    """Session-scoped QApplication - shared by all tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app


@pytest.fixture
def qt_event_loop(qapp):
    """qasync loop driving both asyncio tasks and Qt timers."""
    loop = create_event_loop(qapp)
    yield loop
    loop.close()
    asyncio.set_event_loop(None)


class RecordingEditor(TextEditor):
    """TextEditor that records navigation calls instead of drawing."""

    def __init__(self, document, view_column=1):
        super().__init__(document, view_column)
        self.calls = []

    def highlight_node(self, node):
        self.calls.append(("highlight", node))

    def set_selection_to_node_start(self, node):
        self.calls.append(("select", node.start))

    def highlight_off(self):
        self.calls.append(("highlight_off",))

    def focus(self):
        self.calls.append(("focus",))


class RecordingNotifier:
    """ErrorNotifier stand-in that never opens a dialog."""

    def __init__(self):
        self.messages = []

    def show_error(self, message):
        self.messages.append(message)


@pytest.fixture
def node_factory():
    """Factory fixture - create SpecNodes with sequential spans."""
    _offset = [0]

    def _make(key, spec=True, nodes=None, start=None, end=None, name=None, text=None, focused=False):
        if start is None:
            start = _offset[0]
        if end is None:
            end = start + 10
        _offset[0] = end + 10
        return SpecNode(
            key=key,
            name=name or ("It" if spec else "Describe"),
            text=text if text is not None else key,
            start=start,
            end=end,
            spec=spec,
            focused=focused,
            nodes=list(nodes or []),
        )
    return _make


@pytest.fixture
def sample_tree(node_factory):
    """root{containerX{specA, specB}} as (root, container, spec_a, spec_b)."""
    spec_a = node_factory("specA")
    spec_b = node_factory("specB")
    container = node_factory("containerX", spec=False, nodes=[spec_a, spec_b])
    root = node_factory(ROOT_KEY, spec=False, nodes=[container])
    return root, container, spec_a, spec_b


@pytest.fixture
def go_document():
    return TextDocument(uri="file:///src/pkg/suite_test.go", language_id="go")


@pytest.fixture
def editor_factory():
    return RecordingEditor


@pytest.fixture
def editor(go_document):
    return RecordingEditor(go_document)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def parser_factory():
    """Factory fixture - async outline parsers that count their calls."""
    def _make(nested=None, error=None):
        calls = []

        async def _parse(document):
            calls.append(document)
            if error is not None:
                raise error
            return Outline.from_nested(nested or [])

        _parse.calls = calls
        return _parse
    return _make
