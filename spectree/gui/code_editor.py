"""
TextEditor backed by a QPlainTextEdit.

Node spans are character offsets into the document text.
"""

from typing import Optional
from PyQt6.QtGui import QColor, QTextCursor, QTextFormat
from PyQt6.QtWidgets import QPlainTextEdit, QTextEdit

from ..core.editor import TextDocument, TextEditor
from ..core.node import SpecNode
from ..logging import get_logger

logger = get_logger(__name__)

HIGHLIGHT_COLOR = QColor(255, 215, 0, 60)


class CodeEditor(TextEditor):
    """Adapts a QPlainTextEdit to the navigation primitives of the tree."""

    def __init__(
        self,
        widget: QPlainTextEdit,
        document: TextDocument,
        view_column: Optional[int] = 1,
        highlight_color: QColor = HIGHLIGHT_COLOR,
    ):
        super().__init__(document, view_column)
        self._widget = widget
        self._highlight_color = highlight_color
        self._highlighted: Optional[SpecNode] = None

    @property
    def widget(self) -> QPlainTextEdit:
        return self._widget

    @property
    def highlighted_node(self) -> Optional[SpecNode]:
        return self._highlighted

    def highlight_node(self, node: SpecNode) -> None:
        """Shade the node's span without touching the selection."""
        start, end = self._clamp(node.start), self._clamp(node.end)

        selection = QTextEdit.ExtraSelection()
        selection.format.setBackground(self._highlight_color)
        selection.format.setProperty(QTextFormat.Property.FullWidthSelection, False)
        cursor = QTextCursor(self._widget.document())
        cursor.setPosition(start)
        cursor.setPosition(end, QTextCursor.MoveMode.KeepAnchor)
        selection.cursor = cursor
        self._widget.setExtraSelections([selection])
        self._highlighted = node
        logger.debug(f"Highlighted span [{start},{end}]")

    def set_selection_to_node_start(self, node: SpecNode) -> None:
        cursor = self._widget.textCursor()
        cursor.setPosition(self._clamp(node.start))
        self._widget.setTextCursor(cursor)
        self._widget.ensureCursorVisible()

    def highlight_off(self) -> None:
        self._widget.setExtraSelections([])
        self._highlighted = None

    def focus(self) -> None:
        self._widget.setFocus()

    def _clamp(self, offset: int) -> int:
        length = self._widget.document().characterCount() - 1
        return min(max(offset, 0), max(length, 0))
