"""
Editor-side event source.

Forwards active-editor, document-changed and document-saved notifications
from the host editor to the test tree as Qt signals.
"""

from typing import Optional
from PyQt6.QtCore import QObject, pyqtSignal

from ..core.editor import DocumentChangeEvent, TextDocument, TextEditor, is_main_editor


class Workbench(QObject):
    """
    Host editor state as seen by the test tree.

    Signals:
        active_editor_changed(object): New active TextEditor, or None
        document_changed(object): DocumentChangeEvent
        document_saved(object): TextDocument that was saved
    """

    active_editor_changed = pyqtSignal(object)
    document_changed = pyqtSignal(object)
    document_saved = pyqtSignal(object)

    def __init__(self, active_editor: Optional[TextEditor] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._active_editor = active_editor

    @property
    def active_editor(self) -> Optional[TextEditor]:
        """The last main editor activated, or None. Same editor the tree tracks."""
        return self._active_editor

    def set_active_editor(self, editor: Optional[TextEditor]) -> None:
        """Report an editor switch.

        Every switch is emitted, but panes that are not a main editing
        column do not replace ``active_editor``.
        """
        if editor is None or is_main_editor(editor):
            self._active_editor = editor
        self.active_editor_changed.emit(editor)

    def notify_document_changed(self, event: DocumentChangeEvent) -> None:
        self.document_changed.emit(event)

    def notify_document_saved(self, document: TextDocument) -> None:
        self.document_saved.emit(document)
