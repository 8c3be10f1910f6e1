"""Editor-side collaborator types: documents, change events, editors."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .node import SpecNode


@dataclass(frozen=True)
class TextDocument:
    """Identity of an open document.

    Frozen for hashability - can be used as dict key.
    """
    uri: str
    language_id: str


@dataclass
class DocumentChangeEvent:
    """A document edit; only the number of content changes matters here."""
    document: TextDocument
    content_changes: Sequence[object] = field(default_factory=tuple)


class TextEditor(ABC):
    """An editor showing one document.

    Subclasses implement the navigation primitives the test tree needs.
    ``view_column`` is None for editors that are not a main editing column
    (embedded editors, output panes, settings).
    """

    def __init__(self, document: TextDocument, view_column: Optional[int] = 1):
        self.document = document
        self.view_column = view_column

    @abstractmethod
    def highlight_node(self, node: SpecNode) -> None:
        """Shade the node's span without moving the selection."""

    @abstractmethod
    def set_selection_to_node_start(self, node: SpecNode) -> None:
        """Move the caret to the node's start offset."""

    @abstractmethod
    def highlight_off(self) -> None:
        """Remove any node highlight."""

    @abstractmethod
    def focus(self) -> None:
        """Give keyboard focus to the editing surface."""


def is_main_editor(editor: TextEditor) -> bool:
    """True if the editor is one where a user is editing source."""
    return editor.view_column is not None


def same_document(a: TextDocument, b: TextDocument) -> bool:
    return a.uri == b.uri
