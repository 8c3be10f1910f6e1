"""
Outline cache and change-detection scheduling.

Decides when the cached outline of the active document is stale, debounces
refreshes while typing and lazily re-parses on the next tree read.
"""

from enum import Enum, auto
from typing import List, Optional
from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..core.editor import (
    DocumentChangeEvent, TextDocument, TextEditor, is_main_editor, same_document,
)
from ..core.node import SpecNode
from ..core.outline import OutlineParser
from ..core.settings import (
    DEFAULT_LANGUAGE_ID, DEFAULT_UPDATE_ON_TYPE_DELAY_MS, UpdateOn,
)
from ..logging import get_logger
from .notifications import ErrorNotifier

logger = get_logger(__name__)


class SchedulerState(Enum):
    IDLE = auto()
    PENDING_REFRESH = auto()  # Debounce timer running


class OutlineScheduler(QObject):
    """
    Owns the outline cache of the tracked editor.

    An empty cache means "not parsed yet" or "invalidated"; both re-parse on
    the next root read. Each invalidation bumps a generation counter so a
    parse that resolves after a newer edit is not written back.

    Signals:
        tree_changed(object): Always None here - a full tree refresh
        parse_failed(str): The outline parser raised; carries the message
    """

    tree_changed = pyqtSignal(object)
    parse_failed = pyqtSignal(str)

    def __init__(
        self,
        outline_from_doc: OutlineParser,
        editor: Optional[TextEditor] = None,
        update_on: UpdateOn = UpdateOn.ON_TYPE,
        update_on_type_delay: int = DEFAULT_UPDATE_ON_TYPE_DELAY_MS,
        language_id: str = DEFAULT_LANGUAGE_ID,
        notifier: Optional[ErrorNotifier] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._outline_from_doc = outline_from_doc
        self._editor = editor
        self._update_on = update_on
        self._update_on_type_delay = max(update_on_type_delay, 0)
        self._language_id = language_id
        self._notifier = notifier

        self._roots: List[SpecNode] = []
        self._generation = 0
        self._state = SchedulerState.IDLE

        self._debounce_timer = QTimer(self)
        self._debounce_timer.setSingleShot(True)
        self._debounce_timer.timeout.connect(self._on_debounce_expired)

    # === Configuration ===

    def set_update_on(self, update_on: UpdateOn) -> None:
        self._update_on = update_on
        logger.debug(f"Outline update policy: {update_on.value}")

    def set_update_on_type_delay(self, delay_ms: int) -> None:
        self._update_on_type_delay = max(delay_ms, 0)

    def set_language_id(self, language_id: str) -> None:
        self._language_id = language_id

    @property
    def update_on(self) -> UpdateOn:
        return self._update_on

    @property
    def update_on_type_delay(self) -> int:
        return self._update_on_type_delay

    @property
    def editor(self) -> Optional[TextEditor]:
        return self._editor

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def cached_roots(self) -> List[SpecNode]:
        return list(self._roots)

    @property
    def generation(self) -> int:
        return self._generation

    # === Editor events ===

    def on_active_editor_changed(self, editor: Optional[TextEditor]) -> None:
        """Track a new active editor and request a full refresh."""
        if editor is not None and not is_main_editor(editor):
            # Settings, output panes and embedded editors keep the current tree
            return
        self._editor = editor
        self._invalidate()
        self._cancel_debounce()
        self.tree_changed.emit(None)

    def on_document_changed(self, event: DocumentChangeEvent) -> None:
        if not self._is_tracked_document(event.document):
            return
        if len(event.content_changes) == 0:
            return
        self._invalidate()
        if self._update_on is not UpdateOn.ON_TYPE:
            return
        # Last write wins: restarting replaces the pending expiry
        self._debounce_timer.start(self._update_on_type_delay)
        self._state = SchedulerState.PENDING_REFRESH

    def on_document_saved(self, document: TextDocument) -> None:
        if not self._is_tracked_document(document):
            return
        if self._update_on is not UpdateOn.ON_SAVE:
            return
        self._invalidate()
        self.tree_changed.emit(None)

    # === Tree reads ===

    async def get_children(self, node: Optional[SpecNode] = None) -> Optional[List[SpecNode]]:
        """Return the root outline, or the materialized children of ``node``.

        Root reads parse the document when the cache is empty. Parser
        failures are reported to the user and yield None.
        """
        if node is not None:
            return node.nodes

        editor = self._editor
        if editor is None:
            return None
        document = editor.document
        if document.language_id != self._language_id:
            logger.info(
                f'Did not populate outline view: document "{document.uri}" '
                f'language is not {self._language_id}.'
            )
            return None

        if not self._roots:
            generation = self._generation
            try:
                outline = await self._outline_from_doc(document)
            except Exception as e:
                logger.error(f"Could not populate the outline view: {e}")
                self.parse_failed.emit(str(e))
                self._report_error("Could not populate the outline view")
                return None

            if generation != self._generation:
                logger.debug(
                    f"Discarding outline of generation {generation}, "
                    f"cache is at {self._generation}"
                )
                return list(outline.nested)
            self._roots = list(outline.nested)

        return self._roots

    # === Internals ===

    def _is_tracked_document(self, document: TextDocument) -> bool:
        if self._editor is None:
            return False
        return same_document(self._editor.document, document)

    def _invalidate(self) -> None:
        self._roots = []
        self._generation += 1

    def _cancel_debounce(self) -> None:
        self._debounce_timer.stop()
        self._state = SchedulerState.IDLE

    def _on_debounce_expired(self) -> None:
        self._state = SchedulerState.IDLE
        self.tree_changed.emit(None)

    def _report_error(self, message: str) -> None:
        if self._notifier is None:
            self._notifier = ErrorNotifier()
        self._notifier.show_error(message)
