"""
Test tree data provider.

Ties together the outline scheduler (what the tree shows), the run
reconciler (which tests run and how they ended) and the click
disambiguator, and exposes the result to the tree view.
"""

import asyncio
from typing import Callable, List, Optional
from PyQt6.QtCore import QObject, pyqtSignal

from ..core.commands import CommandRegistry
from ..core.editor import TextEditor
from ..core.node import SpecNode
from ..core.outline import OutlineParser
from ..core.settings import TreeSettings, UpdateOn
from ..core.run_events import RunEvents
from ..logging import get_logger
from .click_disambiguator import ClickDisambiguator, ClickIntent
from .decoration import TreeItem, tree_item_for_node
from .notifications import ErrorNotifier
from .outline_scheduler import OutlineScheduler
from .run_reconciler import RunReconciler
from .workbench import Workbench

logger = get_logger(__name__)

CLICK_TREE_ITEM_COMMAND = "spectree.clickTreeItem"


class SpecTreeProvider(QObject):
    """
    Tree data source for the test explorer view.

    Signals:
        tree_changed(object): None for a full refresh, or the single
            SpecNode whose row must be repainted
        children_ready(object, object): (node, children) for a read started
            with request_children; node is None for the root read
        focus_editor_requested(): A double click moved focus to the editor
    """

    tree_changed = pyqtSignal(object)
    children_ready = pyqtSignal(object, object)
    focus_editor_requested = pyqtSignal()

    def __init__(
        self,
        events: RunEvents,
        workbench: Workbench,
        commands: CommandRegistry,
        outline_from_doc: OutlineParser,
        settings: Optional[TreeSettings] = None,
        click_command: str = CLICK_TREE_ITEM_COMMAND,
        notifier: Optional[ErrorNotifier] = None,
        clock: Optional[Callable[[], float]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        settings = settings or TreeSettings()
        self._workbench = workbench
        self._click_command = click_command

        self._scheduler = OutlineScheduler(
            outline_from_doc,
            editor=workbench.active_editor,
            update_on=settings.update_on,
            update_on_type_delay=settings.update_on_type_delay,
            language_id=settings.language_id,
            notifier=notifier,
            parent=self,
        )
        self._reconciler = RunReconciler(events, parent=self)
        click_kwargs = {"clock": clock} if clock is not None else {}
        self._clicks = ClickDisambiguator(
            settings.double_click_threshold, parent=self, **click_kwargs
        )

        self._scheduler.tree_changed.connect(self.tree_changed.emit)
        self._reconciler.node_changed.connect(self.tree_changed.emit)

        workbench.active_editor_changed.connect(self._scheduler.on_active_editor_changed)
        workbench.document_changed.connect(self._scheduler.on_document_changed)
        workbench.document_saved.connect(self._scheduler.on_document_saved)

        self._unregister_click = commands.register(click_command, self.click_tree_item)

    # === Properties ===

    @property
    def discovered_tests(self) -> List[SpecNode]:
        return self._reconciler.discovered_tests

    @property
    def root_node(self) -> Optional[SpecNode]:
        return self._reconciler.root_node

    @property
    def editor(self) -> Optional[TextEditor]:
        return self._scheduler.editor

    @property
    def scheduler(self) -> OutlineScheduler:
        return self._scheduler

    @property
    def reconciler(self) -> RunReconciler:
        return self._reconciler

    @property
    def clicks(self) -> ClickDisambiguator:
        return self._clicks

    # === Configuration ===

    def set_update_on(self, update_on: UpdateOn) -> None:
        self._scheduler.set_update_on(update_on)

    def set_update_on_type_delay(self, delay_ms: int) -> None:
        self._scheduler.set_update_on_type_delay(delay_ms)

    def set_double_click_threshold(self, threshold_ms: int) -> None:
        self._clicks.set_double_click_threshold(threshold_ms)

    def apply_settings(self, settings: TreeSettings) -> None:
        """Apply changed settings; they take effect from the next event."""
        self.set_update_on(settings.update_on)
        self.set_update_on_type_delay(settings.update_on_type_delay)
        self.set_double_click_threshold(settings.double_click_threshold)
        self._scheduler.set_language_id(settings.language_id)

    # === Tree data ===

    async def get_children(self, node: Optional[SpecNode] = None) -> Optional[List[SpecNode]]:
        return await self._scheduler.get_children(node)

    def request_children(
        self,
        node: Optional[SpecNode] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> "asyncio.Task":
        """Start a tree read on the Qt-driven loop and emit ``children_ready``.

        For views that cannot await: the result arrives as a signal once the
        parse finishes, while debounce timers keep running.
        """
        loop = loop or asyncio.get_event_loop()
        task = loop.create_task(self.get_children(node))

        def _deliver(done: "asyncio.Task") -> None:
            if done.cancelled():
                return
            self.children_ready.emit(node, done.result())

        task.add_done_callback(_deliver)
        return task

    def get_tree_item(self, node: SpecNode) -> TreeItem:
        return tree_item_for_node(node, self._click_command)

    def prepare_to_run_test(self, node: SpecNode) -> None:
        self._reconciler.prepare_to_run_test(node)

    # === Clicks ===

    def click_tree_item(self, node: SpecNode) -> Optional[ClickIntent]:
        """Handle a tree item activation.

        The view reports only single activations; two on the same span in
        quick succession jump to the node and hand focus to the editor.
        """
        editor = self._scheduler.editor
        if editor is None:
            return None

        intent = self._clicks.click(node)
        if intent is ClickIntent.SINGLE:
            editor.highlight_node(node)
            return intent

        editor.set_selection_to_node_start(node)
        editor.highlight_off()
        editor.focus()
        self.focus_editor_requested.emit()
        return intent

    def dispose(self) -> None:
        """Unregister the click command."""
        self._unregister_click()
