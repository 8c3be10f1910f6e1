"""Merges test run lifecycle events into the discovered node set."""
from typing import Any, List, Optional, Sequence, Set, Union
from PyQt6.QtCore import QObject, pyqtSignal

from ..core.discovery import DiscoveryIndex
from ..core.node import SpecNode, RunResult
from ..core.run_events import RunEvents
from ..logging import get_logger

logger = get_logger(__name__)


class RunReconciler(QObject):
    """
    Keeps ``running``/``result`` of discovered nodes in step with the runner.

    Every state change raises a targeted invalidation for that node only.

    Signals:
        node_changed(object): SpecNode whose run state or result changed
    """

    node_changed = pyqtSignal(object)

    def __init__(self, events: Optional[RunEvents] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._events = events
        self._index = DiscoveryIndex()

        if events is not None:
            events.discovered_tests.connect(self.on_discovered)
            events.test_run_started.connect(self.on_test_run_started)
            events.test_results.connect(self.on_test_results)

    @property
    def index(self) -> DiscoveryIndex:
        return self._index

    @property
    def discovered_tests(self) -> List[SpecNode]:
        return self._index.discovered_tests

    @property
    def root_node(self) -> Optional[SpecNode]:
        return self._index.root_node

    def on_discovered(self, nodes: Sequence[SpecNode]) -> None:
        self._index.on_discovered(nodes)

    def on_test_run_started(self, node: SpecNode) -> None:
        node.running = True
        self.node_changed.emit(node)

    def on_test_results(self, results: Sequence[Union[RunResult, dict]]) -> None:
        """Settle running nodes named in ``results``, then clear the rest.

        A result for an unknown or idle test is ignored. Any node still
        running after the batch is no longer reported by the runner and is
        forced back to idle.
        """
        settled: Set[str] = set()
        for result in results:
            result = _as_result(result)
            node = self._index.get(result.test_name)
            if node is None or not node.running:
                logger.debug(f"Ignoring result for non-running test {result.test_name!r}")
                continue
            node.running = False
            node.result = result
            settled.add(node.key)
            self.node_changed.emit(node)

        for node in self._index.discovered_tests:
            if node.running and node.key not in settled:
                node.running = False
                self.node_changed.emit(node)

    def prepare_to_run_test(self, node: SpecNode) -> None:
        """Mark ``node`` and its whole subtree as about to run."""
        for test in self._index.nodes_with_key(node.key):
            self._send_run_started(test)
            for child in test.nodes:
                self.prepare_to_run_test(child)

    def _send_run_started(self, node: SpecNode) -> None:
        # Through the hub so every subscriber sees the same event
        if self._events is not None:
            self._events.send_test_run_started(node)
        else:
            self.on_test_run_started(node)


def _as_result(result: Any) -> RunResult:
    if isinstance(result, RunResult):
        return result
    return RunResult.from_dict(result)
