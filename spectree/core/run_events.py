"""Test runner lifecycle events.

Handlers of one signal run in connection order (direct connections on the
GUI thread).
"""
from typing import List
from PyQt6.QtCore import QObject, pyqtSignal

from .node import SpecNode, RunResult


class RunEvents(QObject):
    """
    Event hub between the test runner and the tree.

    Signals:
        discovered_tests: Flattened node list of a fresh discovery
        test_run_started: One node about to run
        test_results: List of RunResult from one runner batch
    """

    discovered_tests = pyqtSignal(list)
    test_run_started = pyqtSignal(object)
    test_results = pyqtSignal(list)

    def send_discovered_tests(self, nodes: List[SpecNode]) -> None:
        self.discovered_tests.emit(list(nodes))

    def send_test_run_started(self, node: SpecNode) -> None:
        self.test_run_started.emit(node)

    def send_test_results(self, results: List[RunResult]) -> None:
        self.test_results.emit(list(results))
