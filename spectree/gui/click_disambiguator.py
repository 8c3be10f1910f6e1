"""Single-click vs double-click disambiguation for tree items.

The tree widget only reports plain activations, so a second activation of
the same span within the threshold is promoted to a double click.
"""

import time
from enum import Enum
from typing import Callable, Optional
from PyQt6.QtCore import QObject, pyqtSignal

from ..core.node import SpecNode, same_span
from ..core.settings import DEFAULT_DOUBLE_CLICK_THRESHOLD_MS


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class ClickIntent(Enum):
    SINGLE = "single"  # Navigate: highlight the node's span
    DOUBLE = "double"  # Jump to the node and focus the editor


class ClickDisambiguator(QObject):
    """
    Timer-free click state machine.

    Signals:
        single_clicked(object): SpecNode clicked once
        double_clicked(object): SpecNode clicked twice within the threshold
    """

    single_clicked = pyqtSignal(object)
    double_clicked = pyqtSignal(object)

    def __init__(
        self,
        double_click_threshold: int = DEFAULT_DOUBLE_CLICK_THRESHOLD_MS,
        clock: Callable[[], float] = _monotonic_ms,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._threshold = max(double_click_threshold, 0)
        self._clock = clock
        self._last_node: Optional[SpecNode] = None
        self._last_time: Optional[float] = None

    @property
    def double_click_threshold(self) -> int:
        return self._threshold

    def set_double_click_threshold(self, threshold_ms: int) -> None:
        self._threshold = max(threshold_ms, 0)

    def click(self, node: SpecNode, now: Optional[float] = None) -> ClickIntent:
        """Register a click on ``node`` at ``now`` (ms) and classify it."""
        if now is None:
            now = self._clock()

        recently_clicked = False
        if self._last_node is not None and self._last_time is not None:
            recently_clicked = (
                same_span(self._last_node, node)
                and (now - self._last_time) < self._threshold
            )
        self._last_node = node
        self._last_time = now

        if recently_clicked:
            self.double_clicked.emit(node)
            return ClickIntent.DOUBLE
        self.single_clicked.emit(node)
        return ClickIntent.SINGLE

    def reset(self) -> None:
        """Forget the previous click."""
        self._last_node = None
        self._last_time = None
