"""User-visible error notification with a log inspection action."""
from typing import Callable, Optional
from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import QMessageBox, QWidget

from ..logging import get_logger, log_file_path

logger = get_logger(__name__)

OPEN_LOG_ACTION = "Open Log"


def open_log_file() -> None:
    """Open the active log file with the platform's default viewer."""
    path = log_file_path()
    if path is None:
        logger.warning("No log file configured, nothing to open")
        return
    QDesktopServices.openUrl(QUrl.fromLocalFile(path))


class ErrorNotifier:
    """Shows non-blocking error messages with an 'Open Log' button."""

    def __init__(self, parent: Optional[QWidget] = None,
                 open_log: Callable[[], None] = open_log_file):
        self._parent = parent
        self._open_log = open_log
        self._box: Optional[QMessageBox] = None

    def show_error(self, message: str) -> None:
        box = QMessageBox(self._parent)
        box.setIcon(QMessageBox.Icon.Critical)
        box.setWindowTitle("Test Tree")
        box.setText(message)
        open_log_btn = box.addButton(OPEN_LOG_ACTION, QMessageBox.ButtonRole.ActionRole)
        box.addButton(QMessageBox.StandardButton.Close)
        box.buttonClicked.connect(
            lambda btn: self._on_action(OPEN_LOG_ACTION if btn is open_log_btn else None)
        )
        # Non-modal so the event loop keeps running
        box.open()
        self._box = box

    def _on_action(self, action: Optional[str]) -> None:
        if action == OPEN_LOG_ACTION:
            self._open_log()
