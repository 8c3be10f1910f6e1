"""
Qt-driven asyncio event loop.

Tree reads are coroutines while the debounce timer and signals live on the
Qt event loop. Running asyncio on a qasync ``QEventLoop`` puts both on the
same thread, so a read awaiting the parser still lets pending timers fire.
"""

import asyncio
from typing import Optional

import qasync
from PyQt6.QtWidgets import QApplication

from ..logging import get_logger

logger = get_logger(__name__)


def create_event_loop(app: Optional[QApplication] = None) -> qasync.QEventLoop:
    """Create a qasync loop over ``app`` and make it the current asyncio loop."""
    app = app or QApplication.instance()
    if app is None:
        raise RuntimeError("A QApplication must exist before the event loop")
    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)
    logger.debug("Installed qasync event loop")
    return loop
