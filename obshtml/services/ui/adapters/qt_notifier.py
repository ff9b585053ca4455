from __future__ import annotations

import logging

from PyQt6.QtWidgets import QStatusBar

from obshtml.domain.interfaces import INotifier

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 4000


class QtNotifier(INotifier):
    """Logs every notice and shows it on the window's status bar once one is attached."""

    def __init__(self, status_bar: QStatusBar | None = None) -> None:
        self._bar = status_bar

    def attach(self, status_bar: QStatusBar | None) -> None:
        self._bar = status_bar

    def flash(self, message: str, timeout_ms: int | None = None) -> None:
        logger.info("%s", message)
        if self._bar is not None:
            self._bar.showMessage(message, DEFAULT_TIMEOUT_MS if timeout_ms is None else timeout_ms)
