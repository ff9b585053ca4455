from __future__ import annotations

from PyQt6.QtCore import QEventLoop, QTimer


def qt_wait(ms: int) -> None:
    """
    Suspend the caller for `ms` milliseconds while the Qt event loop keeps running
    (timers fire, widgets repaint). Avoids blocking the UI thread with time.sleep().
    """
    loop = QEventLoop()
    QTimer.singleShot(max(0, int(ms)), loop.quit)
    loop.exec()
