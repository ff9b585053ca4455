from __future__ import annotations

from .plugin_app_api import PluginAppAPI
from .qt_notifier import QtNotifier
from .qt_render_surface import QtRenderSurface
from .qt_timing import qt_wait

__all__ = [
    "PluginAppAPI",
    "QtNotifier",
    "QtRenderSurface",
    "qt_wait",
]
