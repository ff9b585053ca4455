from __future__ import annotations

from dataclasses import replace

from PyQt6.QtCore import QByteArray, Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QSplitter,
    QStatusBar,
    QTextBrowser,
    QToolBar,
)

from obshtml.domain.interfaces import IDocumentStore, ISettingsService
from obshtml.domain.models import Document
from obshtml.plugins.api import IAppAPI
from obshtml.plugins.manager import PluginManager
from obshtml.services.ui.adapters.qt_notifier import QtNotifier
from obshtml.services.ui.adapters.qt_render_surface import QtRenderSurface
from obshtml.services.ui.settings_dialog import PluginSettingsDialog
from obshtml.utils.constants import MODE_PREVIEW


class VaultWindow(QMainWindow):
    """Thin host window: vault file list, preview pane, plugin menus."""

    def __init__(
        self,
        *,
        vault: IDocumentStore,
        surface: QtRenderSurface,
        notifier: QtNotifier,
        settings: ISettingsService,
        plugins: PluginManager,
        api: IAppAPI,
        app_title: str = "ObsHtml Companion",
    ) -> None:
        super().__init__()
        self.setWindowTitle(f"{app_title} - {vault.base_path}")
        self.resize(1100, 700)

        self.vault = vault
        self.surface = surface
        self.notifier = notifier
        self.settings = settings
        self.plugins = plugins
        self._api = api

        # Widgets
        self.files = QListWidget(self)
        self.preview = QTextBrowser(self)
        self.preview.setOpenExternalLinks(True)

        self.splitter = QSplitter(self)
        self.splitter.setOrientation(Qt.Orientation.Horizontal)
        self.splitter.addWidget(self.files)
        self.splitter.addWidget(self.preview)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 3)
        self.setCentralWidget(self.splitter)

        self.setStatusBar(QStatusBar(self))
        surface.attach_preview(self.preview)
        notifier.attach(self.statusBar())

        self.files.currentItemChanged.connect(self._on_file_selected)

        self._build_actions()
        self._build_menu()
        self.refresh_files()

        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))
        split = self.settings.get_splitter()
        if isinstance(split, (bytes, bytearray)):
            self.splitter.restoreState(QByteArray(split))

    # ---------- UI creation ----------
    def _build_actions(self) -> None:
        self.act_refresh = QAction("Refresh", self, shortcut="F5", triggered=self.refresh_files)
        self.act_settings = QAction(
            "Plugin Settings…", self, triggered=self._show_plugin_settings
        )

        self.plugin_actions: list[tuple[QAction, bool]] = []
        for spec, handler in self.plugins.iter_actions():
            act = QAction(spec.title, self)
            if spec.shortcut:
                act.setShortcut(spec.shortcut)
            if spec.status_tip:
                act.setStatusTip(spec.status_tip)
            act.triggered.connect(lambda chk=False, h=handler: h(self._api))
            self.plugin_actions.append((act, spec.toolbar))

    def _build_menu(self) -> None:
        tb = QToolBar("Main", self)
        tb.setMovable(False)
        tb.addAction(self.act_refresh)
        for act, on_toolbar in self.plugin_actions:
            if on_toolbar:
                tb.addAction(act)
        self.addToolBar(tb)

        m = self.menuBar()
        filem = m.addMenu("&File")
        filem.addAction(self.act_refresh)

        toolsm = m.addMenu("&Tools")
        for act, _ in self.plugin_actions:
            toolsm.addAction(act)
        toolsm.addSeparator()
        toolsm.addAction(self.act_settings)

    # ---------- Actions ----------
    def refresh_files(self) -> None:
        self.files.clear()
        for doc in self.vault.list_markdown_files():
            self.files.addItem(QListWidgetItem(doc.path))

    def _on_file_selected(self, item: QListWidgetItem | None, _prev) -> None:
        if item is None:
            return
        try:
            self.surface.open_document(Document(path=item.text()))
        except (OSError, ValueError) as e:
            self.notifier.flash(f"Cannot open {item.text()}: {e}")
            return
        self.surface.set_view_state(replace(self.surface.get_view_state(), mode=MODE_PREVIEW))

    def _show_plugin_settings(self) -> None:
        for title, plugin in self.plugins.settings_tabs():
            PluginSettingsDialog(title, plugin, self._api, self).exec()

    # ---------- Close ----------
    def closeEvent(self, event):
        self.settings.set_geometry(bytes(self.saveGeometry()))
        self.settings.set_splitter(bytes(self.splitter.saveState()))
        super().closeEvent(event)
