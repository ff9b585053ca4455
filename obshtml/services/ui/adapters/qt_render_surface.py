from __future__ import annotations

import logging
from dataclasses import replace

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QTextBrowser

from obshtml.domain.interfaces import IDocumentStore, IMarkdownRenderer, IRenderSurface
from obshtml.domain.models import Document, ViewState
from obshtml.utils.constants import MODE_PREVIEW, RENDER_DEBOUNCE_MS

logger = logging.getLogger(__name__)


class QtRenderSurface(IRenderSurface):
    """
    The host's preview pane.

    Entering preview mode (or opening a file while in it) only schedules a
    debounced render; the HTML shows up when the timer fires. Nothing signals
    completion, so readers poll rendered_html().
    """

    def __init__(
        self,
        store: IDocumentStore,
        renderer: IMarkdownRenderer,
        *,
        debounce_ms: int = RENDER_DEBOUNCE_MS,
        preview: QTextBrowser | None = None,
    ) -> None:
        self._store = store
        self._renderer = renderer
        self._preview = preview

        self._state = ViewState()
        self._text = ""
        self._html = ""

        self._debounce = QTimer()
        self._debounce.setInterval(max(0, debounce_ms))
        self._debounce.setSingleShot(True)
        self._debounce.timeout.connect(self._render)

    def attach_preview(self, preview: QTextBrowser | None) -> None:
        self._preview = preview

    # ---------- IRenderSurface ----------

    def open_document(self, doc: Document) -> None:
        self.set_view_state(replace(self._state, file=doc.path))

    def get_view_state(self) -> ViewState:
        return self._state

    def set_view_state(self, state: ViewState) -> None:
        if state.file != self._state.file:
            self._text = self._store.read_text(state.file) if state.file else ""
            self._clear()
        elif state.mode != MODE_PREVIEW:
            self._clear()

        self._state = state
        if state.mode == MODE_PREVIEW and state.file:
            self._debounce.start()

    def rendered_html(self) -> str:
        return self._html

    # ---------- Internals ----------

    def _clear(self) -> None:
        self._debounce.stop()
        self._html = ""
        if self._preview is not None:
            self._preview.clear()

    def _render(self) -> None:
        self._html = self._renderer.to_body_html(self._text)
        logger.debug("Rendered %s (%d chars)", self._state.file, len(self._html))
        if self._preview is not None:
            self._preview.setHtml(self._renderer.to_html(self._text))
