from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from obshtml.domain.models import Document, ShellResult, VaultEntry, ViewState


class IDocumentStore(Protocol):
    """
    The host's vault. Paths are slash-delimited and relative to the vault root.

    create() fails if the entry already exists; create_folder() only creates a
    single level and fails if the parent is missing.
    """

    @property
    def base_path(self) -> str: ...

    def list_markdown_files(self) -> list[Document]: ...
    def list_files(self) -> list[Document]: ...
    def get_entry(self, path: str) -> VaultEntry | None: ...
    def read_text(self, path: str) -> str: ...
    def create(self, path: str, data: str) -> None: ...
    def delete(self, path: str) -> None: ...
    def create_folder(self, path: str) -> None: ...


class IRenderSurface(Protocol):
    """
    Shared UI component that turns the open document into HTML.

    Rendering is asynchronous and exposes no completion signal: callers poll
    rendered_html() until it is non-empty.
    """

    def open_document(self, doc: Document) -> None: ...
    def get_view_state(self) -> ViewState: ...
    def set_view_state(self, state: ViewState) -> None: ...
    def rendered_html(self) -> str: ...


@runtime_checkable
class INotifier(Protocol):
    """Transient user-visible messages (status bar, toast...)."""

    def flash(self, message: str, timeout_ms: int | None = None) -> None: ...


class IShellRunner(Protocol):
    def run(self, command: str) -> ShellResult: ...


class IMarkdownRenderer(Protocol):
    """Convert Markdown text to HTML: a body fragment, or a full page (including CSS)."""

    def to_body_html(self, markdown_text: str) -> str: ...
    def to_html(self, markdown_text: str) -> str: ...


class ISettingsService(Protocol):
    """Persist window state and plugin-scoped data."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_splitter(self) -> bytes | None: ...
    def set_splitter(self, blob: bytes) -> None: ...
    def get_raw(self, key: str, default: Any = None) -> Any: ...
    def set_raw(self, key: str, value: Any) -> None: ...
    def load_plugin_data(self, plugin_id: str) -> dict[str, Any] | None: ...
    def save_plugin_data(self, plugin_id: str, data: Mapping[str, Any]) -> None: ...


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
