"""Domain layer: interfaces, errors and simple models (dataclasses)."""

from .errors import DocumentLoadError, EmptyRenderError, ExportError
from .interfaces import (
    IConfigService,
    IDocumentStore,
    IMarkdownRenderer,
    INotifier,
    IRenderSurface,
    ISettingsService,
    IShellRunner,
)
from .models import (
    Document,
    ExportSettings,
    ExportSummary,
    ShellResult,
    VaultEntry,
    ViewState,
)

__all__ = [
    "IConfigService",
    "IDocumentStore",
    "IMarkdownRenderer",
    "INotifier",
    "IRenderSurface",
    "ISettingsService",
    "IShellRunner",
    "Document",
    "ExportSettings",
    "ExportSummary",
    "ShellResult",
    "VaultEntry",
    "ViewState",
    "ExportError",
    "EmptyRenderError",
    "DocumentLoadError",
]
