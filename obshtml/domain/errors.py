from __future__ import annotations


class ExportError(RuntimeError):
    """Raised when exporting the vault fails."""


class EmptyRenderError(ExportError):
    """The rendering surface produced no HTML for a document after all retries."""

    def __init__(self, path: str, attempts: int) -> None:
        super().__init__(f"Error: returned html is empty for {path}")
        self.path = path
        self.attempts = attempts


class DocumentLoadError(ExportError):
    """The rendering surface could not load a document (unreadable or not UTF-8)."""

    def __init__(self, path: str, reason: BaseException) -> None:
        super().__init__(f"Error: could not load {path} ({reason})")
        self.path = path
        self.reason = reason
