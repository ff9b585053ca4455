from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from obshtml.utils.constants import MODE_SOURCE


@dataclass(frozen=True)
class Document:
    """A vault document, identified by its slash-delimited vault-relative path."""

    path: str


@dataclass(frozen=True)
class VaultEntry:
    path: str
    is_folder: bool = False


@dataclass(frozen=True)
class ViewState:
    """What the rendering surface shows: which file, and in which mode."""

    file: str | None = None
    mode: str = MODE_SOURCE


_TRUTHY = {"1", "true", "yes", "y", "on"}


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    if value is None:
        return default
    return bool(value)


def _as_str(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value)


@dataclass(frozen=True)
class ExportSettings:
    """
    Plugin settings, persisted as a flat mapping.

    Loaded once at startup merged over the defaults below, replaced on every
    settings-UI change (see with_value) and saved right after.
    """

    output_root: str = "obs.html/export"
    run_post_export: bool = False
    post_export_working_dir: str = ""
    post_export_config_path: str = ""

    @classmethod
    def from_mapping(cls, loaded: Mapping[str, Any] | None) -> ExportSettings:
        base = cls()
        if not loaded:
            return base
        return base._merged(loaded)

    def _merged(self, values: Mapping[str, Any]) -> ExportSettings:
        known = {f.name for f in fields(self)}
        changes: dict[str, Any] = {}
        for key, value in values.items():
            if key not in known:
                continue
            current = getattr(self, key)
            if isinstance(current, bool):
                changes[key] = _as_bool(value, current)
            else:
                changes[key] = _as_str(value, current)
        if "output_root" in changes:
            changes["output_root"] = changes["output_root"].strip().strip("/")
        return replace(self, **changes)

    def with_value(self, key: str, value: Any) -> ExportSettings:
        if key not in {f.name for f in fields(self)}:
            raise KeyError(key)
        return self._merged({key: value})

    def to_mapping(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ShellResult:
    exit_status: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        # Anything on stderr counts as failure; so does silence.
        if self.stderr:
            return False
        return bool(self.stdout) and self.exit_status == 0


@dataclass
class ExportSummary:
    exported: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    empty: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    post_export: ShellResult | None = None
