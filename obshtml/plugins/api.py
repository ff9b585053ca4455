from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Protocol, runtime_checkable

from obshtml.domain.interfaces import IDocumentStore, IRenderSurface
from obshtml.domain.models import ShellResult

# Entry-point group plugin packages should use in pyproject.toml:
# [project.entry-points."obshtml.plugins"]
# my_plugin = "my_pkg.plugin:Plugin"
ENTRYPOINT_GROUP = "obshtml.plugins"

# -----------------------------------------------------------------------------
# Core metadata + action/setting specs
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class PluginMeta:
    """
    Metadata describing a plugin.

    `id` must be globally unique and stable over time: it also namespaces the
    plugin's persisted data.
    """

    id: str  # e.g. "org.obshtml.companion"
    name: str
    version: str
    description: str = ""
    author: str = ""
    license: str = ""


MenuName = Literal["File", "Tools", "Help"]


@dataclass(frozen=True)
class ActionSpec:
    """
    A command the host surfaces in its menus (and the toolbar, as a hint).

    `id` should be unique within the plugin namespace; hosts can trigger
    actions by id (see PluginManager.run_action).
    """

    id: str
    title: str
    menu: str | MenuName = "Tools"
    shortcut: str | None = None
    status_tip: str | None = None
    toolbar: bool = False


SettingKind = Literal["text", "toggle"]


@dataclass(frozen=True)
class SettingSpec:
    """One field of a plugin's settings tab; rendered by the host."""

    key: str
    label: str
    kind: SettingKind = "text"
    description: str = ""
    placeholder: str = ""


# -----------------------------------------------------------------------------
# Host -> Plugin stable API (no Qt types)
# -----------------------------------------------------------------------------


class IAppAPI(Protocol):
    """
    Capabilities the host exposes to plugins.

    No Qt types appear here; plugins get plain data and the host's collaborator
    protocols.
    """

    # -----------------------------
    # Vault + rendering surface
    # -----------------------------
    @property
    def vault(self) -> IDocumentStore: ...

    @property
    def workspace(self) -> IRenderSurface: ...

    # -----------------------------
    # UX messaging + timing
    # -----------------------------
    def show_notice(self, message: str, timeout_ms: int | None = None) -> None: ...

    def wait(self, ms: int) -> None:
        """Suspend for `ms` without freezing the host UI."""
        ...

    # -----------------------------
    # External commands
    # -----------------------------
    def run_shell(self, command: str) -> ShellResult: ...

    # -----------------------------
    # Plugin-scoped persisted data + app config
    # -----------------------------
    def load_data(self, plugin_id: str) -> dict[str, Any] | None: ...
    def save_data(self, plugin_id: str, data: Mapping[str, Any]) -> None: ...
    def get_config(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_config_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_config_bool(
        self, section: str, key: str, default: bool | None = None
    ) -> bool | None: ...

    # -----------------------------
    # Logging
    # -----------------------------
    def log_debug(self, message: str) -> None: ...
    def log_info(self, message: str) -> None: ...
    def log_warning(self, message: str) -> None: ...
    def log_error(self, message: str) -> None: ...


# -----------------------------------------------------------------------------
# Plugin contract
# -----------------------------------------------------------------------------


@runtime_checkable
class IPlugin(Protocol):
    """
    Main plugin contract.

    Lifecycle:
      - activate(api) is called once the host API exists
      - deactivate() is called on shutdown
    """

    meta: PluginMeta

    def activate(self, api: IAppAPI) -> None: ...

    def deactivate(self) -> None: ...

    def register_actions(self) -> Sequence[tuple[ActionSpec, Callable[[IAppAPI], None]]]:
        """Return (ActionSpec, handler) tuples. Handlers receive the IAppAPI."""
        return ()


# -----------------------------------------------------------------------------
# Optional hooks (duck-typed by host)
# -----------------------------------------------------------------------------


@runtime_checkable
class IPluginOnLoad(Protocol):
    """Called once per app start, before activate(). Read persisted settings here."""

    def on_load(self, api: IAppAPI) -> None: ...


@runtime_checkable
class IPluginSettingsTab(Protocol):
    """
    A plugin with user-editable settings.

    The host renders settings_fields() and calls on_setting_changed() for every
    edit; the plugin is responsible for persisting the new value.
    """

    def settings_fields(self) -> Sequence[SettingSpec]: ...

    def settings_values(self) -> Mapping[str, Any]: ...

    def on_setting_changed(self, api: IAppAPI, key: str, value: Any) -> None: ...


# -----------------------------------------------------------------------------
# Optional: convenience base class plugin authors can inherit from
# -----------------------------------------------------------------------------


class BasePlugin:
    """No-op lifecycle and extensions; subclasses override what they need."""

    meta: PluginMeta

    def activate(self, api: IAppAPI) -> None:  # pragma: no cover
        self._api = api  # type: ignore[attr-defined]

    def deactivate(self) -> None:  # pragma: no cover
        pass

    def register_actions(
        self,
    ) -> Sequence[tuple[ActionSpec, Callable[[IAppAPI], None]]]:  # pragma: no cover
        return ()
