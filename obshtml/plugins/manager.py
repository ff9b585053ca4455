from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from obshtml.plugins.api import (
    ActionSpec,
    IAppAPI,
    IPlugin,
    IPluginOnLoad,
    IPluginSettingsTab,
)
from obshtml.plugins.discovery import discover_plugins

logger = logging.getLogger(__name__)

Handler = Callable[[IAppAPI], None]


@dataclass(frozen=True)
class PluginInfo:
    plugin_id: str
    name: str
    version: str
    description: str


class PluginManager:
    """
    Discovers plugins, activates them against the host API and exposes their actions.

    Host wiring contract:
      plugin_manager = PluginManager(api=app_api)
      plugin_manager.reload()

    set_api() swaps the API later; it takes effect on the next reload().

    Best-effort throughout: a plugin that fails to build, load or activate is
    logged and skipped; it never takes the host down.
    """

    def __init__(self, *, api: IAppAPI | None = None) -> None:
        self._api: IAppAPI | None = api
        self._plugins: dict[str, IPlugin] = {}
        self._active: dict[str, IPlugin] = {}
        self._loaded_once: set[str] = set()

    def set_api(self, api: IAppAPI) -> None:
        self._api = api

    # ----------------------------- discovery -----------------------------

    def discover(self) -> None:
        self._plugins.clear()

        for discovered in discover_plugins():
            try:
                factory = discovered.factory
                plugin = factory() if callable(factory) else factory
                self._plugins[str(plugin.meta.id)] = plugin
            except Exception:
                logger.exception("Skipping broken plugin %s", discovered.entry_point_name)
                continue

    def list_plugins(self) -> list[PluginInfo]:
        return [
            PluginInfo(
                plugin_id=str(p.meta.id),
                name=str(p.meta.name),
                version=str(p.meta.version),
                description=str(p.meta.description),
            )
            for p in self._plugins.values()
        ]

    def get(self, plugin_id: str) -> IPlugin:
        return self._plugins[plugin_id]

    # ----------------------------- lifecycle -----------------------------

    def reload(self) -> None:
        """
        Re-discover plugins and activate them.

        Ordering per plugin: on_load(api) once per process, then activate(api).
        """
        self.shutdown()
        self.discover()

        api = self._api
        if api is None:
            # Without an API, we can still discover/list, but can't activate.
            return

        for pid, plugin in self._plugins.items():
            if pid not in self._loaded_once and isinstance(plugin, IPluginOnLoad):
                try:
                    plugin.on_load(api)
                except Exception:
                    logger.exception("on_load failed for plugin %s", pid)
                finally:
                    self._loaded_once.add(pid)

            try:
                plugin.activate(api)
                self._active[pid] = plugin
            except Exception:
                logger.exception("Activation failed for plugin %s", pid)
                continue

    def shutdown(self) -> None:
        for pid, plugin in list(self._active.items()):
            try:
                plugin.deactivate()
            except Exception:
                logger.exception("Deactivation failed for plugin %s", pid)
        self._active.clear()

    # ----------------------------- actions -----------------------------

    def iter_actions(self) -> Sequence[tuple[ActionSpec, Handler]]:
        """(ActionSpec, handler) for every active plugin, in discovery order."""
        actions: list[tuple[ActionSpec, Handler]] = []
        for pid, plugin in self._active.items():
            try:
                actions.extend(plugin.register_actions())
            except Exception:
                logger.exception("register_actions failed for plugin %s", pid)
                continue
        return actions

    def run_action(self, action_id: str) -> None:
        """Trigger an action by id, like a command palette entry. KeyError if unknown."""
        api = self._api
        if api is None:
            raise RuntimeError("Plugin API not set; call set_api() first.")

        for spec, handler in self.iter_actions():
            if spec.id == action_id:
                handler(api)
                return
        raise KeyError(action_id)

    def settings_tabs(self) -> list[tuple[str, IPluginSettingsTab]]:
        return [
            (str(plugin.meta.name), plugin)
            for plugin in self._active.values()
            if isinstance(plugin, IPluginSettingsTab)
        ]
