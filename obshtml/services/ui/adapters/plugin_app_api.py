from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from obshtml.domain.interfaces import (
    IConfigService,
    IDocumentStore,
    INotifier,
    IRenderSurface,
    ISettingsService,
    IShellRunner,
)
from obshtml.domain.models import ShellResult
from obshtml.plugins.api import IAppAPI
from obshtml.services.ui.adapters.qt_timing import qt_wait

_plugin_log = logging.getLogger("obshtml.plugins")


class PluginAppAPI(IAppAPI):
    """Host capabilities handed to plugins, backed by the container's services."""

    def __init__(
        self,
        *,
        vault: IDocumentStore,
        workspace: IRenderSurface,
        notifier: INotifier,
        shell: IShellRunner,
        settings: ISettingsService,
        config: IConfigService,
        wait: Callable[[int], None] = qt_wait,
    ) -> None:
        self._vault = vault
        self._workspace = workspace
        self._notifier = notifier
        self._shell = shell
        self._settings = settings
        self._config = config
        self._wait = wait

    @property
    def vault(self) -> IDocumentStore:
        return self._vault

    @property
    def workspace(self) -> IRenderSurface:
        return self._workspace

    def show_notice(self, message: str, timeout_ms: int | None = None) -> None:
        self._notifier.flash(message, timeout_ms)

    def wait(self, ms: int) -> None:
        self._wait(ms)

    def run_shell(self, command: str) -> ShellResult:
        return self._shell.run(command)

    def load_data(self, plugin_id: str) -> dict[str, Any] | None:
        return self._settings.load_plugin_data(plugin_id)

    def save_data(self, plugin_id: str, data: Mapping[str, Any]) -> None:
        self._settings.save_plugin_data(plugin_id, data)

    def get_config(self, section: str, key: str, default: str | None = None) -> str | None:
        return self._config.get(section, key, default)

    def get_config_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return self._config.get_int(section, key, default)

    def get_config_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return self._config.get_bool(section, key, default)

    def log_debug(self, message: str) -> None:
        _plugin_log.debug(message)

    def log_info(self, message: str) -> None:
        _plugin_log.info(message)

    def log_warning(self, message: str) -> None:
        _plugin_log.warning(message)

    def log_error(self, message: str) -> None:
        _plugin_log.error(message)
