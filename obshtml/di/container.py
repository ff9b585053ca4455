from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QSettings

from obshtml.domain.interfaces import IMarkdownRenderer, ISettingsService, IShellRunner
from obshtml.plugins.manager import PluginManager
from obshtml.services.config.ini_config_service import IniConfigService
from obshtml.services.markdown_renderer import MarkdownRenderer
from obshtml.services.settings_service import SettingsService
from obshtml.services.shell_runner import QtShellRunner
from obshtml.services.ui.adapters import PluginAppAPI, QtNotifier, QtRenderSurface
from obshtml.services.ui.main_window import VaultWindow
from obshtml.services.vault_store import FileSystemVault
from obshtml.utils.constants import APP_NAME, APP_ORG, RENDER_DEBOUNCE_MS


class Container:
    """
    Lightweight DI container for one vault:
      - wires default services if not provided
      - builds the plugin API and the plugin manager
      - builds the window on demand (headless commands never need one)
    """

    def __init__(
        self,
        vault_root: Path,
        *,
        renderer: IMarkdownRenderer | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        config: IniConfigService | None = None,
        shell: IShellRunner | None = None,
    ) -> None:
        self.vault = FileSystemVault(vault_root)
        self.config = config or IniConfigService(vault_root=Path(vault_root))
        self.renderer: IMarkdownRenderer = renderer or MarkdownRenderer()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings(APP_ORG, APP_NAME)
        )
        self.shell: IShellRunner = shell or QtShellRunner()

        self.notifier = QtNotifier()
        self.surface = QtRenderSurface(
            self.vault,
            self.renderer,
            debounce_ms=self.config.get_int("render", "debounce_ms", RENDER_DEBOUNCE_MS)
            or 0,
        )

        self.app_api = PluginAppAPI(
            vault=self.vault,
            workspace=self.surface,
            notifier=self.notifier,
            shell=self.shell,
            settings=self.settings_service,
            config=self.config,
        )
        self.plugin_manager = PluginManager(api=self.app_api)

    def load_plugins(self) -> PluginManager:
        self.plugin_manager.reload()
        return self.plugin_manager

    def build_main_window(self, *, app_title: str = APP_NAME) -> VaultWindow:
        return VaultWindow(
            vault=self.vault,
            surface=self.surface,
            notifier=self.notifier,
            settings=self.settings_service,
            plugins=self.plugin_manager,
            api=self.app_api,
            app_title=app_title,
        )
