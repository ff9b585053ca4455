from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from obshtml.domain.models import ExportSettings, ExportSummary, ShellResult
from obshtml.plugins.api import (
    ActionSpec,
    BasePlugin,
    IAppAPI,
    IPluginOnLoad,
    IPluginSettingsTab,
    PluginMeta,
    SettingSpec,
)
from obshtml.services.exporter import VaultExporter
from obshtml.services.file_lists import KIND_ALL, KIND_MARKDOWN, dump_file_list
from obshtml.services.html_formatter import HtmlFormatter
from obshtml.services.render_poll import RetryPolicy
from obshtml.utils.constants import PLUGIN_NAME, POST_EXPORT_GENERATOR

ACTION_EXPORT = "org.obshtml.companion.export-html"
ACTION_LIST_MARKDOWN = "org.obshtml.companion.list-markdown-files"
ACTION_LIST_ALL = "org.obshtml.companion.list-all-files"


class _ApiConfig:
    """IConfigService view over the host API, for RetryPolicy.from_config."""

    def __init__(self, api: IAppAPI) -> None:
        self._api = api

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self._api.get_config(section, key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return self._api.get_config_int(section, key, default)

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return self._api.get_config_bool(section, key, default)


class ObsHtmlPlugin(BasePlugin, IPluginOnLoad, IPluginSettingsTab):
    """
    Exports the vault to HTML through the host's preview, and can run
    obsidianhtml on the result.

    Settings are read once on load (merged over defaults) and saved after
    every change made in the settings tab.
    """

    meta = PluginMeta(
        id="org.obshtml.companion",
        name="obs.html companion",
        version="0.1.0",
        description="Export every note to rendered HTML and optionally run obsidianhtml.",
        license="MIT",
    )

    def __init__(self) -> None:
        self._api: IAppAPI | None = None
        self.settings = ExportSettings()

    # -----------------------------
    # Lifecycle
    # -----------------------------

    def on_load(self, api: IAppAPI) -> None:
        self.settings = ExportSettings.from_mapping(api.load_data(self.meta.id))

    def activate(self, api: IAppAPI) -> None:
        self._api = api

    def deactivate(self) -> None:
        self._api = None

    # -----------------------------
    # Actions
    # -----------------------------

    def register_actions(self) -> Sequence[tuple[ActionSpec, Callable[[IAppAPI], None]]]:
        return (
            (
                ActionSpec(
                    id=ACTION_EXPORT,
                    title=f"{PLUGIN_NAME} Export html",
                    status_tip="Render every note and write it to the export folder",
                    toolbar=True,
                ),
                self.export_html,
            ),
            (
                ActionSpec(
                    id=ACTION_LIST_MARKDOWN,
                    title="Export list of all markdown files to export folder",
                ),
                lambda api: self.dump_file_list(api, KIND_MARKDOWN),
            ),
            (
                ActionSpec(
                    id=ACTION_LIST_ALL,
                    title="Export list of all files to export folder",
                ),
                lambda api: self.dump_file_list(api, KIND_ALL),
            ),
        )

    def export_html(self, api: IAppAPI) -> ExportSummary:
        exporter = self._build_exporter(api)
        return exporter.export_all(api.vault.list_markdown_files(), self.settings)

    def dump_file_list(self, api: IAppAPI, kind: str) -> str:
        return dump_file_list(api.vault, self._notifier(api), self.settings, kind)

    # -----------------------------
    # Settings tab
    # -----------------------------

    def settings_fields(self) -> Sequence[SettingSpec]:
        return (
            SettingSpec(
                key="output_root",
                label="Export folder",
                description=(
                    "This is the folder path (relative to your vault root) "
                    "where all the html files will be placed."
                ),
            ),
            SettingSpec(
                key="run_post_export",
                label="Run obsidianhtml after export?",
                kind="toggle",
            ),
            SettingSpec(
                key="post_export_config_path",
                label="Config.yml path",
                description="The *absolute* path to your config.yml file",
                placeholder="Enter your path",
            ),
            SettingSpec(
                key="post_export_working_dir",
                label="Working directory",
                description="Which folder do you want to run obsidianhtml from?",
                placeholder="Enter your path",
            ),
        )

    def settings_values(self) -> Mapping[str, Any]:
        return self.settings.to_mapping()

    def on_setting_changed(self, api: IAppAPI, key: str, value: Any) -> None:
        self.settings = self.settings.with_value(key, value)
        api.log_debug(f"{key}: {value!r}")
        api.save_data(self.meta.id, self.settings.to_mapping())

    # -----------------------------
    # Implementation
    # -----------------------------

    def _notifier(self, api: IAppAPI) -> Callable[..., None]:
        def flash(message: str, timeout_ms: int | None = None) -> None:
            api.show_notice(f"{PLUGIN_NAME} {message}", timeout_ms)

        return flash

    def _build_exporter(self, api: IAppAPI) -> VaultExporter:
        config = _ApiConfig(api)
        return VaultExporter(
            store=api.vault,
            surface=api.workspace,
            notify=self._notifier(api),
            sleep=api.wait,
            policy=RetryPolicy.from_config(config),
            formatter=HtmlFormatter(enabled=bool(config.get_bool("export", "pretty_html", True))),
            shell=_ApiShell(api),
            generator=config.get("export", "generator", POST_EXPORT_GENERATOR)
            or POST_EXPORT_GENERATOR,
        )


class _ApiShell:
    def __init__(self, api: IAppAPI) -> None:
        self._api = api

    def run(self, command: str) -> ShellResult:
        return self._api.run_shell(command)
