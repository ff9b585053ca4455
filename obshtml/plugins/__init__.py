"""Plugin contract, discovery and the plugin manager."""

from .api import (
    ENTRYPOINT_GROUP,
    ActionSpec,
    BasePlugin,
    IAppAPI,
    IPlugin,
    IPluginOnLoad,
    IPluginSettingsTab,
    PluginMeta,
    SettingSpec,
)

__all__ = [
    "ENTRYPOINT_GROUP",
    "ActionSpec",
    "BasePlugin",
    "IAppAPI",
    "IPlugin",
    "IPluginOnLoad",
    "IPluginSettingsTab",
    "PluginMeta",
    "SettingSpec",
]
