from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from PyQt6.QtCore import QByteArray, QSettings

from obshtml.domain.interfaces import ISettingsService
from obshtml.utils.constants import SETTINGS_GEOMETRY, SETTINGS_PLUGIN_DATA, SETTINGS_SPLITTER

logger = logging.getLogger(__name__)


class SettingsService(ISettingsService):
    """Persist window geometry/splitter and per-plugin data blobs in QSettings."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_geometry(self) -> bytes | None:
        v = self._s.value(SETTINGS_GEOMETRY)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_splitter(self) -> bytes | None:
        v = self._s.value(SETTINGS_SPLITTER)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_splitter(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_SPLITTER, QByteArray(blob))

    def get_raw(self, key: str, default: Any = None) -> Any:
        return self._s.value(key, default)

    def set_raw(self, key: str, value: Any) -> None:
        self._s.setValue(key, value)

    # ---------- Plugin data ----------

    def load_plugin_data(self, plugin_id: str) -> dict[str, Any] | None:
        """Stored mapping for `plugin_id`, or None if absent or unreadable."""
        raw = self.get_raw(SETTINGS_PLUGIN_DATA.format(plugin_id=plugin_id))
        if not isinstance(raw, str) or not raw:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt settings for plugin %s", plugin_id)
            return None
        return data if isinstance(data, dict) else None

    def save_plugin_data(self, plugin_id: str, data: Mapping[str, Any]) -> None:
        self.set_raw(SETTINGS_PLUGIN_DATA.format(plugin_id=plugin_id), json.dumps(dict(data)))
        self._s.sync()
