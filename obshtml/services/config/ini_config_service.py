# obshtml/services/config/ini_config_service.py
from __future__ import annotations

import configparser
import logging
from collections.abc import Mapping
from pathlib import Path

from platformdirs import user_config_dir

from obshtml.domain.interfaces import IConfigService
from obshtml.utils.constants import (
    APP_NAME,
    POST_EXPORT_GENERATOR,
    RENDER_DEBOUNCE_MS,
    RENDER_INITIAL_DELAY_MS,
    RENDER_MAX_ATTEMPTS,
    RENDER_RETRY_INTERVAL_MS,
)

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, dict[str, str]] = {
    "export": {
        "initial_delay_ms": str(RENDER_INITIAL_DELAY_MS),
        "retry_interval_ms": str(RENDER_RETRY_INTERVAL_MS),
        "max_attempts": str(RENDER_MAX_ATTEMPTS),
        "pretty_html": "true",
        "generator": POST_EXPORT_GENERATOR,
    },
    "render": {
        "debounce_ms": str(RENDER_DEBOUNCE_MS),
    },
}


class IniConfigService(IConfigService):
    r"""
    INI-backed application configuration.

    Load order (first readable file wins):
      1. Explicit path provided at construction
      2. User config dir (e.g. ~/.config/ObsHtml Companion/config.ini)
      3. <vault>/.obshtml/config.ini

    Keys missing from the file fall back to DEFAULTS.
    """

    DEFAULT_FILE = "config.ini"

    def __init__(self, explicit_path: Path | None = None, vault_root: Path | None = None) -> None:
        self._parser = configparser.ConfigParser()
        self._parser.read_dict(DEFAULTS)
        self._loaded_from: Path | None = None

        candidates: list[Path] = []
        if explicit_path:
            candidates.append(explicit_path)
        candidates.append(Path(user_config_dir(APP_NAME)) / self.DEFAULT_FILE)
        if vault_root:
            candidates.append(vault_root / ".obshtml" / self.DEFAULT_FILE)

        for path in candidates:
            if not path.exists():
                continue
            try:
                with path.open("r", encoding="utf-8") as fh:
                    self._parser.read_file(fh)
            except (OSError, configparser.Error) as e:
                # Malformed config: keep the defaults and try the next candidate.
                logger.warning("Skipping unreadable config %s: %s", path, e)
                continue
            self._loaded_from = path
            break

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        if section not in self._parser:
            return default
        return self._parser[section].get(key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        val = self.get(section, key, None)
        if val is None:
            return default
        try:
            return int(val.strip())
        except ValueError:
            return default

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        val = self.get(section, key, None)
        if val is None:
            return default
        truth = {"1", "true", "yes", "y", "on"}
        falsy = {"0", "false", "no", "n", "off"}
        s = val.strip().lower()
        if s in truth:
            return True
        if s in falsy:
            return False
        return default

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return {sect: dict(self._parser[sect]) for sect in self._parser.sections()}

    @property
    def loaded_from(self) -> Path | None:
        """For diagnostics."""
        return self._loaded_from
