from __future__ import annotations

import os
from pathlib import Path

# No display in CI: must be set before the first QApplication exists.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QApplication

from obshtml.services.markdown_renderer import MarkdownRenderer
from obshtml.services.settings_service import SettingsService
from obshtml.services.vault_store import FileSystemVault


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


@pytest.fixture()
def vault_root(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    return root


@pytest.fixture()
def vault(vault_root: Path) -> FileSystemVault:
    return FileSystemVault(vault_root)


def write_note(root: Path, rel: str, text: str = "# note") -> Path:
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


@pytest.fixture()
def add_note(vault_root: Path):
    """Create a file inside the vault: add_note("notes/b.md", "# B")."""

    def _add(rel: str, text: str = "# note") -> Path:
        return write_note(vault_root, rel, text)

    return _add


@pytest.fixture()
def no_user_config(monkeypatch, tmp_path: Path) -> Path:
    """Point the per-user config dir at an empty temp folder."""
    target = tmp_path / "usercfg"
    monkeypatch.setattr(
        "obshtml.services.config.ini_config_service.user_config_dir",
        lambda appname: str(target),
    )
    return target
