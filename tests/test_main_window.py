from __future__ import annotations

import pytest
from PyQt6.QtWidgets import QCheckBox, QLineEdit

from obshtml.di.container import Container
from obshtml.services.ui.adapters import qt_wait
from obshtml.services.ui.settings_dialog import PluginSettingsDialog


@pytest.fixture()
def container(qapp, vault_root, qsettings, no_user_config, add_note) -> Container:
    add_note("a.md", "# Alpha")
    add_note("notes/b.md", "beta")
    c = Container(vault_root, qsettings=qsettings)
    c.load_plugins()
    yield c
    c.plugin_manager.shutdown()


def test_window_lists_markdown_files(container: Container):
    win = container.build_main_window()
    items = [win.files.item(i).text() for i in range(win.files.count())]
    assert items == ["a.md", "notes/b.md"]


def test_plugin_actions_are_in_tools_menu(container: Container):
    win = container.build_main_window()
    titles = [act.text() for act, _ in win.plugin_actions]
    assert "[obs.html companion] Export html" in titles
    assert "Export list of all files to export folder" in titles


def test_selecting_a_file_previews_it(container: Container):
    win = container.build_main_window()
    win.files.setCurrentRow(0)
    qt_wait(300)
    assert "Alpha" in win.preview.toPlainText()


def test_close_persists_geometry(container: Container):
    win = container.build_main_window()
    win.show()
    win.close()
    assert container.settings_service.get_geometry() is not None
    assert container.settings_service.get_splitter() is not None


def test_settings_dialog_forwards_edits_to_plugin(container: Container):
    (title, plugin), = container.plugin_manager.settings_tabs()
    dlg = PluginSettingsDialog(title, plugin, container.app_api)

    root = dlg.editors["output_root"]
    toggle = dlg.editors["run_post_export"]
    assert isinstance(root, QLineEdit) and isinstance(toggle, QCheckBox)
    assert root.text() == "obs.html/export"

    root.setText("public/")
    toggle.setChecked(True)

    assert plugin.settings.output_root == "public"
    assert plugin.settings.run_post_export is True
    saved = container.settings_service.load_plugin_data("org.obshtml.companion")
    assert saved["run_post_export"] is True


def test_selecting_an_undecodable_file_shows_a_notice(container: Container, vault_root):
    (vault_root / "bad.md").write_bytes(b"caf\xe9")
    win = container.build_main_window()
    items = [win.files.item(i).text() for i in range(win.files.count())]

    win.files.setCurrentRow(items.index("bad.md"))

    assert win.statusBar().currentMessage().startswith("Cannot open bad.md")
    assert container.surface.rendered_html() == ""
