from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QVBoxLayout,
    QWidget,
)

from obshtml.plugins.api import IAppAPI, IPluginSettingsTab, SettingSpec


class PluginSettingsDialog(QDialog):
    """
    Renders a plugin's SettingSpecs as a form. Every edit is forwarded to the
    plugin right away; there is no OK/Cancel staging.
    """

    def __init__(
        self,
        title: str,
        plugin: IPluginSettingsTab,
        api: IAppAPI,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(f"{title} settings")
        self._plugin = plugin
        self._api = api
        self.editors: dict[str, QWidget] = {}

        form = QFormLayout()
        values = plugin.settings_values()
        for spec in plugin.settings_fields():
            editor = self._build_editor(spec, values.get(spec.key))
            self.editors[spec.key] = editor
            form.addRow(spec.label, editor)
            if spec.description:
                hint = QLabel(spec.description, self)
                hint.setWordWrap(True)
                form.addRow("", hint)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close, self)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addWidget(buttons)

    def _build_editor(self, spec: SettingSpec, value: Any) -> QWidget:
        if spec.kind == "toggle":
            box = QCheckBox(self)
            box.setChecked(bool(value))
            box.toggled.connect(lambda on, k=spec.key: self._changed(k, bool(on)))
            return box

        edit = QLineEdit(self)
        edit.setPlaceholderText(spec.placeholder)
        edit.setText("" if value is None else str(value))
        edit.textChanged.connect(lambda text, k=spec.key: self._changed(k, text))
        return edit

    def _changed(self, key: str, value: Any) -> None:
        self._plugin.on_setting_changed(self._api, key, value)
