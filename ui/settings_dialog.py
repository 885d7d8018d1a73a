"""Settings dialog for installer scratch paths and diagnostics."""
from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from docker_setup_config.user_settings import LOG_VERBOSITY_CHOICES, SettingsStore, UserSettings


class SettingsDialog(QDialog):
    def __init__(self, settings: UserSettings, store: SettingsStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._settings = settings
        self._store = store
        self.setWindowTitle("Installer Settings")
        self.setMinimumWidth(520)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        form = QFormLayout()

        self._temp_dir = QLineEdit(self._settings.temp_dir)
        self._temp_dir.setPlaceholderText("System temp directory")
        form.addRow("Download Folder", self._make_dir_picker(self._temp_dir, "Select Download Folder"))

        self._docker_executable = QLineEdit(self._settings.docker_executable)
        self._docker_executable.setPlaceholderText("Found on PATH")
        form.addRow(
            "Docker CLI",
            self._make_path_picker(self._docker_executable, "Select docker executable", "All Files (*)"),
        )

        self._log_verbosity = QComboBox()
        self._log_verbosity.addItems(list(LOG_VERBOSITY_CHOICES))
        self._log_verbosity.setCurrentText(self._settings.log_verbosity)
        form.addRow("Log Verbosity", self._log_verbosity)

        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self._save)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _make_path_picker(self, field: QLineEdit, title: str, filter_text: str) -> QWidget:
        container = QWidget()
        row = QHBoxLayout(container)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(field)
        browse = QPushButton("Browse")
        browse.clicked.connect(lambda: self._browse_for_path(field, title, filter_text))
        row.addWidget(browse)
        return container

    def _make_dir_picker(self, field: QLineEdit, title: str) -> QWidget:
        container = QWidget()
        row = QHBoxLayout(container)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(field)
        browse = QPushButton("Browse")
        browse.clicked.connect(lambda: self._browse_for_dir(field, title))
        row.addWidget(browse)
        return container

    def _browse_for_path(self, field: QLineEdit, title: str, filter_text: str) -> None:
        current = field.text().strip()
        start_dir = str(Path(current).parent) if current else str(Path.home())
        path, _ = QFileDialog.getOpenFileName(self, title, start_dir, filter_text)
        if path:
            field.setText(path)

    def _browse_for_dir(self, field: QLineEdit, title: str) -> None:
        current = field.text().strip()
        start_dir = current or str(Path.home())
        path = QFileDialog.getExistingDirectory(self, title, start_dir)
        if path:
            field.setText(path)

    def _save(self) -> None:
        temp_dir = self._temp_dir.text().strip()
        if temp_dir and not Path(temp_dir).expanduser().is_dir():
            QMessageBox.warning(self, "Settings Required", f"Download folder does not exist:\n{temp_dir}")
            return
        docker_executable = self._docker_executable.text().strip()
        if docker_executable and not Path(docker_executable).is_file():
            QMessageBox.warning(self, "Settings Required", f"Docker CLI not found:\n{docker_executable}")
            return
        self._settings.temp_dir = temp_dir
        self._settings.docker_executable = docker_executable
        self._settings.log_verbosity = self._log_verbosity.currentText()
        self._store.save(self._settings)
        self.accept()
