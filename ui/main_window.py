"""Main window for Docker Desktop Setup."""
from __future__ import annotations

from PySide6.QtCore import Qt, QThreadPool
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from docker_setup_config.logging_config import configure_logging
from docker_setup_config.user_settings import SettingsStore
from services.commands import INSTALL_DOCKER, SHOW_INSTALL_NOTIFICATION, CommandRegistry, build_command_registry
from services.errors import InstallerError
from services.install_status import DockerCliStatusChecker
from services.installer import InstallOrchestrator
from services.platforms import detect_host_os
from ui.qt_interaction import QtInteraction
from ui.settings_dialog import SettingsDialog
from ui.workers import ServiceWorker


class MainWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Docker Desktop Setup")
        self.resize(720, 480)
        self._thread_pool = QThreadPool.globalInstance()
        self._settings_store = SettingsStore()
        self._settings = self._settings_store.load()
        self._host_os = detect_host_os()
        self._busy = False
        self._workers: set[ServiceWorker] = set()
        self._log_view = QTextEdit()
        self._log_view.setReadOnly(True)
        self._log_view.setMinimumHeight(120)
        self._interaction = QtInteraction(self, self.log_message, self._thread_pool)
        self._registry = self._build_registry()
        self._build_ui()
        self._start_status_check()

    def log_message(self, message: str) -> None:
        self._log_view.append(message)

    def _build_registry(self) -> CommandRegistry:
        checker = DockerCliStatusChecker(self._settings.docker_executable or None, host_os=self._host_os)
        orchestrator = InstallOrchestrator(checker, self._interaction, settings=self._settings)
        return build_command_registry(orchestrator, self._interaction, self._host_os)

    def _build_ui(self) -> None:
        container = QWidget()
        layout = QVBoxLayout(container)

        self._status_label = QLabel("Checking Docker installation...")
        self._status_label.setAlignment(Qt.AlignLeft)
        layout.addWidget(self._status_label)

        button_row = QHBoxLayout()
        self._btn_install = QPushButton("Install Docker Desktop")
        self._btn_notify = QPushButton("Show Install Notification")
        self._btn_status = QPushButton("Check Status")
        self._btn_settings = QPushButton("Settings")
        button_row.addWidget(self._btn_install)
        button_row.addWidget(self._btn_notify)
        button_row.addWidget(self._btn_status)
        button_row.addStretch()
        button_row.addWidget(self._btn_settings)
        layout.addLayout(button_row)
        layout.addWidget(self._log_view)
        self.setCentralWidget(container)

        self._btn_install.clicked.connect(lambda: self._run_command(INSTALL_DOCKER))
        self._btn_notify.clicked.connect(lambda: self._run_command(SHOW_INSTALL_NOTIFICATION))
        self._btn_status.clicked.connect(self._start_status_check)
        self._btn_settings.clicked.connect(self._open_settings_dialog)

    def _run_command(self, name: str) -> None:
        if self._busy:
            QMessageBox.information(self, "In Progress", "Please wait for the current operation to complete.")
            return
        self._busy = True
        self._set_buttons_enabled(False)
        try:
            self._registry.execute(name)
        except InstallerError as exc:
            self._handle_error(exc)
        finally:
            self._busy = False
            self._set_buttons_enabled(True)
        self._start_status_check()

    def _handle_error(self, exc: BaseException) -> None:
        self.log_message(f"[ERROR] {exc}")
        QMessageBox.critical(self, "Docker Desktop Setup", str(exc))

    def _start_status_check(self) -> None:
        checker = DockerCliStatusChecker(self._settings.docker_executable or None, host_os=self._host_os)
        worker = ServiceWorker(checker.is_installed_now)
        self._workers.add(worker)
        worker.signals.finished.connect(lambda installed: self._handle_status(worker, installed))
        worker.signals.error.connect(lambda exc: self._handle_status_error(worker, exc))
        self._thread_pool.start(worker)

    def _handle_status(self, worker: ServiceWorker, installed: bool) -> None:
        self._workers.discard(worker)
        text = "Docker is installed" if installed else "Docker is not installed"
        self._status_label.setText(f"{text} ({self._host_os.value})")

    def _handle_status_error(self, worker: ServiceWorker, exc: BaseException) -> None:
        self._workers.discard(worker)
        self._status_label.setText("Docker status unknown")
        self.log_message(f"[ERROR] status check failed: {exc}")

    def _open_settings_dialog(self) -> None:
        if self._busy:
            QMessageBox.information(self, "In Progress", "Please wait for the current operation to complete.")
            return
        dialog = SettingsDialog(self._settings, self._settings_store, self)
        if dialog.exec() == QDialog.Accepted:
            configure_logging(self._settings.log_verbosity)
            self._registry = self._build_registry()
            self.log_message("Settings saved.")
            self._start_status_check()

    def _set_buttons_enabled(self, enabled: bool) -> None:
        for button in (self._btn_install, self._btn_notify, self._btn_status, self._btn_settings):
            button.setEnabled(enabled)
