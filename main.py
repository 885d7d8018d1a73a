"""Application entrypoint for the Docker Desktop Setup PySide6 GUI."""
from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from docker_setup_config.logging_config import configure_logging
from docker_setup_config.user_settings import SettingsStore
from ui.main_window import MainWindow


def main() -> int:
    configure_logging(SettingsStore().load().log_verbosity)
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
