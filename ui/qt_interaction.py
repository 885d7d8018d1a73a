"""PySide6 implementation of the installer's user interaction contract."""
from __future__ import annotations

from typing import Any, Callable, Sequence, TypeVar

from PySide6.QtCore import QEventLoop, QObject, QThreadPool, QUrl, Qt, Signal, Slot
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QMessageBox, QProgressDialog, QWidget

from services.interaction import StatusCallback
from ui.workers import ServiceWorker

T = TypeVar("T")
LogCallback = Callable[[str], None]


class _LogRelay(QObject):
    """Delivers log lines on the UI thread whichever thread emits them."""

    line = Signal(str)

    def __init__(self, callback: LogCallback) -> None:
        super().__init__()
        self._callback = callback
        self.line.connect(self._deliver)

    @Slot(str)
    def _deliver(self, text: str) -> None:
        self._callback(text)


class QtInteraction:
    def __init__(self, parent: QWidget | None, log_callback: LogCallback, thread_pool: QThreadPool) -> None:
        self._parent = parent
        self._relay = _LogRelay(log_callback)
        self._thread_pool = thread_pool
        self._notices: list[QMessageBox] = []

    def show_progress(self, title: str, operation: Callable[[StatusCallback], T]) -> T:
        """Run ``operation`` on the thread pool behind a busy dialog.

        The worker's ``message`` signal is handed to ``operation`` as its status
        callback and drives the dialog label.
        """
        dialog = QProgressDialog(self._parent)
        dialog.setWindowTitle("Docker Desktop Setup")
        dialog.setLabelText(title)
        dialog.setRange(0, 0)
        dialog.setCancelButton(None)
        dialog.setWindowModality(Qt.WindowModal)
        dialog.setMinimumDuration(0)
        dialog.setAutoClose(False)
        worker = ServiceWorker(operation)
        worker.args = (worker.signals.message.emit,)
        worker.signals.message.connect(dialog.setLabelText)
        dialog.show()
        try:
            return self._wait_for(worker)
        finally:
            dialog.close()

    def run_blocking(self, operation: Callable[[], T]) -> T:
        return self._wait_for(ServiceWorker(operation))

    def _wait_for(self, worker: ServiceWorker) -> Any:
        # A local event loop keeps the window painting while the worker runs;
        # worker exceptions are re-raised here on the UI thread.
        outcome: dict[str, object] = {}
        loop = QEventLoop()
        worker.signals.finished.connect(lambda value: outcome.update(value=value))
        worker.signals.error.connect(lambda exc: outcome.update(error=exc))
        worker.signals.finished.connect(loop.quit)
        worker.signals.error.connect(loop.quit)
        self._thread_pool.start(worker)
        loop.exec()
        error = outcome.get("error")
        if isinstance(error, BaseException):
            raise error
        return outcome.get("value")

    def confirm(self, message: str, options: Sequence[str]) -> str | None:
        box = QMessageBox(self._parent)
        box.setIcon(QMessageBox.Information)
        box.setWindowTitle("Docker Desktop Setup")
        box.setText(message)
        buttons = {box.addButton(option, QMessageBox.AcceptRole): option for option in options}
        box.addButton(QMessageBox.Close)
        box.exec()
        return buttons.get(box.clickedButton())

    def notify(self, message: str) -> None:
        box = QMessageBox(QMessageBox.Information, "Docker Desktop Setup", message, QMessageBox.Ok, self._parent)
        box.setWindowModality(Qt.NonModal)
        box.finished.connect(lambda *_: self._notices.remove(box) if box in self._notices else None)
        self._notices.append(box)
        box.show()
        self.append_log(message)

    def append_log(self, line: str) -> None:
        self._relay.line.emit(line)

    def open_url(self, url: str) -> bool:
        self.append_log(f"Opening {url}")
        return QDesktopServices.openUrl(QUrl(url))
