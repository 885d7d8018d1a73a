"""Process execution and temp file cleanup helpers."""
from __future__ import annotations

import logging
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from services.errors import CleanupError, ProcessExecutionError

_LOGGER = logging.getLogger(__name__)


@dataclass
class CommandExecutionResult:
    command: str | Sequence[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class InstallOutcome:
    success: bool
    reason: str = ""
    result: CommandExecutionResult | None = None

    @classmethod
    def ok(cls, result: CommandExecutionResult | None = None) -> "InstallOutcome":
        return cls(True, "", result)

    @classmethod
    def failed(cls, reason: str, result: CommandExecutionResult | None = None) -> "InstallOutcome":
        return cls(False, reason, result)


@dataclass
class BackgroundTask:
    """Handle to a launched installer process that nobody waits on."""

    title: str
    command: str
    process: subprocess.Popen | None = None

    @property
    def pid(self) -> int | None:
        return self.process.pid if self.process else None

    def poll(self) -> int | None:
        return self.process.poll() if self.process else None


class ProcessRunner:
    def run(self, command: str) -> CommandExecutionResult:
        """Run ``command`` through the shell and wait for it to exit."""
        try:
            completed = subprocess.run(command, shell=True, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise ProcessExecutionError(command, None, str(exc)) from exc
        result = CommandExecutionResult(command, completed.returncode, completed.stdout or "", completed.stderr or "")
        if not result.succeeded:
            raise ProcessExecutionError(command, result.returncode, result.stderr)
        return result

    def launch(self, command: str, title: str) -> BackgroundTask:
        _LOGGER.info("Launching background task %r: %s", title, command)
        try:
            process = subprocess.Popen(
                command,
                shell=True,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise ProcessExecutionError(command, None, str(exc)) from exc
        # Nobody waits on the installer, so a daemon thread reaps the shell once it exits.
        threading.Thread(target=process.wait, name=f"reap-{process.pid}", daemon=True).start()
        return BackgroundTask(title, command, process)


class FileCleaner:
    def remove_if_exists(self, path: Path) -> bool:
        path = Path(path)
        try:
            if not path.exists():
                return False
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise CleanupError(path, str(exc)) from exc
        _LOGGER.debug("Deleted %s", path)
        return True
