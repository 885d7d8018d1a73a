"""Error types raised by the installer services."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from services.process import InstallOutcome


class InstallerError(RuntimeError):
    pass


class NetworkError(InstallerError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Download of {url} failed: {reason}")
        self.url = url
        self.reason = reason


class ProcessExecutionError(InstallerError):
    def __init__(self, command: str, returncode: int | None, stderr: str = "") -> None:
        if returncode is None:
            detail = stderr or "process could not be started"
        else:
            detail = stderr.strip() or f"exit code {returncode}"
        super().__init__(f"Command {command} failed: {detail}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr

    @property
    def outcome(self) -> "InstallOutcome":
        from services.process import InstallOutcome

        return InstallOutcome.failed(str(self))


class CleanupError(InstallerError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not delete {path}: {reason}")
        self.path = path
        self.reason = reason


class UnsupportedPlatformError(InstallerError):
    def __init__(self, host_os: str) -> None:
        super().__init__(f"No Docker Desktop installer is available for {host_os}")
        self.host_os = host_os


class UnknownCommandError(InstallerError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name}")
        self.name = name
