"""Live probe for an existing Docker installation."""
from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from services.platforms import HostOS, detect_host_os

_LOGGER = logging.getLogger(__name__)


class InstallStatusChecker(Protocol):
    def is_installed_now(self) -> bool:
        ...


class DockerCliStatusChecker:
    """Runs ``docker --version`` on every call; nothing is cached."""

    def __init__(self, executable: str | None = None, *, host_os: HostOS | None = None) -> None:
        self._executable = executable.strip() if executable else ""
        self._host_os = host_os or detect_host_os()

    def find_executable(self) -> Path | None:
        if self._executable:
            candidate = Path(self._executable)
            return candidate if candidate.exists() else None
        found = shutil.which("docker")
        if found:
            return Path(found)
        return self._find_docker_fallback()

    def is_installed_now(self) -> bool:
        executable = self.find_executable()
        if executable is None:
            _LOGGER.debug("docker executable not found")
            return False
        try:
            completed = subprocess.run(
                [str(executable), "--version"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            _LOGGER.debug("docker --version could not start: %s", exc)
            return False
        _LOGGER.debug("docker --version exited with %s: %s", completed.returncode, (completed.stdout or "").strip())
        return completed.returncode == 0

    def _find_docker_fallback(self) -> Path | None:
        candidates: list[Path] = []
        if self._host_os is HostOS.WINDOWS:
            program_files = os.environ.get("ProgramFiles")
            if program_files:
                candidates.append(Path(program_files) / "Docker" / "Docker" / "resources" / "bin" / "docker.exe")
        elif self._host_os is HostOS.MAC:
            candidates.append(Path("/Applications/Docker.app/Contents/Resources/bin/docker"))
            candidates.append(Path("/usr/local/bin/docker"))
        for candidate in candidates:
            if candidate.exists():
                return candidate
        return None
