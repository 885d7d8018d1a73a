"""Per-platform Docker Desktop installer variants."""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from docker_setup_config.constants import IMMUTABLE_CONFIG
from services.errors import CleanupError, UnsupportedPlatformError
from services.process import BackgroundTask, FileCleaner, InstallOutcome, ProcessRunner

_LOGGER = logging.getLogger(__name__)
_MESSAGES = IMMUTABLE_CONFIG.messages


class HostOS(str, Enum):
    WINDOWS = "Windows"
    MAC = "Mac"
    LINUX = "Linux"


class PlatformKind(str, Enum):
    WINDOWS = "windows"
    MAC = "mac"


def detect_host_os(platform: str | None = None) -> HostOS:
    name = (platform or sys.platform).lower()
    if name.startswith("win") or name.startswith("cygwin"):
        return HostOS.WINDOWS
    if name.startswith("darwin"):
        return HostOS.MAC
    return HostOS.LINUX


@dataclass
class InstallerTools:
    """Side-effecting collaborators handed to a variant's install routine."""

    runner: ProcessRunner = field(default_factory=ProcessRunner)
    cleaner: FileCleaner = field(default_factory=FileCleaner)
    log: Callable[[str], None] = lambda line: None


@dataclass(frozen=True)
class PlatformVariant:
    kind: PlatformKind
    download_url: str
    file_extension: str
    command_builder: Callable[[Path], str] = field(repr=False)
    installer: Callable[[InstallerTools, Path, str], object] = field(repr=False)

    def build_command(self, path: Path) -> str:
        return self.command_builder(Path(path))

    def install(self, tools: InstallerTools, path: Path, command: str) -> object:
        return self.installer(tools, Path(path), command)


def _windows_command(path: Path) -> str:
    # cmd.exe needs the quotes for paths containing spaces
    return f'"{path}"'


def _mac_command(path: Path) -> str:
    return f"chmod +x '{path}' && open '{path}'"


def _install_windows(tools: InstallerTools, path: Path, command: str) -> InstallOutcome:
    tools.log(_MESSAGES.executing_command.format(command=command))
    try:
        result = tools.runner.run(command)
    finally:
        _cleanup_quietly(tools, path)
    return InstallOutcome.ok(result)


def _install_mac(tools: InstallerTools, path: Path, command: str) -> BackgroundTask:
    # The mounted disk image is still needed for the drag-to-Applications step.
    tools.log(_MESSAGES.executing_command.format(command=command))
    return tools.runner.launch(command, _MESSAGES.mac_task_title)


def _cleanup_quietly(tools: InstallerTools, path: Path) -> None:
    try:
        tools.cleaner.remove_if_exists(path)
    except CleanupError as exc:
        _LOGGER.warning("Installer cleanup failed: %s", exc)
        tools.log(str(exc))


WINDOWS = PlatformVariant(
    kind=PlatformKind.WINDOWS,
    download_url=IMMUTABLE_CONFIG.endpoints.windows.download_url,
    file_extension=IMMUTABLE_CONFIG.endpoints.windows.file_extension,
    command_builder=_windows_command,
    installer=_install_windows,
)

MAC = PlatformVariant(
    kind=PlatformKind.MAC,
    download_url=IMMUTABLE_CONFIG.endpoints.mac.download_url,
    file_extension=IMMUTABLE_CONFIG.endpoints.mac.file_extension,
    command_builder=_mac_command,
    installer=_install_mac,
)


def variant_for_kind(kind: PlatformKind) -> PlatformVariant:
    if kind is PlatformKind.WINDOWS:
        return WINDOWS
    if kind is PlatformKind.MAC:
        return MAC
    raise ValueError(f"Unhandled platform kind: {kind}")


def variant_for_host(host_os: HostOS) -> PlatformVariant:
    if host_os is HostOS.WINDOWS:
        return variant_for_kind(PlatformKind.WINDOWS)
    if host_os is HostOS.MAC:
        return variant_for_kind(PlatformKind.MAC)
    if host_os is HostOS.LINUX:
        raise UnsupportedPlatformError(host_os.value)
    raise ValueError(f"Unhandled host OS: {host_os}")
