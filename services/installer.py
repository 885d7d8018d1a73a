"""Docker Desktop installation orchestration."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from docker_setup_config.constants import IMMUTABLE_CONFIG
from docker_setup_config.paths import resolve_temp_directory
from docker_setup_config.user_settings import UserSettings
from services.downloads import get_temp_filename, stream_to_file
from services.install_status import InstallStatusChecker
from services.interaction import StatusCallback, UserInteraction
from services.platforms import InstallerTools, PlatformVariant
from services.process import FileCleaner, ProcessRunner

_LOGGER = logging.getLogger(__name__)
_MESSAGES = IMMUTABLE_CONFIG.messages

Downloader = Callable[..., object]
TempNamer = Callable[[str, str, Path], Path]


@dataclass(frozen=True)
class InstallSession:
    path: Path
    command: str


class InstallOrchestrator:
    """Runs check, prompt, download, command build, notify and install for one variant.

    Every :meth:`run` is independent: the checker is probed again, a new temp
    file name is drawn, and nothing is retried.
    """

    def __init__(
        self,
        status_checker: InstallStatusChecker,
        interaction: UserInteraction,
        *,
        settings: UserSettings | None = None,
        downloader: Downloader | None = None,
        temp_namer: TempNamer | None = None,
        runner: ProcessRunner | None = None,
        cleaner: FileCleaner | None = None,
    ) -> None:
        self._checker = status_checker
        self._interaction = interaction
        self._settings = settings or UserSettings()
        self._download = downloader or stream_to_file
        self._temp_namer = temp_namer or get_temp_filename
        self._tools = InstallerTools(
            runner=runner or ProcessRunner(),
            cleaner=cleaner or FileCleaner(),
            log=interaction.append_log,
        )

    def pre_install_check(self) -> bool:
        if not self._checker.is_installed_now():
            return True
        option = _MESSAGES.reinstall_option
        response = self._interaction.confirm(_MESSAGES.reinstall_prompt, [option])
        return response == option

    def run(self, variant: PlatformVariant) -> object | None:
        """Returns the variant's install result, or ``None`` when the user declined."""
        if not self.pre_install_check():
            _LOGGER.info("Reinstall declined; nothing to do")
            return None
        path = self._interaction.show_progress(
            _MESSAGES.downloading, lambda report: self._download_installer(variant, report)
        )
        session = InstallSession(path=path, command=variant.build_command(path))
        self._notify_started()
        _LOGGER.info("Installing Docker Desktop (%s) from %s", variant.kind.value, session.path)
        return self._interaction.run_blocking(lambda: variant.install(self._tools, session.path, session.command))

    def _download_installer(self, variant: PlatformVariant, report: StatusCallback) -> Path:
        directory = resolve_temp_directory(self._settings)
        path = self._temp_namer(IMMUTABLE_CONFIG.temp_file_prefix, variant.file_extension, directory)
        self._download(variant.download_url, path, status_callback=report, label=_MESSAGES.downloading)
        return path

    def _notify_started(self) -> None:
        try:
            self._interaction.notify(_MESSAGES.installation_started)
        except Exception as exc:  # display failures do not stop the install
            _LOGGER.warning("Could not show installation notification: %s", exc)
