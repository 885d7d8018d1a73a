from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Callable, Sequence

import pytest

from docker_setup_config.user_settings import UserSettings
from services.errors import NetworkError
from services.installer import InstallOrchestrator
from services.platforms import MAC, WINDOWS, PlatformVariant
from services.process import BackgroundTask, CommandExecutionResult, InstallOutcome


class FakeChecker:
    def __init__(self, installed: bool) -> None:
        self.installed = installed
        self.calls = 0

    def is_installed_now(self) -> bool:
        self.calls += 1
        return self.installed


class FakeInteraction:
    def __init__(self, answer: str | None = None, *, notify_fails: bool = False) -> None:
        self.answer = answer
        self.notify_fails = notify_fails
        self.prompts: list[tuple[str, tuple[str, ...]]] = []
        self.progress_titles: list[str] = []
        self.notifications: list[str] = []
        self.log: list[str] = []
        self.statuses: list[str] = []
        self.in_progress = False
        self.in_background = False
        self.blocking_results: list[object] = []

    def show_progress(self, title: str, operation: Callable[[Callable[[str], None]], object]) -> object:
        self.progress_titles.append(title)
        self.in_progress = True
        try:
            return operation(self.statuses.append)
        finally:
            self.in_progress = False

    def run_blocking(self, operation: Callable[[], object]) -> object:
        self.in_background = True
        try:
            result = operation()
        finally:
            self.in_background = False
        self.blocking_results.append(result)
        return result

    def confirm(self, message: str, options: Sequence[str]) -> str | None:
        self.prompts.append((message, tuple(options)))
        return self.answer

    def notify(self, message: str) -> None:
        if self.notify_fails:
            raise RuntimeError("notification area unavailable")
        self.notifications.append(message)

    def append_log(self, line: str) -> None:
        self.log.append(line)

    def open_url(self, url: str) -> bool:
        return True


class FakeDownloader:
    def __init__(self, interaction: FakeInteraction, *, error: Exception | None = None) -> None:
        self._interaction = interaction
        self._error = error
        self.calls: list[tuple[str, Path, bool]] = []

    def __call__(
        self,
        url: str,
        destination: Path,
        *,
        status_callback: Callable[[str], None] | None = None,
        label: str | None = None,
    ) -> Path:
        self.calls.append((url, destination, self._interaction.in_progress))
        if status_callback:
            status_callback(f"{label} (1.0 MB/s)")
        if self._error:
            raise self._error
        destination.write_bytes(b"installer")
        return destination


class FakeRunner:
    def __init__(self) -> None:
        self.runs: list[str] = []
        self.launches: list[tuple[str, str]] = []

    def run(self, command: str) -> CommandExecutionResult:
        self.runs.append(command)
        return CommandExecutionResult(command, 0, "", "")

    def launch(self, command: str, title: str) -> BackgroundTask:
        self.launches.append((command, title))
        return BackgroundTask(title, command)


def _counting(variant: PlatformVariant) -> tuple[PlatformVariant, list[Path], list[Path]]:
    built: list[Path] = []
    installs: list[Path] = []

    def build(path: Path) -> str:
        built.append(path)
        return variant.command_builder(path)

    def install(tools, path: Path, command: str) -> object:
        installs.append(path)
        return variant.installer(tools, path, command)

    counted = dataclasses.replace(variant, command_builder=build, installer=install)
    return counted, built, installs


def _orchestrator(
    tmp_path: Path,
    checker: FakeChecker,
    interaction: FakeInteraction,
    downloader: FakeDownloader | None = None,
    runner: FakeRunner | None = None,
) -> InstallOrchestrator:
    return InstallOrchestrator(
        checker,
        interaction,
        settings=UserSettings(temp_dir=str(tmp_path)),
        downloader=downloader or FakeDownloader(interaction),
        runner=runner or FakeRunner(),
    )


def test_not_installed_proceeds_without_prompt(tmp_path: Path) -> None:
    interaction = FakeInteraction()
    orchestrator = _orchestrator(tmp_path, FakeChecker(False), interaction)
    assert orchestrator.pre_install_check() is True
    assert interaction.prompts == []


def test_installed_and_confirmed_proceeds(tmp_path: Path) -> None:
    interaction = FakeInteraction("Reinstall")
    orchestrator = _orchestrator(tmp_path, FakeChecker(True), interaction)
    assert orchestrator.pre_install_check() is True
    assert interaction.prompts == [
        ("Docker Desktop is already installed. Would you like to reinstall?", ("Reinstall",)),
    ]


def test_installed_and_dismissed_stops(tmp_path: Path) -> None:
    interaction = FakeInteraction(None)
    orchestrator = _orchestrator(tmp_path, FakeChecker(True), interaction)
    assert orchestrator.pre_install_check() is False


def test_windows_run_downloads_installs_and_cleans_up(tmp_path: Path) -> None:
    interaction = FakeInteraction()
    downloader = FakeDownloader(interaction)
    runner = FakeRunner()
    variant, built, installs = _counting(WINDOWS)
    orchestrator = _orchestrator(tmp_path, FakeChecker(False), interaction, downloader, runner)

    outcome = orchestrator.run(variant)

    assert isinstance(outcome, InstallOutcome) and outcome.success
    assert len(downloader.calls) == 1
    url, path, during_progress = downloader.calls[0]
    assert url == "https://aka.ms/download-docker-windows-vscode"
    assert during_progress is True
    assert path.parent == tmp_path
    assert path.name.startswith("docker-") and path.suffix == ".exe"
    assert built == [path]
    assert installs == [path]
    assert runner.runs == [f'"{path}"']
    assert interaction.progress_titles == ["Downloading Docker installer..."]
    assert interaction.notifications == [
        "The Docker Desktop installation is started. Complete the installation and then start Docker Desktop."
    ]
    assert not path.exists()


@pytest.mark.parametrize("variant", [WINDOWS, MAC])
def test_declined_reinstall_does_nothing(tmp_path: Path, variant: PlatformVariant) -> None:
    interaction = FakeInteraction(None)
    downloader = FakeDownloader(interaction)
    runner = FakeRunner()
    orchestrator = _orchestrator(tmp_path, FakeChecker(True), interaction, downloader, runner)

    assert orchestrator.run(variant) is None

    assert downloader.calls == []
    assert runner.runs == [] and runner.launches == []
    assert interaction.progress_titles == []
    assert interaction.notifications == []


def test_mac_run_launches_task_and_keeps_image(tmp_path: Path) -> None:
    interaction = FakeInteraction()
    downloader = FakeDownloader(interaction)
    runner = FakeRunner()
    orchestrator = _orchestrator(tmp_path, FakeChecker(False), interaction, downloader, runner)

    task = orchestrator.run(MAC)

    assert isinstance(task, BackgroundTask)
    path = downloader.calls[0][1]
    assert path.suffix == ".dmg"
    assert runner.launches == [(f"chmod +x '{path}' && open '{path}'", "Docker Install")]
    assert path.exists()


def test_download_failure_aborts_before_install(tmp_path: Path) -> None:
    interaction = FakeInteraction()
    downloader = FakeDownloader(interaction, error=NetworkError("https://aka.ms/x", "HTTP 503"))
    runner = FakeRunner()
    variant, built, installs = _counting(WINDOWS)
    orchestrator = _orchestrator(tmp_path, FakeChecker(False), interaction, downloader, runner)

    with pytest.raises(NetworkError):
        orchestrator.run(variant)

    assert built == [] and installs == []
    assert runner.runs == []
    assert interaction.notifications == []


def test_notification_failure_is_not_fatal(tmp_path: Path) -> None:
    interaction = FakeInteraction(notify_fails=True)
    runner = FakeRunner()
    orchestrator = _orchestrator(tmp_path, FakeChecker(False), interaction, runner=runner)
    outcome = orchestrator.run(WINDOWS)
    assert outcome.success
    assert len(runner.runs) == 1


def test_each_run_probes_and_uses_fresh_temp_file(tmp_path: Path) -> None:
    interaction = FakeInteraction()
    downloader = FakeDownloader(interaction)
    checker = FakeChecker(False)
    orchestrator = _orchestrator(tmp_path, checker, interaction, downloader)
    orchestrator.run(WINDOWS)
    orchestrator.run(WINDOWS)
    assert checker.calls == 2
    first, second = (call[1] for call in downloader.calls)
    assert first != second


def test_install_command_is_logged(tmp_path: Path) -> None:
    interaction = FakeInteraction()
    downloader = FakeDownloader(interaction)
    orchestrator = _orchestrator(tmp_path, FakeChecker(False), interaction, downloader)
    orchestrator.run(WINDOWS)
    path = downloader.calls[0][1]
    assert interaction.log == [f'Executing command "{path}"']


def test_download_speed_reaches_progress_indicator(tmp_path: Path) -> None:
    interaction = FakeInteraction()
    orchestrator = _orchestrator(tmp_path, FakeChecker(False), interaction)
    orchestrator.run(WINDOWS)
    assert interaction.statuses == ["Downloading Docker installer... (1.0 MB/s)"]


@pytest.mark.parametrize("variant", [WINDOWS, MAC])
def test_install_step_runs_as_blocking_task(tmp_path: Path, variant: PlatformVariant) -> None:
    interaction = FakeInteraction()
    seen: list[bool] = []

    def install(tools, path: Path, command: str) -> object:
        seen.append(interaction.in_background)
        return variant.installer(tools, path, command)

    orchestrator = _orchestrator(tmp_path, FakeChecker(False), interaction)
    result = orchestrator.run(dataclasses.replace(variant, installer=install))

    assert seen == [True]
    assert interaction.blocking_results == [result]
    assert interaction.in_progress is False
