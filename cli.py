"""CLI entrypoint for scripted Docker Desktop checks and installs."""
from __future__ import annotations

import argparse
import sys
from typing import Sequence

from docker_setup_config.logging_config import configure_logging
from docker_setup_config.user_settings import SettingsStore
from services.commands import INSTALL_DOCKER, SHOW_INSTALL_NOTIFICATION, build_command_registry
from services.errors import InstallerError
from services.install_status import DockerCliStatusChecker
from services.installer import InstallOrchestrator
from services.interaction import ConsoleInteraction
from services.platforms import detect_host_os


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Docker Desktop setup automation CLI")
    parser.add_argument("command", help="Operation to run", choices=["install", "notify", "status"])
    parser.add_argument("--yes", action="store_true", help="Accept every prompt")
    parser.add_argument("--no-log-file", action="store_true", help="Only log diagnostics to stderr")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = SettingsStore().load()
    configure_logging(settings.log_verbosity, to_file=not args.no_log_file)
    interaction = ConsoleInteraction(assume_yes=args.yes)
    checker = DockerCliStatusChecker(settings.docker_executable or None)
    if args.command == "status":
        installed = checker.is_installed_now()
        interaction.append_log("Docker is installed" if installed else "Docker is not installed")
        return 0
    orchestrator = InstallOrchestrator(checker, interaction, settings=settings)
    registry = build_command_registry(orchestrator, interaction, detect_host_os())
    command = INSTALL_DOCKER if args.command == "install" else SHOW_INSTALL_NOTIFICATION
    try:
        registry.execute(command)
    except InstallerError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
