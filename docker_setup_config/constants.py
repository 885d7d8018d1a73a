"""Immutable installer endpoints and user-facing messages."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InstallerEndpoint:
    download_url: str
    file_extension: str


@dataclass(frozen=True)
class InstallerEndpoints:
    windows: InstallerEndpoint
    mac: InstallerEndpoint
    linux_docs_url: str


@dataclass(frozen=True)
class InstallerMessages:
    downloading: str
    installation_started: str
    reinstall_prompt: str
    reinstall_option: str
    executing_command: str
    mac_task_title: str
    not_installed_linux: str
    not_installed_desktop: str
    learn_more_option: str
    install_option: str


@dataclass(frozen=True)
class ImmutableConfig:
    endpoints: InstallerEndpoints
    messages: InstallerMessages
    temp_file_prefix: str


IMMUTABLE_CONFIG = ImmutableConfig(
    endpoints=InstallerEndpoints(
        windows=InstallerEndpoint(
            download_url="https://aka.ms/download-docker-windows-vscode",
            file_extension="exe",
        ),
        mac=InstallerEndpoint(
            download_url="https://aka.ms/download-docker-mac-vscode",
            file_extension="dmg",
        ),
        linux_docs_url="https://aka.ms/download-docker-linux-vscode",
    ),
    messages=InstallerMessages(
        downloading="Downloading Docker installer...",
        installation_started=(
            "The Docker Desktop installation is started. Complete the installation and then start Docker Desktop."
        ),
        reinstall_prompt="Docker Desktop is already installed. Would you like to reinstall?",
        reinstall_option="Reinstall",
        executing_command="Executing command {command}",
        mac_task_title="Docker Install",
        not_installed_linux="Docker is not installed. Would you like to learn more about installing Docker?",
        not_installed_desktop="Docker Desktop is not installed. Would you like to install it?",
        learn_more_option="Learn more",
        install_option="Install",
    ),
    temp_file_prefix="docker",
)
