"""Named commands exposed to the CLI and GUI hosts."""
from __future__ import annotations

import logging
from typing import Callable

from docker_setup_config.constants import IMMUTABLE_CONFIG
from services.errors import UnknownCommandError
from services.installer import InstallOrchestrator
from services.interaction import UserInteraction
from services.notification import show_install_notification
from services.platforms import HostOS, variant_for_host

_LOGGER = logging.getLogger(__name__)

INSTALL_DOCKER = "docker.installDocker"
SHOW_INSTALL_NOTIFICATION = "docker.showInstallNotification"

CommandHandler = Callable[[], object]


class CommandRegistry:
    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, name: str, handler: CommandHandler) -> None:
        self._handlers[name] = handler

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def execute(self, name: str) -> object:
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownCommandError(name)
        _LOGGER.debug("Executing command %s", name)
        return handler()


def build_command_registry(
    orchestrator: InstallOrchestrator,
    interaction: UserInteraction,
    host_os: HostOS,
) -> CommandRegistry:
    registry = CommandRegistry()
    docs_url = IMMUTABLE_CONFIG.endpoints.linux_docs_url

    def install_docker() -> object:
        if host_os is HostOS.LINUX:
            interaction.open_url(docs_url)
            return None
        return orchestrator.run(variant_for_host(host_os))

    def show_notification() -> object:
        return show_install_notification(
            interaction,
            host_os,
            run_install=lambda: registry.execute(INSTALL_DOCKER),
            docs_url=docs_url,
        )

    registry.register(INSTALL_DOCKER, install_docker)
    registry.register(SHOW_INSTALL_NOTIFICATION, show_notification)
    return registry
