"""Prompt shown when Docker is missing on the host."""
from __future__ import annotations

from typing import Callable

from docker_setup_config.constants import IMMUTABLE_CONFIG
from services.interaction import UserInteraction
from services.platforms import HostOS

_MESSAGES = IMMUTABLE_CONFIG.messages


def show_install_notification(
    interaction: UserInteraction,
    host_os: HostOS,
    *,
    run_install: Callable[[], object],
    docs_url: str = IMMUTABLE_CONFIG.endpoints.linux_docs_url,
) -> bool:
    """Ask the user to install Docker; returns whether they accepted.

    Linux has no automated installer, so accepting there only opens the docs.
    """
    if host_os is HostOS.LINUX:
        option = _MESSAGES.learn_more_option
        if interaction.confirm(_MESSAGES.not_installed_linux, [option]) != option:
            return False
        interaction.open_url(docs_url)
        return True
    option = _MESSAGES.install_option
    if interaction.confirm(_MESSAGES.not_installed_desktop, [option]) != option:
        return False
    run_install()
    return True
