"""Path utilities for locating the installer download directory."""
from __future__ import annotations

import tempfile
from pathlib import Path

from docker_setup_config.user_settings import UserSettings


def resolve_temp_directory(settings: UserSettings | None = None) -> Path:
    """Directory that receives downloaded installers.

    A blank ``temp_dir`` setting means the OS temp directory.
    """
    configured = settings.temp_dir.strip() if settings else ""
    if configured:
        return Path(configured).expanduser()
    return Path(tempfile.gettempdir())
