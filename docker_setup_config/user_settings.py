"""User-configurable settings persisted locally."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any


SETTINGS_DIRNAME = ".docker_setup"
SETTINGS_FILENAME = "settings.json"

LOG_VERBOSITY_CHOICES = ("error", "warning", "info", "verbose")


def default_settings_path() -> Path:
    return Path.home() / SETTINGS_DIRNAME / SETTINGS_FILENAME


@dataclass
class UserSettings:
    temp_dir: str = ""
    docker_executable: str = ""
    log_verbosity: str = "info"

    def to_dict(self) -> dict[str, str]:
        return {
            "temp_dir": self.temp_dir,
            "docker_executable": self.docker_executable,
            "log_verbosity": self.log_verbosity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserSettings":
        def _get(key: str) -> str:
            value = data.get(key, "")
            return str(value) if value is not None else ""

        verbosity = _get("log_verbosity").strip().lower()
        if verbosity not in LOG_VERBOSITY_CHOICES:
            verbosity = "info"
        return cls(
            temp_dir=_get("temp_dir"),
            docker_executable=_get("docker_executable"),
            log_verbosity=verbosity,
        )


class SettingsStore:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> UserSettings:
        if not self._path.exists():
            return UserSettings()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return UserSettings()
        if not isinstance(data, dict):
            return UserSettings()
        return UserSettings.from_dict(data)

    def save(self, settings: UserSettings) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(settings.to_dict(), indent=2, sort_keys=True)
        self._path.write_text(payload, encoding="utf-8")
