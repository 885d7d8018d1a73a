"""Temp file naming and streaming installer downloads."""
from __future__ import annotations

import http.client
import logging
import secrets
import tempfile
import time
import urllib.error
import urllib.request
from pathlib import Path
from typing import Callable

from services.errors import NetworkError

_LOGGER = logging.getLogger(__name__)

_CHUNK_SIZE = 256 * 1024
_USER_AGENT = "Mozilla/5.0"


def get_temp_filename(prefix: str, extension: str, directory: Path | str | None = None) -> Path:
    """Return an unused-looking ``<prefix>-<token>.<ext>`` path; the file is not created."""
    base = Path(directory) if directory is not None else Path(tempfile.gettempdir())
    suffix = extension.lstrip(".")
    token = secrets.token_hex(8)
    name = f"{prefix}-{token}.{suffix}" if suffix else f"{prefix}-{token}"
    return base / name


def stream_to_file(
    url: str,
    destination: Path,
    *,
    status_callback: Callable[[str], None] | None = None,
    label: str | None = None,
) -> Path:
    request = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    _LOGGER.info("Downloading %s to %s", url, destination)
    try:
        with urllib.request.urlopen(request) as response, destination.open("wb") as handle:
            status = getattr(response, "status", 200)
            if status is not None and not 200 <= status < 300:
                raise NetworkError(url, f"HTTP {status}")
            last_time = time.monotonic()
            last_bytes = 0
            downloaded = 0
            while True:
                chunk = response.read(_CHUNK_SIZE)
                if not chunk:
                    break
                handle.write(chunk)
                downloaded += len(chunk)
                now = time.monotonic()
                if status_callback and now - last_time >= 1.0:
                    speed = (downloaded - last_bytes) / max(now - last_time, 0.001)
                    status_callback(_format_speed_label(label or "Downloading", speed))
                    last_time = now
                    last_bytes = downloaded
    except NetworkError:
        _discard_partial(destination)
        raise
    except urllib.error.HTTPError as exc:
        _discard_partial(destination)
        raise NetworkError(url, f"HTTP {exc.code} {exc.reason}") from exc
    except urllib.error.URLError as exc:
        _discard_partial(destination)
        raise NetworkError(url, str(exc.reason)) from exc
    except (http.client.HTTPException, OSError) as exc:
        _discard_partial(destination)
        raise NetworkError(url, str(exc)) from exc
    _LOGGER.info("Downloaded %d bytes from %s", downloaded, url)
    return destination


def _discard_partial(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        _LOGGER.warning("Could not remove partial download %s: %s", path, exc)


def _format_speed(value: float) -> str:
    speed = max(value, 0.0)
    units = ["B/s", "KB/s", "MB/s", "GB/s", "TB/s"]
    for unit in units:
        if speed < 1024 or unit == units[-1]:
            return f"{speed:.1f} {unit}"
        speed /= 1024
    return f"{speed:.1f} B/s"


def _format_speed_label(label: str, speed_bytes_per_sec: float) -> str:
    return f"{label} ({_format_speed(speed_bytes_per_sec)})"
