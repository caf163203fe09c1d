"""Utility helpers: XDG paths, JSON file I/O, app settings."""

from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path


APP_ID = "com.github.wrandr"


def config_dir() -> Path:
    """Return ~/.config/wrandr, creating it if needed."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    d = base / "wrandr"
    d.mkdir(parents=True, exist_ok=True)
    return d


def is_swaymsg_installed(binary: str = "swaymsg") -> bool:
    """Return True if the swaymsg binary is on PATH."""
    return shutil.which(binary) is not None


def read_json(path: Path) -> dict | list | None:
    """Read and parse a JSON file, returning None on failure."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return None


def write_json(path: Path, data: dict | list) -> None:
    """Write data as formatted JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def _settings_path() -> Path:
    """Return the path to the global app settings file."""
    return config_dir() / "settings.json"


def load_app_settings() -> dict:
    """Load global application settings."""
    data = read_json(_settings_path())
    return data if isinstance(data, dict) else {}


def save_app_settings(settings: dict) -> None:
    """Save global application settings."""
    write_json(_settings_path(), settings)


def log_level_from_env() -> int:
    """DEBUG when ``WRANDR_DEBUG=1``, INFO otherwise."""
    return logging.DEBUG if os.environ.get("WRANDR_DEBUG") == "1" else logging.INFO
