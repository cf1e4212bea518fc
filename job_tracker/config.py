"""Load project settings from config/settings.yaml and the environment."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from job_tracker.digest import DIGEST_SIZE
from job_tracker.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
DATA_DIR: Path = ROOT_DIR / "data"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"
CATALOG_PATH: Path = CONFIG_DIR / "jobs.yaml"

DEFAULT_SETTINGS: dict[str, Any] = {
    "store": "file",
    "store_path": str(DATA_DIR / "store.json"),
    "catalog_path": str(CATALOG_PATH),
    "digest_size": 10,
    "recent_updates_limit": 10,
}

# Environment variable -> settings key
_ENV_OVERRIDES: dict[str, str] = {
    "TRACKER_STORE": "store",
    "TRACKER_STORE_PATH": "store_path",
    "TRACKER_CATALOG_PATH": "catalog_path",
}


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """Defaults, overlaid with the YAML file (if present), then env overrides."""
    path = path or SETTINGS_PATH
    settings = dict(DEFAULT_SETTINGS)

    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name}: expected a mapping at the top level")
        settings.update({k: v for k, v in data.items() if v is not None})
    else:
        log.debug("No settings file at %s — using defaults", path)

    for env_key, setting in _ENV_OVERRIDES.items():
        value = get_env(env_key)
        if value:
            settings[setting] = value

    # Relative paths in the YAML file are relative to the project root
    for key in ("store_path", "catalog_path"):
        p = Path(settings[key]).expanduser()
        settings[key] = str(p if p.is_absolute() else ROOT_DIR / p)

    settings["digest_size"] = int(settings["digest_size"])
    if not 1 <= settings["digest_size"] <= DIGEST_SIZE:
        raise ValueError(f"digest_size must be between 1 and {DIGEST_SIZE}, got {settings['digest_size']}")
    settings["recent_updates_limit"] = int(settings["recent_updates_limit"])
    return settings


def ensure_dirs() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
