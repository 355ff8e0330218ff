"""Persistence helpers for user configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .config import AppConfig

SETTINGS_ENV_VAR = "FACE_INSIGHT_SETTINGS"

logger = logging.getLogger(__name__)


class SettingsStore:
    """Load and save credentials and endpoints from a well-known path."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AppConfig:
        if not self._path.exists():
            logger.debug("No settings file at %s; using defaults.", self._path)
            return AppConfig()
        return AppConfig.load(self._path)

    def save(self, config: AppConfig) -> None:
        config.save(self._path)
        logger.info("Saved settings to %s", self._path)


def default_settings_path() -> Path:
    """Return the settings file location, honouring ``FACE_INSIGHT_SETTINGS``."""
    override = os.getenv(SETTINGS_ENV_VAR)
    if override:
        return Path(override).expanduser()
    if os.name == "nt":
        base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base.expanduser() / "face_insight" / "settings.yaml"
