"""Configuration management for taskline."""
from __future__ import annotations
from typing import Dict, Any, Optional
import os
import json
import logging

from taskline.core.errors import ConfigError
from taskline.utils.constants import DEFAULT_FRAMES, DEFAULT_INTERVAL, DEFAULT_STREAM, SUPPORTED_STREAMS

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TASKLINE_CONFIG"

# Default configuration; None means "detect from the stream"
DEFAULT_CONFIG = {
    "stream": DEFAULT_STREAM,
    "interval": DEFAULT_INTERVAL,
    "frames": DEFAULT_FRAMES,
    "color": None,
    "animate": None,
}

class Config:
    """Configuration manager for taskline settings."""

    def __init__(self, config_file: Optional[str] = None):
        self.settings: Dict[str, Any] = DEFAULT_CONFIG.copy()
        self.config_file = config_file or os.environ.get(CONFIG_ENV_VAR) or os.path.expanduser("~/.taskline_config.json")
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file if exists."""
        try:
            if os.path.exists(self.config_file):
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    self.settings.update(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load config: {e}")

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.settings, f, indent=2)
        except OSError as e:
            logger.warning(f"Failed to save config: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        self.settings[key] = value

    def validated(self, **overrides: Any) -> Dict[str, Any]:
        """Return a copy of the settings with ``overrides`` applied.

        Raises ConfigError on bad values; the stored settings are never touched.
        """
        settings = {**self.settings, **overrides}
        if settings.get("stream") not in SUPPORTED_STREAMS:
            raise ConfigError(f"Unsupported stream {settings.get('stream')!r}; expected one of {SUPPORTED_STREAMS}")
        try:
            interval = float(settings.get("interval"))
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid interval: {settings.get('interval')!r}")
        if interval <= 0:
            raise ConfigError(f"Interval must be positive, got {interval}")
        settings["interval"] = interval
        frames = settings.get("frames")
        if not frames or not isinstance(frames, (str, list)):
            raise ConfigError("Spinner frames must be a non-empty string or list")
        for key in ("color", "animate"):
            if settings.get(key) is not None and not isinstance(settings[key], bool):
                raise ConfigError(f"{key} must be true, false or null")
        return settings

# Global config instance
config = Config()
