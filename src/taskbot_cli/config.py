"""Configuration management for the Taskbot CLI application."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .utils.datetime import DEFAULT_DATE_FORMAT, DEFAULT_TIME_FORMAT

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.taskbot/config.yaml")


@dataclass
class ConfigModel:
    """Global configuration model for Taskbot CLI."""

    # File paths
    data_dir: str = "~/.taskbot"
    save_file: str = "tasks.md"
    backup_dir: str = "~/.taskbot/backups"

    # Date preferences
    date_format: str = DEFAULT_DATE_FORMAT
    time_format: str = DEFAULT_TIME_FORMAT
    natural_dates: bool = False  # accept "tomorrow", "next friday", ...

    # Behavior settings
    containment_dispatch: bool = False  # legacy keyword-anywhere routing

    # Logging and UI
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    no_color: bool = False

    def __post_init__(self):
        """Post-initialization setup."""
        self.data_dir = os.path.expanduser(self.data_dir)
        self.backup_dir = os.path.expanduser(self.backup_dir)
        if self.log_file:
            self.log_file = os.path.expanduser(self.log_file)

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a YAML mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

        return cls(**{k: v for k, v in data.items() if k in known})

    def get_save_path(self) -> Path:
        """Get the save file path."""
        save_path = Path(os.path.expanduser(self.save_file))
        if save_path.is_absolute():
            return save_path
        return Path(self.data_dir) / save_path

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.data_dir) / "config.yaml"

    def get_backup_path(self, timestamp: Optional[str] = None) -> Path:
        """Get backup directory path."""
        if timestamp:
            return Path(self.backup_dir) / timestamp
        return Path(self.backup_dir)


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file, falling back to defaults."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH.expanduser()
    config_path = Path(config_path)

    if not config_path.exists():
        logger.debug("No configuration at %s, using defaults", config_path)
        return ConfigModel()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = ConfigModel.from_yaml(f.read())
        logger.info("Loaded configuration from %s", config_path)
        return config
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        logger.warning("Failed to load config from %s: %s. Using default configuration.", config_path, e)
        return ConfigModel()


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> bool:
    """Save configuration to file."""
    if config_path is None:
        config_path = config.get_config_path()
    config_path = Path(config_path)

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(config.to_yaml())
        logger.info("Configuration saved to %s", config_path)
        return True
    except OSError as e:
        logger.error("Failed to save config to %s: %s", config_path, e)
        return False
