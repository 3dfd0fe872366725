"""Configuration parser for the command-line reminder."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


PACKAGE_DIR = Path(__file__).parent
DEFAULT_ICON = PACKAGE_DIR / "assets" / "information.png"


@dataclass
class ReminderConfig:
    """Settings shared by the launcher and the waiter process."""
    title: str = "Reminder"
    icon_path: Path = DEFAULT_ICON
    marker_name: str = "CLI_REMINDER_WAITER"
    marker_value: str = "1"
    languages: List[str] = field(default_factory=lambda: ["en"])
    notify_timeout: int = 10000  # milliseconds
    waiter_log: Optional[Path] = None

    def __post_init__(self):
        if isinstance(self.icon_path, str):
            self.icon_path = Path(self.icon_path)
        if isinstance(self.waiter_log, str):
            self.waiter_log = Path(self.waiter_log)

    @classmethod
    def from_dict(cls, settings: dict, config_dir: Path) -> "ReminderConfig":
        """Create a ReminderConfig from the [general] table of a config file."""
        marker_name = settings.get("marker_name", "CLI_REMINDER_WAITER")
        if not marker_name or "=" in marker_name:
            raise ValueError(f"Invalid 'marker_name': {marker_name!r}")

        languages = settings.get("languages", ["en"])
        if isinstance(languages, str):
            languages = [languages]

        icon_path = DEFAULT_ICON
        if "icon" in settings:
            icon_path = Path(settings["icon"]).expanduser()
            if not icon_path.is_absolute():
                icon_path = config_dir / icon_path

        waiter_log = settings.get("waiter_log")
        if waiter_log:
            waiter_log = Path(waiter_log).expanduser()
            if not waiter_log.is_absolute():
                waiter_log = config_dir / waiter_log

        return cls(
            title=settings.get("title", "Reminder"),
            icon_path=icon_path,
            marker_name=marker_name,
            marker_value=str(settings.get("marker_value", "1")),
            languages=list(languages),
            notify_timeout=int(settings.get("notify_timeout", 10000)),
            waiter_log=waiter_log or None,
        )


def parse_config_data(config_data: dict, config_dir: Path) -> ReminderConfig:
    """
    Parse configuration data into a ReminderConfig.

    Args:
        config_data: Raw parsed TOML data
        config_dir: Directory that relative paths are resolved against

    Returns:
        ReminderConfig built from the [general] table, or defaults
    """
    settings = config_data.get("general", {})
    if not isinstance(settings, dict):
        raise ValueError("The 'general' section must be a table")

    config = ReminderConfig.from_dict(settings, config_dir)

    if not config.icon_path.exists():
        print(f"Warning: Icon file not found: {config.icon_path}")

    return config


def load_config_file(config_file: Path) -> dict:
    """Load and parse a TOML configuration file."""
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    with open(config_file, "rb") as f:
        return tomllib.load(f)


class ConfigManager:
    """Manages loading and parsing of the reminder configuration."""

    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "cli-reminder"
    CONFIG_FILE = "config.toml"
    CONFIG_DIR_ENV = "CLI_REMINDER_CONFIG_DIR"

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None and os.environ.get(self.CONFIG_DIR_ENV):
            config_dir = Path(os.environ[self.CONFIG_DIR_ENV]).expanduser()
        self.config_dir = Path(config_dir) if config_dir else self.DEFAULT_CONFIG_DIR
        self.config_file = self.config_dir / self.CONFIG_FILE
        self.config: ReminderConfig = ReminderConfig()

    def load_config(self) -> ReminderConfig:
        """Load the configuration file, falling back to defaults if there is none."""
        if not self.config_file.exists():
            self.config = ReminderConfig()
            return self.config

        config_data = load_config_file(self.config_file)
        self.config = parse_config_data(config_data, self.config_dir)
        return self.config

    def load_from_data(self, config_data: dict) -> ReminderConfig:
        """Load settings from already-parsed config data."""
        self.config = parse_config_data(config_data, self.config_dir)
        return self.config
