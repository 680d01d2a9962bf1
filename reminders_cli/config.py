"""Configuration parser for the reminders CLI."""

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ConfigError


OUTPUT_CHOICES = ("text", "json")


@dataclass
class GeneralConfig:
    """General settings for the reminders CLI."""
    calendar: Optional[str] = None  # List name; None means the store's default list
    output: str = "text"  # "text" or "json", used by `ls`
    location_radius: float = 100.0  # meters
    permission_timeout: Optional[float] = None  # seconds; None blocks forever

    def __post_init__(self):
        if self.output not in OUTPUT_CHOICES:
            raise ConfigError(f"output must be one of {', '.join(OUTPUT_CHOICES)}, got {self.output!r}")
        if not isinstance(self.location_radius, (int, float)) or self.location_radius < 0:
            raise ConfigError(f"location_radius must be a non-negative number, got {self.location_radius!r}")
        if self.permission_timeout is not None and (
            not isinstance(self.permission_timeout, (int, float)) or self.permission_timeout <= 0
        ):
            raise ConfigError(f"permission_timeout must be a positive number, got {self.permission_timeout!r}")

    @classmethod
    def from_dict(cls, settings: dict) -> "GeneralConfig":
        """Create a GeneralConfig from a dictionary."""
        known = {f.name for f in fields(cls)}
        for key in settings:
            if key not in known:
                print(f"Warning: Unknown setting in [general]: {key}", file=sys.stderr)

        return cls(
            calendar=settings.get("calendar", None),
            output=settings.get("output", "text"),
            location_radius=settings.get("location_radius", 100.0),
            permission_timeout=settings.get("permission_timeout", None),
        )


def parse_config_data(config_data: dict) -> GeneralConfig:
    """
    Parse configuration data into a GeneralConfig.

    Args:
        config_data: Raw parsed TOML data

    Returns:
        The GeneralConfig, with defaults for anything not given
    """
    general_config = GeneralConfig()

    for name, settings in config_data.items():
        if name != "general":
            print(f"Warning: Ignoring unknown config section: {name}", file=sys.stderr)
            continue
        if not isinstance(settings, dict):
            raise ConfigError("[general] must be a table")
        general_config = GeneralConfig.from_dict(settings)

    return general_config


def load_config_file(config_file: Path) -> dict:
    """Load and parse a TOML configuration file. A missing file is empty."""
    if not config_file.exists():
        return {}

    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot parse {config_file}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_file}: {e}") from e


class ConfigManager:
    """Manages loading and parsing of the CLI configuration."""

    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "reminders-cli"
    CONFIG_DIR_ENV = "REMINDERS_CLI_CONFIG_DIR"
    CONFIG_FILE = "config.toml"

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None and os.environ.get(self.CONFIG_DIR_ENV):
            config_dir = os.environ[self.CONFIG_DIR_ENV]
        self.config_dir = Path(config_dir) if config_dir else self.DEFAULT_CONFIG_DIR
        self.config_file = self.config_dir / self.CONFIG_FILE
        self.general: GeneralConfig = GeneralConfig()

    def load_config(self) -> GeneralConfig:
        """Load and parse the configuration file."""
        return self.load_from_data(load_config_file(self.config_file))

    def load_from_data(self, config_data: dict) -> GeneralConfig:
        """Load settings from already-parsed config data."""
        self.general = parse_config_data(config_data)
        return self.general
