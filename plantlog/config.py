"""Configuration management for PlantLog.

Configuration is loaded from a TOML file with environment variable overrides.

Configuration Resolution Order:
1. Environment variables (highest priority)
2. TOML config file
3. Built-in defaults

Example config.toml:

    [storage]
    database_path = "~/.local/share/plantlog/plantlog.db"

    [export]
    directory = "~/Downloads"

    [logging]
    level = "info"
"""

import sys
from pathlib import Path
from typing import Optional, Any

from plantlog.host.environment import get_db_path, get_env

# Python 3.11+ has tomllib in stdlib, otherwise use tomli
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


def load_toml_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config.toml file

    Returns:
        Dictionary with configuration sections

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is invalid TOML
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}")


def get_config_path(config_override: Optional[Path] = None) -> Path:
    """Get configuration file path.

    Args:
        config_override: Optional explicit config path

    Returns:
        Path to configuration file (PLANTLOG_CONFIG, then the user config dir)
    """
    if config_override:
        return config_override

    env_path = get_env("PLANTLOG_CONFIG")
    if env_path:
        return Path(env_path)

    return Path.home() / ".config/plantlog/config.toml"


class Settings:
    """PlantLog settings.

    Attributes:
        database_path: SQLite file backing the record store
        export_dir: Directory export files are written to
        log_level: Logging level name (e.g. "info")
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize settings.

        Args:
            config_path: Optional explicit path to config.toml
        """
        self._config: dict[str, Any] = {}

        if config_path is None:
            config_path = get_config_path()
        self.config_path = config_path

        if config_path.exists():
            try:
                self._config = load_toml_config(config_path)
            except (OSError, ValueError) as e:
                # Continue with defaults
                import warnings
                warnings.warn(f"Failed to load config from {config_path}: {e}")

        self._apply_config()

    def _apply_config(self):
        """Apply settings in order env var > TOML > default."""
        storage_config = self._config.get("storage", {})
        self.database_path = get_db_path(storage_config.get("database_path"))

        export_config = self._config.get("export", {})
        export_dir_env = get_env("PLANTLOG_EXPORT_DIR")
        if export_dir_env:
            self.export_dir = Path(export_dir_env)
        elif export_config.get("directory"):
            self.export_dir = Path(export_config["directory"]).expanduser()
        else:
            self.export_dir = Path.cwd()

        logging_config = self._config.get("logging", {})
        self.log_level = get_env(
            "PLANTLOG_LOG_LEVEL",
            logging_config.get("level", "warning")
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return getattr(self, key, default)
