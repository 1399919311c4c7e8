"""Environment variable access and path resolution.

Database Path Resolution Order:
1. Explicit database file (PLANTLOG_DB)
2. Shared data directory (PLANTLOG_DATA_DIR/plantlog.db)
3. Configured path from the TOML file, if any
4. Current directory (./plantlog.db)
"""

import os
from pathlib import Path

DB_FILENAME = "plantlog.db"


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable.

    Args:
        key: Environment variable name
        default: Default value if not found

    Returns:
        Environment variable value or default
    """
    return os.environ.get(key, default)


def get_db_path(configured: str | Path | None = None) -> Path:
    """Resolve the database file path.

    Args:
        configured: Path taken from the config file, used only when no
            environment variable overrides it

    Returns:
        Path to database file

    Examples:
        >>> os.environ['PLANTLOG_DB'] = '/custom/plants.db'
        >>> get_db_path()
        Path('/custom/plants.db')

        >>> os.environ['PLANTLOG_DATA_DIR'] = '/data'
        >>> get_db_path()
        Path('/data/plantlog.db')
    """
    db_path = get_env("PLANTLOG_DB")
    if db_path:
        return Path(db_path)

    data_dir = get_env("PLANTLOG_DATA_DIR")
    if data_dir:
        return Path(data_dir) / DB_FILENAME

    if configured:
        return Path(configured).expanduser()

    return Path(f"./{DB_FILENAME}")
