"""Host interface for PlantLog.

Provides abstractions for host platform operations (filesystem, environment, time).
"""

from .filesystem import ensure_dir
from .environment import get_env, get_db_path
from .time import now_utc

__all__ = [
    "ensure_dir",
    "get_env",
    "get_db_path",
    "now_utc",
]
