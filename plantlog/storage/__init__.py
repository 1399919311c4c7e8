"""PlantLog storage - key-value persistence media.

The RecordStore persists three JSON-encoded entries (plants, careRecords,
reminders) through any object with `get(key)` and `set(key, value)`.
"""

from .database import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore, SCHEMA_VERSION

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqliteKeyValueStore",
    "SCHEMA_VERSION",
]
