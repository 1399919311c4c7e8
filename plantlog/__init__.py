"""
PlantLog

Local record keeping for succulent owners: plants, care records and
reminders persisted in a key-value store.
"""

__version__ = "0.1.0"

# Store exports
from plantlog.core import RecordStore, ReminderNotice, open_store

# Record exports
from plantlog.core.records import CareRecord, CareType, Plant, Reminder
from plantlog.core.types import Date, Timestamp

# Storage exports
from plantlog.storage import MemoryKeyValueStore, SqliteKeyValueStore

# Exception exports
from plantlog import exceptions

__all__ = [
    # Store
    "RecordStore",
    "ReminderNotice",
    "open_store",
    # Records
    "Plant",
    "CareRecord",
    "Reminder",
    "CareType",
    # Types
    "Date",
    "Timestamp",
    # Storage
    "MemoryKeyValueStore",
    "SqliteKeyValueStore",
    # Exceptions module (access as plantlog.exceptions.StorageFailure, etc.)
    "exceptions",
]
