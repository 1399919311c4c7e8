"""Custom exceptions for PlantLog.

Lookups that miss (update or reschedule of an unknown id) return None
instead of raising. The exceptions here cover the persistence medium and
import payloads.
"""


class PlantLogError(Exception):
    """Base exception for all PlantLog errors."""

    def __init__(self, message: str, details: dict | None = None):
        """Initialize exception with message and optional details.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details


class StorageFailure(PlantLogError):
    """Exception raised when the persistence medium cannot be read or written.

    Covers an unavailable or full medium as well as a persisted entry that
    no longer decodes to a collection of records.

    Attributes:
        key: Name of the persisted entry involved, if known
    """

    key: str | None

    def __init__(self, message: str, key: str | None = None, details: dict | None = None):
        """Initialize storage failure.

        Args:
            message: Human-readable error message
            key: Name of the persisted entry involved (e.g. 'plants')
            details: Optional dictionary with additional error context
        """
        merged = dict(details or {})
        if key is not None:
            merged.setdefault("key", key)
        super().__init__(message, merged or None)
        self.key = key


class MalformedImport(PlantLogError):
    """Exception raised when an import payload is not a snapshot document."""

    pass
