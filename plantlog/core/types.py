"""Domain types for PlantLog.

These types define the string representations persisted for dates and
timestamps, so ordering and due-date comparison can work lexicographically.
"""

from datetime import date, datetime, timezone


class Timestamp(str):
    """ISO 8601 UTC timestamp string.

    Format: '2025-12-23T10:30:00.123Z'

    This is a string subtype for JSON serialization compatibility while
    providing a type-safe conversion method.
    """

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Timestamp":
        """Convert datetime to Timestamp.

        Args:
            dt: datetime object (naive datetimes treated as UTC)

        Returns:
            Timestamp string in ISO 8601 format with 'Z' suffix
        """
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        dt = dt.astimezone(timezone.utc)
        return cls(dt.isoformat(timespec="milliseconds").replace("+00:00", "Z"))


class Date(str):
    """ISO 8601 date string.

    Represents a calendar date without time or timezone.
    Format: '2025-12-23'
    """

    @classmethod
    def from_date(cls, d: date) -> "Date":
        """Convert date to Date string.

        Args:
            d: date object (a datetime is truncated to its date)

        Returns:
            Date string in ISO 8601 format (YYYY-MM-DD)
        """
        if isinstance(d, datetime):
            d = d.date()
        return cls(d.isoformat())

    @classmethod
    def coerce(cls, value: "date | str") -> "Date":
        """Normalize a date or ISO string to a Date.

        Args:
            value: date/datetime object, or a 'YYYY-MM-DD' string

        Returns:
            Date string

        Raises:
            ValueError: If a string value is not an ISO calendar date
        """
        if isinstance(value, date):
            return cls.from_date(value)
        return cls.from_date(date.fromisoformat(value))
