"""Time and timestamp utilities."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Get current UTC time.

    Returns:
        datetime object with UTC timezone
    """
    return datetime.now(timezone.utc)
