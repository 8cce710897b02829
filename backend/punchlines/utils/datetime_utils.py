"""
Datetime utilities
Provides a replacement for the deprecated datetime.utcnow()
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get current UTC time as a naive datetime

    Columns are stored as naive UTC so values compare the same way on
    PostgreSQL and SQLite.

    Example:
        >>> from punchlines.utils.datetime_utils import utc_now
        >>> utc_now().tzinfo is None
        True
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
