"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the service are timezone-aware UTC. The trailing
window for popular searches is computed from utc_now(), so tests patch this
function to pin "now".
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Used at the repository boundary: asyncpg returns aware values for
    timestamptz columns, but externally managed tables may use plain
    timestamp columns.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)
