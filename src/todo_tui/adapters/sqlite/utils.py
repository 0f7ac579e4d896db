"""Value conversions between Task fields and SQLite columns.

DATETIME columns hold ISO-8601 text. Deadlines are naive local times and are
stored without an offset; bookkeeping timestamps are UTC.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_timestamp() -> str:
    """Current UTC time for ``created_at`` / ``updated_at``."""
    return datetime.now(UTC).isoformat()


def encode_datetime(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def decode_datetime(value: str | None) -> datetime | None:
    """Parse a stored DATETIME value.

    Raises:
        ValueError: If the text is not ISO-8601
    """
    if value is None:
        return None
    return datetime.fromisoformat(value)
