"""Clock helpers. All timestamps in the identity domain are aware UTC."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps read back from stores without tz support.

    SQLite drops the offset of ``DateTime(timezone=True)`` columns.
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
