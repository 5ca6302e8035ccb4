"""UTC time helpers.

Alert dates, refresh stamps and error envelopes all use timezone-aware UTC
datetimes, rendered as ISO-8601 with an offset.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_now(*, timespec: str | None = None) -> str:
    """Current UTC time as an ISO-8601 string."""
    now = utc_now()
    return now.isoformat(timespec=timespec) if timespec else now.isoformat()


def to_epoch_ms(dt: datetime) -> int:
    """Milliseconds since the epoch; naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)
