"""UTC datetime helpers.

Every timestamp the portal stores or compares (token expiry, joined_at,
email_log.sent_at, session exp) is timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a datetime read from the database to aware UTC.

    SQLite returns naive values for DateTime(timezone=True) columns; those
    are taken to be UTC. Aware values are converted. None passes through.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def from_timestamp_utc(timestamp: float) -> datetime:
    """Aware UTC datetime from a Unix timestamp in seconds (e.g. a JWT exp claim)."""
    return datetime.fromtimestamp(timestamp, tz=UTC)
