"""UTC datetime helpers used by persistence mappers."""

from datetime import UTC, datetime


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Return dt as a UTC-aware datetime.

    Naive values are assumed to already be UTC (SQLite drops tzinfo).
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_iso(dt: datetime | None) -> str | None:
    return ensure_utc(dt).isoformat() if dt is not None else None


def from_iso(value: str | None) -> datetime | None:
    return ensure_utc(datetime.fromisoformat(value)) if value else None
