"""Datetime utilities."""

from datetime import date, datetime, timezone


def parse_datetime(value) -> datetime | None:
    """Parse datetime from ISO string or return as-is if already datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def iso_date(value: datetime | date | None) -> str:
    """Return YYYY-MM-DD for a datetime/date, or "" when absent."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return ensure_utc(value).date().isoformat()
    return value.isoformat()


def days_since(value: datetime, now: datetime) -> float:
    """Fractional days between `value` and `now`."""
    return (ensure_utc(now) - ensure_utc(value)).total_seconds() / 86400
