"""Timestamp helpers shared by both reminder stores."""

from datetime import UTC, date, datetime, time


def utcnow() -> datetime:
    """Current time, timezone-aware UTC, truncated to seconds."""
    return datetime.now(UTC).replace(microsecond=0)


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_iso8601(value: str, end_of_day: bool = False) -> datetime:
    """
    Parse an ISO 8601 date or timestamp into aware UTC.

    Accepts "2025-10-20", "2025-10-20T09:00:00", "2025-10-20T09:00:00Z"
    and offsets such as "+02:00". A date-only value means midnight UTC, or
    the last whole second of that day when end_of_day is set, so an
    inclusive upper bound covers the entire day.

    Raises:
        ValueError: if the string is not ISO 8601
    """
    text = value.strip()
    if not text:
        raise ValueError("empty timestamp")
    if len(text) == 10:
        parsed_date = date.fromisoformat(text)
        bound = time(23, 59, 59) if end_of_day else time(0)
        return datetime.combine(parsed_date, bound, tzinfo=UTC)
    return to_utc(datetime.fromisoformat(text))


def truncate(value: datetime) -> datetime:
    """Aware UTC at whole-second precision, as both stores keep it."""
    return to_utc(value).replace(microsecond=0)


def to_storage(value: datetime) -> str:
    """Serialize for a TEXT column; lexical order matches time order."""
    return to_utc(value).isoformat(timespec="seconds")


def from_storage(raw: str | None) -> datetime | None:
    if not raw:
        return None
    return to_utc(datetime.fromisoformat(raw))
