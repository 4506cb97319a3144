"""Id and date helpers used when reading and writing persisted state."""

from datetime import date, datetime
from uuid import NAMESPACE_URL, UUID, uuid5


def parse_id(raw: object) -> UUID:
    """Parse a stored id.

    Blobs written by the browser app use short random strings as ids; those are
    mapped onto deterministic UUIDs so they stay stable across loads.
    """
    text = str(raw)
    try:
        return UUID(text)
    except ValueError:
        return uuid5(NAMESPACE_URL, f"school-meals:{text}")


def parse_day(raw: object) -> date:
    """Parse a stored date, reducing full timestamps to their calendar day."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw)
    if len(text) > 10:  # noqa: PLR2004
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def dump_day(day: date) -> str:
    """Format a calendar day for storage."""
    return day.isoformat()
