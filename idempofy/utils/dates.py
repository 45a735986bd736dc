"""Date parsing and ISO-8601 UTC rendering."""

from datetime import date, datetime, time, timezone

from dateutil.parser import isoparse


def is_date_value(value: object) -> bool:
    return isinstance(value, (datetime, date))


def to_iso_string(value: datetime | date) -> str:
    """
    Render as YYYY-MM-DDTHH:MM:SS.mmmZ in UTC.
    Naive datetimes are taken as UTC; plain dates mean midnight UTC.
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min, tzinfo=timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}Z"
    )


def parse_date_string(value: str) -> datetime | None:
    """
    Strict ISO-8601 parse; None if ``value`` is not a date or cannot be
    shifted to UTC within the datetime range.
    """
    try:
        parsed = isoparse(value.strip())
        if parsed.tzinfo is not None:
            parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None
    return parsed


def looks_like_iso_timestamp(value: str) -> bool:
    """A parseable ISO string carrying both a time part and a Z suffix."""
    return "T" in value and "Z" in value and parse_date_string(value) is not None
