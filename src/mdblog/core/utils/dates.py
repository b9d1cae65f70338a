"""Date parsing and the wire/feed date formats"""

import math
from datetime import date, datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are read as UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_text(text: str) -> datetime:
    text = text.strip()
    if not text:
        raise ValueError("empty date string")
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        # RFC 822 style, e.g. "Mon, 01 Jan 2024 00:00:00 GMT"
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError) as e:
        raise ValueError(f"unrecognized date format: {text!r}") from e


def parse_date(value: str | int | float | date | datetime) -> datetime:
    """Return value as a timezone-aware UTC datetime, or raise ValueError.

    Numbers are epoch milliseconds. Bare dates and naive datetimes are UTC.
    """
    if isinstance(value, bool):
        raise ValueError("booleans are not dates")
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"non-finite timestamp: {value}")
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"timestamp out of range: {value}") from e
    if isinstance(value, str):
        return _as_utc(_parse_text(value))
    raise ValueError(f"unsupported date type: {type(value).__name__}")


def to_iso(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    value = _as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def to_rfc822(value: datetime) -> str:
    """RFC 822 date in GMT, e.g. Mon, 01 Jan 2024 00:00:00 GMT."""
    return format_datetime(_as_utc(value), usegmt=True)


def to_human(value: datetime) -> str:
    """Long US-style date in UTC, e.g. January 1, 2024."""
    value = _as_utc(value)
    return f"{value:%B} {value.day}, {value.year}"
