"""Timestamp conversions between domain datetimes and store timestamps.

The store keeps timestamps as UTC instants without zone information, so
values are converted to UTC before they are written and re-tagged as UTC
when read back.
"""

from datetime import datetime, timezone

# Store precision is one second.
TIME_FORMAT = '%Y-%m-%d %H:%M:%S +0000 UTC'


def to_utc(value: datetime) -> datetime:
    """Convert to an aware UTC datetime. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_store(value: datetime) -> datetime:
    """Normalise a datetime for persistence: UTC, whole seconds."""
    return to_utc(value).replace(microsecond=0)


def from_store(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return to_utc(value)


def format_timestamp(value: datetime) -> str:
    """Format as ``YYYY-MM-DD HH:MM:SS +0000 UTC``."""
    return to_utc(value).strftime(TIME_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """Parse text produced by ``format_timestamp`` into an aware UTC datetime."""
    return datetime.strptime(text, TIME_FORMAT).replace(tzinfo=timezone.utc)
