"""Utility functions for date manipulation."""

from datetime import datetime

import pytz


def utc_now() -> datetime:
    """Returns the current time as a timezone-aware UTC datetime."""
    return datetime.now(pytz.utc)


def format_datetime_iso(dt: datetime | None) -> str | None:
    """Formats a datetime as an ISO 8601 string, UTC times ending in 'Z'."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc).isoformat().replace("+00:00", "Z")


def parse_datetime_iso(dt_str: str | None) -> datetime | None:
    """Parses an ISO datetime string (with 'Z' or an offset) into an aware datetime."""
    if not dt_str:
        return None
    try:
        dt_obj = datetime.fromisoformat(dt_str.replace("Z", "+00:00"))
    except (ValueError, TypeError, AttributeError):
        return None
    if dt_obj.tzinfo is None:
        dt_obj = pytz.utc.localize(dt_obj)
    return dt_obj
