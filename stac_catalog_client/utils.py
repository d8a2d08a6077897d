"""Utility functions for STAC catalog client."""

import re
from datetime import datetime, timezone

_FRACTION = re.compile(r"\.(\d+)")


def to_zulu(dt: datetime) -> str:
    """Convert datetime to ISO 8601 Zulu format (UTC with Z suffix)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    if dt.microsecond:
        return dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_datetime(dt_str: str) -> datetime:
    """Parse datetime string in ISO or date-only format.

    Supports:
    - ISO 8601 with T: "2024-05-28T00:00:00Z" or "2024-05-28T00:00:00+00:00"
    - Fractional seconds of any length: "2024-05-28T00:00:00.45Z"
      (truncated to microseconds)
    - ISO 8601 without timezone: "2024-05-28T00:00:00" (assumes UTC)
    - Date only: "2024-05-28" (assumes UTC)

    Raises:
        ValueError: If the datetime string cannot be parsed
    """
    if "T" in dt_str or "t" in dt_str:
        dt_str = dt_str.replace("Z", "+00:00").replace("z", "+00:00")
        # fromisoformat on 3.10 only takes 3 or 6 fraction digits
        dt_str = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), dt_str)
        dt = datetime.fromisoformat(dt_str)
        # If no timezone was specified, assume UTC
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
    else:
        # Date only - assume UTC
        return datetime.strptime(dt_str, "%Y-%m-%d").replace(tzinfo=timezone.utc)


def name_from_href(href: str) -> str:
    """Return the text after the last '/' of an href (the derived file name)."""
    return href[href.rfind("/") + 1:]
