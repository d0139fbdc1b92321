"""
Shared date/time formatting helpers for report output.

Keeps every output format consistent with the selected date format.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

_DATE_PARTS = {
    "eu": "%d.%m.%Y",
    "us": "%m/%d/%Y",
    "iso": "%Y-%m-%d",
}


def to_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are assumed to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_datetime(
    value: Optional[datetime],
    date_format: str = "iso",
    *,
    include_time: bool = True,
    include_seconds: bool = False,
) -> str:
    """Format a timestamp according to the selected date format.

    Args:
        value: Timestamp to format (None renders as an empty string).
        date_format: "iso" for yyyy-mm-dd, "eu" for dd.mm.yyyy, "us" for mm/dd/yyyy.
        include_time: Whether to include the time of day.
        include_seconds: Whether to include seconds when time is shown.

    Returns:
        Formatted UTC date/time string.

    Raises:
        ValueError: Unknown date_format.
    """
    if value is None:
        return ""
    if date_format not in _DATE_PARTS:
        raise ValueError(f"Unknown date format: {date_format}")

    dt = to_utc(value)
    date_part = _DATE_PARTS[date_format]
    if not include_time:
        return dt.strftime(date_part)

    time_part = "%H:%M:%S" if include_seconds else "%H:%M"
    return dt.strftime(f"{date_part} {time_part}") + " UTC"


def format_iso(value: Optional[datetime]) -> Optional[str]:
    """ISO 8601 in UTC for machine-readable output, or None."""
    if value is None:
        return None
    return to_utc(value).isoformat()
