"""Clock and display formatting for the classroom's local time."""
from datetime import date, datetime, timezone, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

Clock = Callable[[], datetime]

def system_clock() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)

def resolve_timezone(name: str) -> tzinfo:
    """Zone for a SCHOOL_TIMEZONE value; unknown names are a configuration error."""
    if not name or name.upper() == 'UTC':
        return timezone.utc
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError as e:
        raise ValueError(f"Unknown timezone: {name}") from e

def format_record_date(day) -> str:
    """Calendar day as stored on records, e.g. ``10/18/2026``."""
    if isinstance(day, datetime):
        day = day.date()
    if not isinstance(day, date):
        raise TypeError(f"Expected a date, got {type(day).__name__}")
    return f"{day.month}/{day.day}/{day.year}"

def format_scan_time(moment: datetime) -> str:
    """Local clock as shown on records, e.g. ``07:30 AM``."""
    return moment.strftime('%I:%M %p')
