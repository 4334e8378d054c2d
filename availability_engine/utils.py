"""Shared time helpers. All instants handled by the engine are aware UTC datetimes."""

import re
from datetime import date, datetime, time, timedelta, timezone

SECONDS_PER_DAY = 24 * 60 * 60

_TIME_OF_DAY = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Naive datetimes are taken to already be UTC, matching how booking
    rows are stored.

    Examples:
        >>> ensure_utc(datetime(2025, 3, 17, 10, 0)).isoformat()
        '2025-03-17T10:00:00+00:00'
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def start_of_day(day: date) -> datetime:
    """Midnight UTC at the start of ``day``."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    """Last representable millisecond of ``day`` in UTC (23:59:59.999)."""
    return start_of_day(day) + timedelta(days=1) - timedelta(milliseconds=1)


def day_of_week(instant: datetime) -> int:
    """UTC day of week with 0 = Sunday ... 6 = Saturday.

    Examples:
        >>> day_of_week(datetime(2025, 3, 16, 12, tzinfo=timezone.utc))
        0
    """
    return (ensure_utc(instant).weekday() + 1) % 7


def seconds_of_day(instant: datetime) -> int:
    """UTC time of day in seconds, at minute precision."""
    utc = ensure_utc(instant)
    return utc.hour * 3600 + utc.minute * 60


def parse_time_of_day(value: str) -> int:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into seconds since midnight.

    ``24:00`` is accepted as the end of the day.

    Examples:
        >>> parse_time_of_day("08:30")
        30600
        >>> parse_time_of_day("24:00:00")
        86400
    """
    match = _TIME_OF_DAY.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time of day: {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    if minutes > 59 or seconds > 59:
        raise ValueError(f"Invalid time of day: {value!r}")
    total = hours * 3600 + minutes * 60 + seconds
    if total > SECONDS_PER_DAY:
        raise ValueError(f"Time of day out of range: {value!r}")
    return total


def format_hhmm(instant: datetime) -> str:
    """Format an instant as a UTC ``HH:MM`` label."""
    return ensure_utc(instant).strftime("%H:%M")


def format_hours(hours: float) -> str:
    """Render an hour count without a trailing ``.0``.

    Examples:
        >>> format_hours(2.0)
        '2'
        >>> format_hours(1.5)
        '1.5'
    """
    return f"{float(hours):g}"
