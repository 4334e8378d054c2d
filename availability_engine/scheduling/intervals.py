"""Duration and candidate-interval validation."""

import math
from datetime import datetime, timedelta

from availability_engine.exceptions import InvalidDurationError, InvalidIntervalError
from availability_engine.schemas.booking_schema import CandidateInterval
from availability_engine.scheduling.time_grid import SLOT_MINUTES, is_grid_aligned
from availability_engine.utils import end_of_day, ensure_utc, format_hours

MIN_DURATION_HOURS = 1.0
MAX_DURATION_HOURS = 6.0
DURATION_STEP_HOURS = 0.5

DURATION_CHOICES: tuple[float, ...] = tuple(
    MIN_DURATION_HOURS + DURATION_STEP_HOURS * i
    for i in range(int((MAX_DURATION_HOURS - MIN_DURATION_HOURS) / DURATION_STEP_HOURS) + 1)
)


def validate_duration(hours: float, *, bounded: bool = True) -> float:
    """Check a caller-supplied duration and return it as a float.

    Durations must be positive and a whole number of half hours. With
    ``bounded`` they must also fall within the bookable 1-6 hour range.
    Invalid values are rejected, never clamped.
    """
    try:
        value = float(hours)
    except (TypeError, ValueError):
        raise InvalidDurationError(f"Duration must be a number of hours, got {hours!r}") from None

    if not math.isfinite(value):
        raise InvalidDurationError(f"Duration must be a finite number of hours, got {hours!r}")
    if value <= 0:
        raise InvalidDurationError(f"Duration must be greater than 0 hours, got {format_hours(value)}")
    if value * 2 != int(value * 2):
        raise InvalidDurationError(
            f"Duration must be a multiple of {format_hours(DURATION_STEP_HOURS)} hours, "
            f"got {format_hours(value)}"
        )
    if bounded and value < MIN_DURATION_HOURS:
        raise InvalidDurationError(
            f"Appointment duration must be at least {format_hours(MIN_DURATION_HOURS)} hour"
        )
    if bounded and value > MAX_DURATION_HOURS:
        raise InvalidDurationError(
            f"Appointment duration cannot exceed {format_hours(MAX_DURATION_HOURS)} hours"
        )
    return value


def validate_candidate(start_time: datetime, duration_hours: float) -> CandidateInterval:
    """Validate a proposed booking span and return it as a CandidateInterval.

    Raises:
        InvalidDurationError: If the duration is outside the bookable range.
        InvalidIntervalError: If the start is off the half-hour grid or the
            span would run past 23:59:59.999 UTC of the start's day.
    """
    duration = validate_duration(duration_hours)
    start = ensure_utc(start_time)
    if not is_grid_aligned(start):
        raise InvalidIntervalError(
            f"Start time {start.isoformat()} is not on a {SLOT_MINUTES}-minute boundary"
        )

    end = start + timedelta(hours=duration)
    if end > end_of_day(start.date()):
        raise InvalidIntervalError(
            f"Selected duration ({format_hours(duration)}h) would extend past midnight. "
            "Please select an earlier time or shorter duration."
        )
    return CandidateInterval(start_time=start, end_time=end, duration_hours=duration)
