"""
Conflict checking against existing bookings.

Three rules, checked per booking, first match wins:

1. Direct overlap: ``start < booking.end and end > booking.start``.
2. Post-booking buffer: ``booking.end <= start < booking.end + buffer_after``.
3. Pre-booking buffer: ``booking.start - buffer_before < end <= booking.start``.

Intervals are half-open, so a booking ending exactly at the candidate's
start is not an overlap but does open the post-booking buffer.
"""

import math
from datetime import datetime, timedelta
from typing import Optional, Sequence

from availability_engine.config import settings
from availability_engine.exceptions import InvalidDurationError
from availability_engine.schemas.booking_schema import BlockCheck, BlockRule, Booking
from availability_engine.utils import ensure_utc, format_hhmm, format_hours

NOT_BLOCKED = BlockCheck(blocked=False)


def _hours_phrase(hours: float) -> str:
    return f"{format_hours(hours)} hour{'' if hours == 1 else 's'}"


def check_blocked(
    candidate_start: datetime,
    duration_hours: float,
    bookings: Sequence[Booking],
    buffer_before_hours: Optional[float] = None,
    buffer_after_hours: Optional[float] = None,
    *,
    waive_own_booking_buffers: Optional[bool] = None,
) -> BlockCheck:
    """Check whether ``[candidate_start, candidate_start + duration)`` is blocked.

    Buffers default to the configured scheduler settings. When
    ``waive_own_booking_buffers`` is set, the client's own bookings only
    block on direct overlap.

    Raises:
        InvalidDurationError: If ``duration_hours`` is not positive and finite.
    """
    if not math.isfinite(duration_hours) or duration_hours <= 0:
        raise InvalidDurationError(
            f"Duration must be a positive, finite number of hours, got {duration_hours!r}"
        )
    if buffer_before_hours is None:
        buffer_before_hours = settings.scheduler.buffer_before_hours
    if buffer_after_hours is None:
        buffer_after_hours = settings.scheduler.buffer_after_hours
    if waive_own_booking_buffers is None:
        waive_own_booking_buffers = settings.scheduler.waive_own_booking_buffers

    start = ensure_utc(candidate_start)
    end = start + timedelta(hours=duration_hours)
    before = timedelta(hours=buffer_before_hours)
    after = timedelta(hours=buffer_after_hours)

    for booking in bookings:
        if start < booking.end_time and end > booking.start_time:
            return BlockCheck(
                blocked=True,
                reason=(
                    f"Overlaps with existing appointment "
                    f"({format_hhmm(booking.start_time)} - {format_hhmm(booking.end_time)})"
                ),
                rule=BlockRule.OVERLAP,
                booking_id=booking.id,
            )

        if waive_own_booking_buffers and booking.is_own_booking:
            continue

        if booking.end_time <= start < booking.end_time + after:
            return BlockCheck(
                blocked=True,
                reason=(
                    f"Must wait {_hours_phrase(buffer_after_hours)} after appointment "
                    f"ending at {format_hhmm(booking.end_time)}"
                ),
                rule=BlockRule.BUFFER_AFTER,
                booking_id=booking.id,
            )

        if booking.start_time - before < end <= booking.start_time:
            return BlockCheck(
                blocked=True,
                reason=(
                    f"Must end {_hours_phrase(buffer_before_hours)} before appointment "
                    f"starting at {format_hhmm(booking.start_time)}"
                ),
                rule=BlockRule.BUFFER_BEFORE,
                booking_id=booking.id,
            )

    return NOT_BLOCKED


def find_conflicts(
    start_time: datetime, end_time: datetime, bookings: Sequence[Booking]
) -> list[Booking]:
    """Return bookings that directly overlap ``[start_time, end_time)``.

    Exact boundary touches (end == start) are not conflicts.
    """
    start = ensure_utc(start_time)
    end = ensure_utc(end_time)
    return [b for b in bookings if start < b.end_time and b.start_time < end]
