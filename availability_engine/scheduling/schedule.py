"""
Day-view pipeline: grid -> tier annotation -> lead-time flag -> conflict flag.

Produces the annotated slot list a booking UI renders for one date and
one selected duration.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from availability_engine.config import settings
from availability_engine.schemas.booking_schema import Booking
from availability_engine.schemas.rate_tier_schema import RateTier
from availability_engine.schemas.slot_schema import TimeSlot
from availability_engine.scheduling.conflicts import check_blocked, find_conflicts
from availability_engine.scheduling.intervals import validate_duration
from availability_engine.scheduling.rate_tiers import resolve_tier
from availability_engine.scheduling.time_grid import SLOT_DELTA, generate_time_grid
from availability_engine.utils import end_of_day, ensure_utc, format_hhmm, format_hours, utc_now

logger = logging.getLogger(__name__)


def build_day_schedule(
    day: date,
    duration_hours: float,
    bookings: Sequence[Booking],
    tiers: Sequence[RateTier],
    *,
    now: Optional[datetime] = None,
    min_lead_hours: Optional[float] = None,
    buffer_before_hours: Optional[float] = None,
    buffer_after_hours: Optional[float] = None,
) -> list[TimeSlot]:
    """Annotate every half-hour slot of ``day`` for a booking of ``duration_hours``.

    ``is_blocked`` describes whether an appointment of the selected
    duration may start at the slot; ``is_booked`` whether the slot itself
    is occupied by an existing booking.
    """
    duration = validate_duration(duration_hours)
    if min_lead_hours is None:
        min_lead_hours = settings.scheduler.min_lead_hours
    now = ensure_utc(now) if now is not None else utc_now()
    earliest_start = now + timedelta(hours=min_lead_hours)

    if isinstance(day, datetime):
        day = ensure_utc(day).date()
    day_end = end_of_day(day)
    span = timedelta(hours=duration)

    slots: list[TimeSlot] = []
    for slot_start in generate_time_grid(day):
        is_booked = bool(find_conflicts(slot_start, slot_start + SLOT_DELTA, bookings))

        if slot_start + span > day_end:
            blocked, reason = True, (
                f"Selected duration ({format_hours(duration)}h) would extend past midnight"
            )
        else:
            check = check_blocked(
                slot_start, duration, bookings, buffer_before_hours, buffer_after_hours
            )
            blocked, reason = check.blocked, check.reason

        slots.append(
            TimeSlot(
                hour=slot_start.hour,
                minute=slot_start.minute,
                start_time=slot_start,
                label=format_hhmm(slot_start),
                is_past=slot_start < earliest_start,
                resolved_tier=resolve_tier(slot_start, tiers),
                is_booked=is_booked,
                is_blocked=blocked,
                block_reason=reason,
            )
        )

    logger.debug(
        "Built schedule for %s: %d open of %d slots",
        day.isoformat(), sum(1 for s in slots if s.is_available), len(slots),
    )
    return slots
