"""
Auto-suggest the earliest bookable slot.

Days are scanned forward from the base date, and each day's half-hour
grid is scanned in order. A candidate ``[slot, slot + duration)`` is
accepted only if it:

- starts at or after ``now + min_lead_hours``
- ends on the same UTC calendar day
- is not blocked by any booking or buffer
- has every increment in the preferred tier (unless the preference is "any")

The search stops after ``search_horizon_days`` days, so it always
terminates. Running out of days yields ``found=False``, not an error.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Sequence, Union

from availability_engine.config import settings
from availability_engine.schemas.booking_schema import Booking
from availability_engine.schemas.rate_tier_schema import RateTier, TierPreference
from availability_engine.schemas.slot_schema import SuggestionResult
from availability_engine.scheduling.conflicts import check_blocked
from availability_engine.scheduling.intervals import validate_duration
from availability_engine.scheduling.rate_tiers import resolve_tier
from availability_engine.scheduling.time_grid import generate_time_grid, iter_increments
from availability_engine.utils import end_of_day, ensure_utc, format_hhmm, format_hours, utc_now

logger = logging.getLogger(__name__)


def _matches_preference(
    start: datetime, end: datetime, tiers: Sequence[RateTier], preference: TierPreference
) -> bool:
    if preference == TierPreference.ANY:
        return True
    for instant in iter_increments(start, end):
        tier = resolve_tier(instant, tiers)
        if tier is None or not tier.matches_preference(preference):
            return False
    return True


def _not_found_message(
    duration: float, preference: TierPreference, horizon_days: int
) -> str:
    if preference == TierPreference.ANY:
        head = f"No available {format_hours(duration)}-hour time slots"
    else:
        head = f"No available {preference.value} rate {format_hours(duration)}-hour time slots"
    return (
        f"{head} found within the next {horizon_days} days. "
        "Please try a different duration or rate preference."
    )


def suggest_slot(
    base_date: Optional[Union[date, datetime]] = None,
    duration_hours: float = 1.0,
    tier_preference: Union[TierPreference, str] = TierPreference.ANY,
    bookings: Sequence[Booking] = (),
    tiers: Sequence[RateTier] = (),
    min_lead_hours: Optional[float] = None,
    search_horizon_days: Optional[int] = None,
    *,
    days_from_now: int = 0,
    now: Optional[datetime] = None,
    buffer_before_hours: Optional[float] = None,
    buffer_after_hours: Optional[float] = None,
) -> SuggestionResult:
    """Find the first interval satisfying lead time, day boundary, conflicts and tier.

    Args:
        base_date: First UTC calendar day to search. Defaults to today (UTC).
        duration_hours: Requested length, 1-6 hours in half-hour steps.
        tier_preference: "any", "standard", "premium" or "emergency".
        bookings: Existing bookings to avoid, including their buffers.
        tiers: Rate tier table.
        min_lead_hours: Minimum hours between ``now`` and the slot start.
        search_horizon_days: Number of calendar days to scan.
        days_from_now: Extra offset added to ``base_date``.
        now: Reference instant. Defaults to the current UTC time.

    Raises:
        InvalidDurationError: If ``duration_hours`` is not bookable.
        ValueError: If ``tier_preference`` is not a known preference.
    """
    duration = validate_duration(duration_hours)
    preference = TierPreference(str(getattr(tier_preference, "value", tier_preference)).lower())
    if min_lead_hours is None:
        min_lead_hours = settings.scheduler.min_lead_hours
    if search_horizon_days is None:
        search_horizon_days = settings.scheduler.search_horizon_days
    if search_horizon_days < 1:
        raise ValueError(f"search_horizon_days must be >= 1, got {search_horizon_days}")

    now = ensure_utc(now) if now is not None else utc_now()
    earliest_start = now + timedelta(hours=min_lead_hours)
    if base_date is None:
        base_date = now.date()
    elif isinstance(base_date, datetime):
        base_date = ensure_utc(base_date).date()
    first_day = base_date + timedelta(days=days_from_now)
    span = timedelta(hours=duration)

    logger.info(
        "Suggesting %sh slot from %s (preference=%s, horizon=%d days)",
        format_hours(duration), first_day.isoformat(), preference.value, search_horizon_days,
    )

    for offset in range(search_horizon_days):
        day = first_day + timedelta(days=offset)
        day_end = end_of_day(day)
        if day_end < earliest_start:
            continue

        for slot_start in generate_time_grid(day):
            slot_end = slot_start + span
            if slot_end > day_end:
                break
            if slot_start < earliest_start:
                continue

            check = check_blocked(
                slot_start,
                duration,
                bookings,
                buffer_before_hours,
                buffer_after_hours,
            )
            if check.blocked:
                logger.debug("Rejected %s: %s", slot_start.isoformat(), check.reason)
                continue

            if not _matches_preference(slot_start, slot_end, tiers, preference):
                logger.debug("Rejected %s: not all %s rate", slot_start.isoformat(), preference.value)
                continue

            tier = resolve_tier(slot_start, tiers)
            logger.info("Suggested slot %s - %s", slot_start.isoformat(), slot_end.isoformat())
            return SuggestionResult(
                found=True,
                start_time=slot_start,
                end_time=slot_end,
                duration_hours=duration,
                tier_preference=preference,
                rate_tier=tier,
                message=(
                    f"Suggested {format_hours(duration)}-hour slot on {day.isoformat()} "
                    f"at {format_hhmm(slot_start)} UTC"
                ),
            )

    logger.info("No slot found within %d days of %s", search_horizon_days, first_day.isoformat())
    return SuggestionResult(
        found=False,
        duration_hours=duration,
        tier_preference=preference,
        message=_not_found_message(duration, preference, search_horizon_days),
    )
