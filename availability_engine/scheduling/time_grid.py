"""
Half-hour time grid for a calendar day.

The grid is the engine's only quantum: tier blocks, cost increments and
suggestion candidates all sit on these 30-minute boundaries.
"""

from datetime import date, datetime, timedelta
from typing import Iterator

from availability_engine.utils import ensure_utc, start_of_day

SLOT_MINUTES = 30
SLOTS_PER_DAY = (24 * 60) // SLOT_MINUTES
SLOT_DELTA = timedelta(minutes=SLOT_MINUTES)


def generate_time_grid(day: date) -> list[datetime]:
    """Return the 48 UTC slot instants of ``day``, 00:00 through 23:30."""
    if isinstance(day, datetime):
        day = ensure_utc(day).date()
    midnight = start_of_day(day)
    return [midnight + i * SLOT_DELTA for i in range(SLOTS_PER_DAY)]


def is_grid_aligned(instant: datetime) -> bool:
    """True if ``instant`` falls exactly on a half-hour boundary."""
    utc = ensure_utc(instant)
    return utc.minute % SLOT_MINUTES == 0 and utc.second == 0 and utc.microsecond == 0


def iter_increments(start: datetime, end: datetime) -> Iterator[datetime]:
    """Yield the start of each half-hour increment in ``[start, end)``."""
    current = ensure_utc(start)
    end = ensure_utc(end)
    while current < end:
        yield current
        current += SLOT_DELTA
