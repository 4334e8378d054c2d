"""
Rate tier resolution.

Tiers are matched on the instant's UTC weekday and UTC time of day,
never on the caller's local clock. Display formatting happens later,
outside the engine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from availability_engine.schemas.rate_tier_schema import RateTier
from availability_engine.scheduling.time_grid import iter_increments
from availability_engine.utils import day_of_week, seconds_of_day


def _priority_key(entry: tuple[int, RateTier]) -> tuple:
    # Highest level first; equal levels fall back to id, then table order.
    index, tier = entry
    return (-tier.tier_level, tier.id is None, tier.id or "", index)


def resolve_tier(instant: datetime, tiers: Sequence[RateTier]) -> Optional[RateTier]:
    """Return the highest-priority tier covering ``instant``, or None.

    When several windows overlap, the highest ``tier_level`` wins. No
    default tier is invented for uncovered times.
    """
    weekday = day_of_week(instant)
    seconds = seconds_of_day(instant)

    matching = [
        (index, tier) for index, tier in enumerate(tiers) if tier.contains(weekday, seconds)
    ]
    if not matching:
        return None
    return min(matching, key=_priority_key)[1]


@dataclass(frozen=True)
class RateSummary:
    """Which tiers a span touches. Drives the "includes emergency hours" banner."""

    highest_tier: Optional[RateTier] = None
    max_multiplier: Decimal = Decimal("1.0")
    tier_names: list[str] = field(default_factory=list)

    @property
    def tier_name(self) -> str:
        return self.highest_tier.tier_name if self.highest_tier else "Standard"


def summarize_rate_info(
    start_time: datetime, end_time: datetime, tiers: Sequence[RateTier]
) -> RateSummary:
    """Summarize the tiers touched by each half-hour increment of a span."""
    highest: Optional[RateTier] = None
    max_multiplier = Decimal("1.0")
    names: list[str] = []

    for instant in iter_increments(start_time, end_time):
        tier = resolve_tier(instant, tiers)
        if tier is None:
            continue
        max_multiplier = max(max_multiplier, tier.rate_multiplier)
        if tier.tier_name not in names:
            names.append(tier.tier_name)
        if highest is None or tier.tier_level > highest.tier_level:
            highest = tier

    return RateSummary(highest_tier=highest, max_multiplier=max_multiplier, tier_names=names)


def tiers_for_day(tiers: Iterable[RateTier], weekday: int) -> list[RateTier]:
    """Tiers defined for a weekday, ordered by level (desc) then start time."""
    return sorted(
        (t for t in tiers if t.day_of_week == weekday),
        key=lambda t: (-t.tier_level, t.start_seconds),
    )
