"""
Tier-weighted cost estimation.

The span is walked in half-hour increments. Each increment is priced at
``base_rate * multiplier / 2`` using the tier resolved at its start, and
contiguous increments with the same tier name and multiplier are grouped
into tier blocks for display. First-time clients get the first hour of
wall-clock time comped at whatever tier mix that hour actually has.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence, Union

from availability_engine.exceptions import InvalidIntervalError
from availability_engine.schemas.pricing_schema import (
    CostBreakdown,
    FirstHourCompBlock,
    TierBlock,
)
from availability_engine.schemas.rate_tier_schema import RateTier
from availability_engine.scheduling.rate_tiers import resolve_tier
from availability_engine.scheduling.time_grid import (
    SLOT_DELTA,
    SLOT_MINUTES,
    is_grid_aligned,
    iter_increments,
)
from availability_engine.utils import ensure_utc

logger = logging.getLogger(__name__)

FALLBACK_TIER_NAME = "Standard"
FALLBACK_MULTIPLIER = Decimal("1.0")
FIRST_HOUR_COMP_HOURS = Decimal("1")
HALF = Decimal("0.5")
CENTS = Decimal("0.01")

Money = Union[Decimal, float, int, str]


def _to_decimal(value: Money) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as Decimal("0.1") rather than its binary expansion
    return Decimal(str(value))


def _check_span(start: datetime, end: datetime) -> None:
    if end <= start:
        raise InvalidIntervalError(
            f"End time {end.isoformat()} must be after start time {start.isoformat()}"
        )
    if not is_grid_aligned(start):
        raise InvalidIntervalError(
            f"Start time {start.isoformat()} is not on a {SLOT_MINUTES}-minute boundary"
        )
    if (end - start) % SLOT_DELTA:
        raise InvalidIntervalError(
            f"Span {start.isoformat()} - {end.isoformat()} is not a whole number "
            f"of {SLOT_MINUTES}-minute increments"
        )


def _group_tier_blocks(
    start: datetime, end: datetime, tiers: Sequence[RateTier], rate: Decimal
) -> tuple[list[TierBlock], Decimal]:
    blocks: list[TierBlock] = []
    subtotal = Decimal("0")
    current: Optional[dict] = None

    def close(block: dict) -> TierBlock:
        hours = block["count"] * HALF
        return TierBlock(
            tier_name=block["tier_name"],
            multiplier=block["multiplier"],
            hours=hours,
            cost=hours * rate * block["multiplier"],
            start_time=block["start_time"],
            end_time=block["start_time"] + block["count"] * SLOT_DELTA,
        )

    for instant in iter_increments(start, end):
        tier = resolve_tier(instant, tiers)
        tier_name = tier.tier_name if tier else FALLBACK_TIER_NAME
        multiplier = tier.rate_multiplier if tier else FALLBACK_MULTIPLIER
        subtotal += rate * multiplier / 2

        if current and current["tier_name"] == tier_name and current["multiplier"] == multiplier:
            current["count"] += 1
            continue
        if current:
            blocks.append(close(current))
        current = {
            "tier_name": tier_name,
            "multiplier": multiplier,
            "count": 1,
            "start_time": instant,
        }

    if current:
        blocks.append(close(current))
    return blocks, subtotal


def _first_hour_comp(
    blocks: Sequence[TierBlock], rate: Decimal
) -> tuple[list[FirstHourCompBlock], Decimal]:
    comp: list[FirstHourCompBlock] = []
    discount = Decimal("0")
    accounted = Decimal("0")

    for block in blocks:
        if accounted >= FIRST_HOUR_COMP_HOURS:
            break
        hours = min(block.hours, FIRST_HOUR_COMP_HOURS - accounted)
        block_discount = hours * rate * block.multiplier
        comp.append(
            FirstHourCompBlock(
                tier_name=block.tier_name,
                multiplier=block.multiplier,
                hours=hours,
                discount=block_discount,
            )
        )
        discount += block_discount
        accounted += hours

    return comp, discount


def estimate_cost(
    start_time: datetime,
    end_time: datetime,
    tiers: Sequence[RateTier],
    base_hourly_rate: Money,
    is_first_time_client: bool = False,
) -> CostBreakdown:
    """Price ``[start_time, end_time)`` against the tier table.

    Increments with no matching tier are priced as Standard (1.0x). The
    first-hour comp only applies to spans of at least one hour, and the
    total never goes below zero.

    Raises:
        InvalidIntervalError: If the span is empty, inverted, or not aligned
            to the half-hour grid.
        ValueError: If ``base_hourly_rate`` is negative.
    """
    start = ensure_utc(start_time)
    end = ensure_utc(end_time)
    _check_span(start, end)

    rate = _to_decimal(base_hourly_rate)
    if rate < 0:
        raise ValueError(f"base_hourly_rate must be >= 0, got {rate}")

    total_hours = Decimal((end - start) // SLOT_DELTA) * HALF
    blocks, subtotal = _group_tier_blocks(start, end, tiers, rate)

    comp: list[FirstHourCompBlock] = []
    discount = Decimal("0")
    if is_first_time_client and total_hours >= FIRST_HOUR_COMP_HOURS:
        comp, discount = _first_hour_comp(blocks, rate)

    total = max(Decimal("0"), subtotal - discount)

    logger.debug(
        "Estimated %s - %s: %d tier block(s), subtotal %s, discount %s, total %s",
        start.isoformat(), end.isoformat(), len(blocks), subtotal, discount, total,
    )

    return CostBreakdown(
        base_hourly_rate=rate,
        total_hours=total_hours,
        breakdown=blocks,
        subtotal=subtotal,
        first_hour_discount=discount if discount > 0 else None,
        first_hour_comp_breakdown=comp if discount > 0 else None,
        total=total,
        hourly=(subtotal / total_hours).quantize(CENTS),
        is_first_time_client=is_first_time_client,
    )
