"""Cost estimate models. Money values are Decimals so block sums stay exact."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class TierBlock(BaseModel):
    """A maximal contiguous run of same-tier half-hour increments."""

    tier_name: str
    multiplier: Decimal
    hours: Decimal
    cost: Decimal
    start_time: datetime
    end_time: datetime


class FirstHourCompBlock(BaseModel):
    """The share of one tier block covered by the first-hour comp."""

    tier_name: str
    multiplier: Decimal
    hours: Decimal
    discount: Decimal


class CostBreakdown(BaseModel):
    """Price estimate for a start/end span."""

    base_hourly_rate: Decimal
    total_hours: Decimal
    breakdown: list[TierBlock] = Field(default_factory=list)
    subtotal: Decimal
    first_hour_discount: Optional[Decimal] = None
    first_hour_comp_breakdown: Optional[list[FirstHourCompBlock]] = None
    total: Decimal
    hourly: Decimal
    is_first_time_client: bool = False
