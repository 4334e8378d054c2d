"""Day-grid slot and suggestion result models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from availability_engine.schemas.rate_tier_schema import RateTier, TierPreference


class TimeSlot(BaseModel):
    """One half-hour cell of a day's schedule. Recomputed on every query."""

    hour: int
    minute: int
    start_time: datetime
    label: str
    is_past: bool = False
    resolved_tier: Optional[RateTier] = None
    is_booked: bool = False
    is_blocked: bool = False
    block_reason: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return not self.is_past and not self.is_blocked


class SuggestionResult(BaseModel):
    """Outcome of an auto-suggest search. ``found=False`` is a valid answer, not an error."""

    found: bool
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_hours: float
    tier_preference: TierPreference = TierPreference.ANY
    rate_tier: Optional[RateTier] = None
    message: str = ""
