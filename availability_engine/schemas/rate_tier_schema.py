"""Rate tier models.

Tier windows are UTC day-of-week plus a half-open ``[time_start, time_end)``
time-of-day range. A ``time_end`` of ``00:00:00`` means the end of the day.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from availability_engine.utils import SECONDS_PER_DAY, parse_time_of_day

MIDNIGHT = "00:00:00"


class TierPreference(str, Enum):
    """Caller's tier constraint for slot suggestion."""

    ANY = "any"
    STANDARD = "standard"
    PREMIUM = "premium"
    EMERGENCY = "emergency"


# Level each named preference maps to, for tiers with custom names
PREFERENCE_LEVELS = {
    TierPreference.STANDARD: 1,
    TierPreference.PREMIUM: 2,
    TierPreference.EMERGENCY: 3,
}


def _normalize_time(value: str) -> str:
    # instants are resolved at minute precision, so windows must be too
    seconds = parse_time_of_day(value)
    if seconds % 60:
        raise ValueError(f"Tier times must be whole minutes, got {value!r}")
    hours, rem = divmod(seconds, 3600)
    return f"{hours:02d}:{rem // 60:02d}:00"


class RateTier(BaseModel):
    """A named pricing rule bound to a weekday and a time-of-day window."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    tier_name: str = Field(min_length=1)
    tier_level: int = Field(ge=1)
    day_of_week: int = Field(ge=0, le=6)
    time_start: str
    time_end: str
    rate_multiplier: Decimal = Field(ge=Decimal("1.0"))
    color_code: str = Field(default="#28a745", pattern=r"^#[0-9a-fA-F]{6}$")
    description: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        if value is None:
            return None
        return str(value)

    @field_validator("rate_multiplier", mode="before")
    @classmethod
    def _multiplier_from_float(cls, value: Any) -> Any:
        # floats go through str() so 1.1 stays Decimal("1.1")
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    @field_validator("time_start", "time_end")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return _normalize_time(value)

    @model_validator(mode="after")
    def _check_window(self) -> "RateTier":
        if self.start_seconds >= SECONDS_PER_DAY:
            raise ValueError(f"time_start {self.time_start} must be before 24:00:00")
        if self.start_seconds >= self.end_seconds:
            raise ValueError(
                f"time_start {self.time_start} must be before time_end {self.time_end}; "
                "split windows that cross midnight into two rows"
            )
        return self

    @property
    def start_seconds(self) -> int:
        return parse_time_of_day(self.time_start)

    @property
    def end_seconds(self) -> int:
        if self.time_end == MIDNIGHT:
            return SECONDS_PER_DAY
        return parse_time_of_day(self.time_end)

    def contains(self, day_of_week: int, seconds: int) -> bool:
        """True if the UTC weekday/time-of-day falls inside this tier's window."""
        return (
            self.day_of_week == day_of_week
            and self.start_seconds <= seconds < self.end_seconds
        )

    def matches_preference(self, preference: TierPreference) -> bool:
        """Match by name when the tier uses a preference name, otherwise by level.

        A tier named "Premium" only satisfies ``premium`` whatever its level;
        a tier named "Business Hours" at level 1 satisfies ``standard``.
        """
        if preference == TierPreference.ANY:
            return True
        name = self.tier_name.strip().lower()
        if name in {p.value for p in PREFERENCE_LEVELS}:
            return name == preference.value
        return self.tier_level == PREFERENCE_LEVELS[preference]
