"""Booking and conflict-check data models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from availability_engine.utils import ensure_utc


class Booking(BaseModel):
    """An existing reservation supplied by the booking store. Read-only here."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    resource_id: Optional[str] = None
    start_time: datetime
    end_time: datetime
    is_own_booking: bool = False
    client_name: Optional[str] = None
    service_type: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_order(self) -> "Booking":
        if self.end_time <= self.start_time:
            raise ValueError(
                f"Booking end {self.end_time.isoformat()} must be after "
                f"start {self.start_time.isoformat()}"
            )
        return self


class CandidateInterval(BaseModel):
    """A validated caller-proposed span."""

    model_config = ConfigDict(frozen=True)

    start_time: datetime
    end_time: datetime
    duration_hours: float


class BlockRule(str, Enum):
    OVERLAP = "overlap"
    BUFFER_AFTER = "buffer_after"
    BUFFER_BEFORE = "buffer_before"


class BlockCheck(BaseModel):
    """Result of checking one candidate interval against existing bookings."""

    model_config = ConfigDict(frozen=True)

    blocked: bool
    reason: Optional[str] = None
    rule: Optional[BlockRule] = None
    booking_id: Optional[str] = None
