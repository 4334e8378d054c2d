"""Shared test fixtures and helpers."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest

from availability_engine.default_tiers import default_rate_tiers
from availability_engine.schemas.booking_schema import Booking
from availability_engine.schemas.rate_tier_schema import RateTier

# 2025-03-16 is a Sunday, so 2025-03-17 is Monday (day_of_week 1).
MONDAY = (2025, 3, 17)
TUESDAY = (2025, 3, 18)
FRIDAY = (2025, 3, 21)


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def monday(hour: int, minute: int = 0) -> datetime:
    return utc(*MONDAY, hour, minute)


def tuesday(hour: int, minute: int = 0) -> datetime:
    return utc(*TUESDAY, hour, minute)


def make_tier(
    tier_name: str = "Standard",
    tier_level: int = 1,
    day_of_week: int = 1,
    time_start: str = "08:00:00",
    time_end: str = "17:00:00",
    rate_multiplier: str = "1.00",
    id: Optional[str] = None,
) -> RateTier:
    """Helper to create a RateTier with sensible defaults (Monday standard hours)."""
    return RateTier(
        id=id,
        tier_name=tier_name,
        tier_level=tier_level,
        day_of_week=day_of_week,
        time_start=time_start,
        time_end=time_end,
        rate_multiplier=Decimal(rate_multiplier),
    )


def make_booking(
    start_time: datetime,
    end_time: datetime,
    id: Optional[str] = None,
    is_own_booking: bool = False,
) -> Booking:
    return Booking(
        id=id,
        start_time=start_time,
        end_time=end_time,
        is_own_booking=is_own_booking,
        client_name="Test Client",
        service_type="On-site support",
    )


@pytest.fixture
def default_tiers() -> list[RateTier]:
    return default_rate_tiers()


@pytest.fixture
def mixed_tiers() -> list[RateTier]:
    """Monday standard hours with a premium lunch hour layered on top."""
    return [
        make_tier("Standard", 1, 1, "08:00:00", "17:00:00", "1.00", id="std-mon"),
        make_tier("Premium", 2, 1, "12:00:00", "13:00:00", "1.50", id="prem-mon"),
    ]


@pytest.fixture
def morning_booking() -> Booking:
    return make_booking(monday(10), monday(11), id="bk-10")


@pytest.fixture
def three_bookings() -> list[Booking]:
    return [
        make_booking(monday(8), monday(10), id="bk-1"),
        make_booking(monday(13), monday(14), id="bk-2"),
        make_booking(monday(19), monday(20), id="bk-3"),
    ]
