"""Tests for tier/booking models and the JSON loaders."""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from availability_engine.default_tiers import default_rate_tiers, default_tier_rows
from availability_engine.exceptions import RateTierConfigError
from availability_engine.loaders import (
    load_bookings,
    load_bookings_file,
    load_rate_tiers,
    load_rate_tiers_file,
)
from availability_engine.scheduling.rate_tiers import resolve_tier
from availability_engine.scheduling.time_grid import generate_time_grid
from availability_engine.schemas.booking_schema import Booking
from availability_engine.schemas.rate_tier_schema import RateTier, TierPreference


def _row(**overrides):
    row = {
        "id": 7,
        "tierName": "Premium",
        "tierLevel": 2,
        "dayOfWeek": 1,
        "timeStart": "17:00:00",
        "timeEnd": "22:00:00",
        "rateMultiplier": 1.25,
        "colorCode": "#ffc107",
    }
    row.update(overrides)
    return row


class TestRateTierModel:
    def test_camel_case_row(self):
        tier = RateTier.model_validate(_row())
        assert tier.id == "7"
        assert tier.tier_name == "Premium"
        assert tier.rate_multiplier == Decimal("1.25")

    def test_snake_case_row(self):
        tier = RateTier(
            tier_name="Standard", tier_level=1, day_of_week=2,
            time_start="08:00", time_end="17:00", rate_multiplier="1.0",
        )
        assert tier.time_start == "08:00:00"
        assert tier.start_seconds == 8 * 3600

    def test_float_multiplier_kept_exact(self):
        assert RateTier.model_validate(_row(rateMultiplier=1.1)).rate_multiplier == Decimal("1.1")

    def test_midnight_end_is_end_of_day(self):
        tier = RateTier.model_validate(_row(timeStart="22:00:00", timeEnd="00:00:00"))
        assert tier.end_seconds == 24 * 3600
        assert tier.contains(1, 23 * 3600 + 30 * 60)

    def test_matches_preference(self):
        tier = RateTier.model_validate(_row())
        assert tier.matches_preference(TierPreference.PREMIUM)
        assert tier.matches_preference(TierPreference.ANY)
        assert not tier.matches_preference(TierPreference.STANDARD)

    def test_custom_name_matches_by_level(self):
        tier = RateTier.model_validate(_row(tierName="Business Hours", tierLevel=1))
        assert tier.matches_preference(TierPreference.STANDARD)
        assert not tier.matches_preference(TierPreference.PREMIUM)

    def test_preference_name_wins_over_level(self):
        tier = RateTier.model_validate(_row(tierName="premium", tierLevel=1))
        assert tier.matches_preference(TierPreference.PREMIUM)
        assert not tier.matches_preference(TierPreference.STANDARD)

    @pytest.mark.parametrize("overrides", [
        {"timeStart": "18:00:00", "timeEnd": "17:00:00"},
        {"timeStart": "22:00:00", "timeEnd": "06:00:00"},
        {"timeStart": "17:00:00", "timeEnd": "17:00:00"},
        {"timeStart": "5pm"},
        {"timeEnd": "25:00:00"},
        {"timeEnd": "17:00:30"},
        {"dayOfWeek": 7},
        {"tierLevel": 0},
        {"rateMultiplier": 0.5},
        {"colorCode": "yellow"},
    ])
    def test_invalid_rows_rejected(self, overrides):
        with pytest.raises(ValidationError):
            RateTier.model_validate(_row(**overrides))

    def test_window_seconds_rejected(self):
        with pytest.raises(ValidationError, match="whole minutes"):
            RateTier.model_validate(_row(timeEnd="17:00:30"))
        with pytest.raises(RateTierConfigError, match="whole minutes"):
            load_rate_tiers([_row(timeStart="08:00:15")])

    def test_frozen(self):
        tier = RateTier.model_validate(_row())
        with pytest.raises(ValidationError):
            tier.tier_level = 3


class TestBookingModel:
    def test_naive_times_are_utc(self):
        booking = Booking(start_time=datetime(2025, 3, 17, 10), end_time=datetime(2025, 3, 17, 11))
        assert booking.start_time.tzinfo == timezone.utc

    def test_aware_times_converted(self):
        pacific = timezone(timedelta(hours=-7))
        booking = Booking(
            start_time=datetime(2025, 3, 17, 10, tzinfo=pacific),
            end_time=datetime(2025, 3, 17, 11, tzinfo=pacific),
        )
        assert booking.start_time == datetime(2025, 3, 17, 17, tzinfo=timezone.utc)

    def test_end_must_follow_start(self):
        with pytest.raises(ValidationError, match="must be after"):
            Booking(start_time=datetime(2025, 3, 17, 11), end_time=datetime(2025, 3, 17, 10))

    def test_camel_case_fields(self):
        booking = Booking.model_validate({
            "resourceId": "r-1",
            "startTime": "2025-03-17T10:00:00Z",
            "endTime": "2025-03-17T11:00:00Z",
            "isOwnBooking": True,
        })
        assert booking.resource_id == "r-1"
        assert booking.is_own_booking


class TestLoadRateTiers:
    def test_loads_rows(self):
        tiers = load_rate_tiers([_row(), _row(id=8, dayOfWeek=2)])
        assert [t.day_of_week for t in tiers] == [1, 2]

    def test_inactive_rows_skipped(self):
        tiers = load_rate_tiers([_row(), _row(id=8, isActive=False), _row(id=9, is_active=True)])
        assert [t.id for t in tiers] == ["7", "9"]

    def test_bad_row_fails_fast(self):
        with pytest.raises(RateTierConfigError, match="row 1"):
            load_rate_tiers([_row(), _row(timeStart="23:00:00", timeEnd="01:00:00")])

    def test_non_object_row(self):
        with pytest.raises(RateTierConfigError, match="not an object"):
            load_rate_tiers(["Premium"])

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "tiers.json"
        path.write_text(json.dumps({"success": True, "data": [_row()]}), encoding="utf-8")
        assert len(load_rate_tiers_file(path)) == 1

    def test_file_must_hold_list(self, tmp_path):
        path = tmp_path / "tiers.json"
        path.write_text(json.dumps({"tiers": []}), encoding="utf-8")
        with pytest.raises(ValueError, match="JSON list"):
            load_rate_tiers_file(path)


class TestLoadBookings:
    def test_load_rows(self):
        bookings = load_bookings([
            {"id": "b1", "startTime": "2025-03-17T10:00:00Z", "endTime": "2025-03-17T11:00:00Z"},
        ])
        assert bookings[0].id == "b1"

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "bookings.json"
        path.write_text(json.dumps([
            {"startTime": "2025-03-17T10:00:00", "endTime": "2025-03-17T11:00:00"},
        ]), encoding="utf-8")
        bookings = load_bookings_file(path)
        assert bookings[0].end_time.tzinfo == timezone.utc


class TestDefaultTiers:
    def test_row_count(self):
        assert len(default_tier_rows()) == 5 * 5 + 2 * 3

    def test_every_slot_resolves(self):
        tiers = default_rate_tiers()
        for day in range(16, 23):
            for slot in generate_time_grid(datetime(2025, 3, day, tzinfo=timezone.utc)):
                assert resolve_tier(slot, tiers) is not None, slot

    def test_weekend_has_no_standard_hours(self):
        weekend = [t for t in default_rate_tiers() if t.day_of_week in (0, 6)]
        assert {t.tier_name for t in weekend} == {"Premium", "Emergency"}
