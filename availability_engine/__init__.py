"""Appointment availability and pricing engine."""

from availability_engine.scheduling import (
    build_day_schedule,
    check_blocked,
    estimate_cost,
    resolve_tier,
    suggest_slot,
)

__all__ = [
    "build_day_schedule",
    "check_blocked",
    "estimate_cost",
    "resolve_tier",
    "suggest_slot",
]
