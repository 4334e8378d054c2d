from availability_engine.scheduling.conflicts import check_blocked, find_conflicts
from availability_engine.scheduling.intervals import (
    DURATION_CHOICES,
    validate_candidate,
    validate_duration,
)
from availability_engine.scheduling.pricing import estimate_cost
from availability_engine.scheduling.rate_tiers import resolve_tier, summarize_rate_info
from availability_engine.scheduling.schedule import build_day_schedule
from availability_engine.scheduling.suggester import suggest_slot
from availability_engine.scheduling.time_grid import generate_time_grid

__all__ = [
    "DURATION_CHOICES",
    "build_day_schedule",
    "check_blocked",
    "estimate_cost",
    "find_conflicts",
    "generate_time_grid",
    "resolve_tier",
    "suggest_slot",
    "summarize_rate_info",
    "validate_candidate",
    "validate_duration",
]
