"""
Centralized configuration with environment variable overrides.

Buffer sizes, lead time, search horizon and pricing defaults are all
configurable here. Engine operations take these as explicit arguments
and fall back to ``settings`` only when the caller omits them.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from availability_engine.logging_context import build_log_handler

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class SchedulerConfig:
    """Conflict and search settings, mirrored from the admin scheduler settings."""

    buffer_before_hours: float = _safe_float("SCHEDULER_BUFFER_BEFORE_HOURS", "1")
    buffer_after_hours: float = _safe_float("SCHEDULER_BUFFER_AFTER_HOURS", "1")
    min_lead_hours: float = _safe_float("SCHEDULER_MINIMUM_ADVANCE_HOURS", "1")
    search_horizon_days: int = _safe_int("SCHEDULER_SEARCH_HORIZON_DAYS", "30")
    waive_own_booking_buffers: bool = _safe_bool("SCHEDULER_WAIVE_OWN_BUFFERS", "false")


@dataclass(frozen=True)
class PricingConfig:
    """Default billing inputs used when the billing collaborator supplies none."""

    base_hourly_rate: float = _safe_float("BASE_HOURLY_RATE", "75")
    currency: str = os.getenv("CURRENCY", "USD")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


MAX_BUFFER_HOURS = 24
MAX_SEARCH_HORIZON_DAYS = 366


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    for name, value in [
        ("SCHEDULER_BUFFER_BEFORE_HOURS", config.scheduler.buffer_before_hours),
        ("SCHEDULER_BUFFER_AFTER_HOURS", config.scheduler.buffer_after_hours),
    ]:
        if not 0 <= value <= MAX_BUFFER_HOURS:
            raise ValueError(
                f"{name} must be between 0 and {MAX_BUFFER_HOURS}, got {value}"
            )
    if config.scheduler.min_lead_hours < 0:
        raise ValueError(
            f"SCHEDULER_MINIMUM_ADVANCE_HOURS must be >= 0, got {config.scheduler.min_lead_hours}"
        )
    if not 1 <= config.scheduler.search_horizon_days <= MAX_SEARCH_HORIZON_DAYS:
        raise ValueError(
            f"SCHEDULER_SEARCH_HORIZON_DAYS must be between 1 and {MAX_SEARCH_HORIZON_DAYS}, "
            f"got {config.scheduler.search_horizon_days}"
        )
    if config.pricing.base_hourly_rate <= 0:
        raise ValueError(
            f"BASE_HOURLY_RATE must be > 0, got {config.pricing.base_hourly_rate}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[build_log_handler()],
    )
    logger.info(
        "Configuration loaded: buffers %sh/%sh, lead %sh, horizon %d days",
        config.scheduler.buffer_before_hours,
        config.scheduler.buffer_after_hours,
        config.scheduler.min_lead_hours,
        config.scheduler.search_horizon_days,
    )
    return config


# Singleton instance
settings = load_config()
