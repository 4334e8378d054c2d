"""Tests for configuration loading and validation."""

from dataclasses import replace

import pytest

from availability_engine.config import (
    AppConfig,
    PricingConfig,
    SchedulerConfig,
    _safe_bool,
    _safe_float,
    _safe_int,
    _validate_config,
)


def _with_scheduler(**changes) -> AppConfig:
    return replace(AppConfig(), scheduler=replace(SchedulerConfig(), **changes))


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = AppConfig()
        _validate_config(config)  # should not raise

    def test_negative_buffer(self):
        with pytest.raises(ValueError, match="SCHEDULER_BUFFER_BEFORE_HOURS"):
            _validate_config(_with_scheduler(buffer_before_hours=-1))

    def test_buffer_too_large(self):
        with pytest.raises(ValueError, match="SCHEDULER_BUFFER_AFTER_HOURS"):
            _validate_config(_with_scheduler(buffer_after_hours=48))

    def test_zero_buffers_allowed(self):
        _validate_config(_with_scheduler(buffer_before_hours=0, buffer_after_hours=0))

    def test_negative_lead_time(self):
        with pytest.raises(ValueError, match="SCHEDULER_MINIMUM_ADVANCE_HOURS"):
            _validate_config(_with_scheduler(min_lead_hours=-0.5))

    @pytest.mark.parametrize("days", [0, 400])
    def test_horizon_out_of_range(self, days):
        with pytest.raises(ValueError, match="SCHEDULER_SEARCH_HORIZON_DAYS"):
            _validate_config(_with_scheduler(search_horizon_days=days))

    def test_non_positive_rate(self):
        config = replace(AppConfig(), pricing=replace(PricingConfig(), base_hourly_rate=0))
        with pytest.raises(ValueError, match="BASE_HOURLY_RATE"):
            _validate_config(config)


class TestEnvParsing:
    def test_safe_int_parsing(self):
        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_float_parsing(self):
        assert _safe_float("NONEXISTENT_VAR_12345", "3.14") == pytest.approx(3.14)

    def test_safe_int_reports_variable(self, monkeypatch):
        monkeypatch.setenv("SCHEDULER_SEARCH_HORIZON_DAYS", "thirty")
        with pytest.raises(ValueError, match="SCHEDULER_SEARCH_HORIZON_DAYS"):
            _safe_int("SCHEDULER_SEARCH_HORIZON_DAYS", "30")

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("1", True), ("Yes", True), ("off", False), ("0", False),
    ])
    def test_safe_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("SCHEDULER_WAIVE_OWN_BUFFERS", raw)
        assert _safe_bool("SCHEDULER_WAIVE_OWN_BUFFERS", "false") is expected

    def test_safe_bool_rejects_garbage(self, monkeypatch):
        monkeypatch.setenv("SCHEDULER_WAIVE_OWN_BUFFERS", "sometimes")
        with pytest.raises(ValueError, match="Invalid boolean"):
            _safe_bool("SCHEDULER_WAIVE_OWN_BUFFERS", "false")
