"""
Offline console demo: day schedule, auto-suggest and cost estimate.

Runs the engine against the stock tier table (or JSON files) with no
booking store or network. All times shown are UTC.

Usage:
    python console_demo.py
    python console_demo.py --date 2025-03-17 --duration 2 --tier standard
    python console_demo.py --tiers tiers.json --bookings bookings.json --first-time
"""

import argparse
import sys
from datetime import date, datetime
from typing import Optional, Sequence

from availability_engine.config import settings
from availability_engine.default_tiers import DAY_NAMES, default_rate_tiers
from availability_engine.exceptions import SchedulingError
from availability_engine.loaders import load_bookings_file, load_rate_tiers_file
from availability_engine.logging_context import new_session_id, scheduling_session
from availability_engine.schemas.booking_schema import Booking
from availability_engine.schemas.pricing_schema import CostBreakdown
from availability_engine.schemas.rate_tier_schema import RateTier, TierPreference
from availability_engine.scheduling import (
    build_day_schedule,
    estimate_cost,
    suggest_slot,
    summarize_rate_info,
)
from availability_engine.scheduling.rate_tiers import tiers_for_day
from availability_engine.utils import day_of_week, format_hhmm, format_hours, start_of_day, utc_now

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

_TIER_COLORS = {1: GREEN, 2: YELLOW, 3: RED}


class ConsoleDemo:
    """Renders one scheduling session in the terminal."""

    def __init__(
        self,
        tiers: Optional[Sequence[RateTier]] = None,
        bookings: Optional[Sequence[Booking]] = None,
        base_hourly_rate: Optional[float] = None,
        is_first_time_client: bool = False,
        now: Optional[datetime] = None,
    ) -> None:
        self.tiers = list(tiers) if tiers is not None else default_rate_tiers()
        self.bookings = list(bookings or [])
        self.base_hourly_rate = (
            base_hourly_rate if base_hourly_rate is not None else settings.pricing.base_hourly_rate
        )
        self.is_first_time_client = is_first_time_client
        self.now = now
        self.session_id = new_session_id()

    def print_schedule(self, day: date, duration_hours: float) -> None:
        slots = build_day_schedule(day, duration_hours, self.bookings, self.tiers, now=self.now)
        print(f"{BOLD}{DAY_NAMES[day_of_week(start_of_day(day))]} {day.isoformat()} "
              f"({format_hours(duration_hours)}h appointment){RESET}")
        for slot in slots:
            tier = slot.resolved_tier
            tier_text = f"{tier.tier_name} {tier.rate_multiplier}x" if tier else "-"
            color = _TIER_COLORS.get(tier.tier_level, "") if tier else ""
            if slot.is_past:
                status = f"{DIM}past{RESET}"
            elif slot.is_booked:
                status = f"{RED}booked{RESET}"
            elif slot.is_blocked:
                status = f"{DIM}{slot.block_reason}{RESET}"
            else:
                status = f"{GREEN}open{RESET}"
            print(f"  {slot.label}  {color}{tier_text:<16}{RESET} {status}")

    def print_legend(self, day: date) -> None:
        print(f"{BOLD}Rate tiers:{RESET}")
        for tier in tiers_for_day(self.tiers, day_of_week(start_of_day(day))):
            color = _TIER_COLORS.get(tier.tier_level, "")
            print(f"  {color}{tier.tier_name:<10}{RESET} {tier.time_start[:5]}-"
                  f"{tier.time_end[:5]}  {tier.rate_multiplier}x")

    def print_cost(self, cost: CostBreakdown) -> None:
        currency = settings.pricing.currency
        for block in cost.breakdown:
            print(f"  {block.tier_name:<10} {block.hours}h @ {block.multiplier}x  "
                  f"{currency} {block.cost:.2f}")
        print(f"  {'Subtotal':<26} {currency} {cost.subtotal:.2f}")
        if cost.first_hour_discount is not None:
            print(f"  {GREEN}{'First hour comp':<26} -{currency} "
                  f"{cost.first_hour_discount:.2f}{RESET}")
        print(f"  {BOLD}{'Total':<26} {currency} {cost.total:.2f}{RESET}")

    def run(self, day: date, duration_hours: float, preference: TierPreference) -> int:
        with scheduling_session(self.session_id):
            return self._run_session(day, duration_hours, preference)

    def _run_session(self, day: date, duration_hours: float, preference: TierPreference) -> int:
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  AVAILABILITY ENGINE - Console Demo ({self.session_id}){RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

        self.print_legend(day)
        print()
        self.print_schedule(day, duration_hours)
        print()

        result = suggest_slot(
            day, duration_hours, preference, self.bookings, self.tiers, now=self.now
        )
        if not result.found:
            print(f"{YELLOW}{result.message}{RESET}")
            return 1

        print(f"{GREEN}{result.message}{RESET}")
        summary = summarize_rate_info(result.start_time, result.end_time, self.tiers)
        print(f"{DIM}  {format_hhmm(result.start_time)} - {format_hhmm(result.end_time)} UTC, "
              f"highest tier {summary.tier_name} ({summary.max_multiplier}x){RESET}")

        cost = estimate_cost(
            result.start_time,
            result.end_time,
            self.tiers,
            self.base_hourly_rate,
            self.is_first_time_client,
        )
        self.print_cost(cost)
        return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline availability and pricing demo")
    parser.add_argument("--date", type=date.fromisoformat, default=None,
                        help="Day to show, YYYY-MM-DD (default: today, UTC)")
    parser.add_argument("--duration", type=float, default=2.0,
                        help="Appointment length in hours (1-6, half-hour steps)")
    parser.add_argument("--tier", choices=[p.value for p in TierPreference], default="any",
                        help="Rate tier preference for auto-suggest")
    parser.add_argument("--tiers", default=None, help="JSON file with the rate tier table")
    parser.add_argument("--bookings", default=None, help="JSON file with existing bookings")
    parser.add_argument("--rate", type=float, default=None, help="Base hourly rate")
    parser.add_argument("--first-time", action="store_true",
                        help="Apply the first-hour comp for a first-time client")
    args = parser.parse_args()

    try:
        demo = ConsoleDemo(
            tiers=load_rate_tiers_file(args.tiers) if args.tiers else None,
            bookings=load_bookings_file(args.bookings) if args.bookings else None,
            base_hourly_rate=args.rate,
            is_first_time_client=args.first_time,
        )
        day = args.date or utc_now().date()
        sys.exit(demo.run(day, args.duration, TierPreference(args.tier)))
    except (SchedulingError, ValueError, OSError) as e:
        print(f"{RED}{e}{RESET}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
