"""Stock 24/7 rate tier table: weekday and weekend windows in UTC."""

from availability_engine.loaders import load_rate_tiers
from availability_engine.schemas.rate_tier_schema import RateTier

STANDARD_COLOR = "#28a745"
PREMIUM_COLOR = "#ffc107"
EMERGENCY_COLOR = "#dc3545"

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

WEEKDAY_WINDOWS: list[tuple[str, int, str, str, str, str]] = [
    ("Standard", 1, "08:00:00", "17:00:00", "1.00", "Standard business hours"),
    ("Premium", 2, "06:00:00", "08:00:00", "1.25", "Early morning premium hours"),
    ("Premium", 2, "17:00:00", "22:00:00", "1.25", "Evening premium hours"),
    ("Emergency", 3, "22:00:00", "00:00:00", "1.75", "Late night emergency hours"),
    ("Emergency", 3, "00:00:00", "06:00:00", "1.75", "Overnight emergency hours"),
]

WEEKEND_WINDOWS: list[tuple[str, int, str, str, str, str]] = [
    ("Premium", 2, "08:00:00", "22:00:00", "1.50", "Weekend premium hours"),
    ("Emergency", 3, "22:00:00", "00:00:00", "2.00", "Late night emergency hours"),
    ("Emergency", 3, "00:00:00", "08:00:00", "2.00", "Overnight emergency hours"),
]

_COLORS = {"Standard": STANDARD_COLOR, "Premium": PREMIUM_COLOR, "Emergency": EMERGENCY_COLOR}


def default_tier_rows() -> list[dict]:
    rows = []
    for day in range(7):
        windows = WEEKEND_WINDOWS if day in (0, 6) else WEEKDAY_WINDOWS
        for order, (name, level, start, end, multiplier, description) in enumerate(windows, 1):
            rows.append({
                "id": f"{day}-{order}",
                "tierName": name,
                "tierLevel": level,
                "dayOfWeek": day,
                "timeStart": start,
                "timeEnd": end,
                "rateMultiplier": multiplier,
                "colorCode": _COLORS[name],
                "description": f"{description} - {DAY_NAMES[day]}",
            })
    return rows


def default_rate_tiers() -> list[RateTier]:
    """Return the stock tier table, validated."""
    return load_rate_tiers(default_tier_rows())
