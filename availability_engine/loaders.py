"""
Load tier tables and booking lists from plain rows or JSON files.

Tier rows are validated here, once, when the table is loaded. A bad row
stops the load instead of reaching the resolver.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Union

from pydantic import ValidationError

from availability_engine.exceptions import RateTierConfigError
from availability_engine.schemas.booking_schema import Booking
from availability_engine.schemas.rate_tier_schema import RateTier

logger = logging.getLogger(__name__)

_INACTIVE_KEYS = ("is_active", "isActive")


def _is_inactive(row: dict[str, Any]) -> bool:
    return any(key in row and row[key] is False for key in _INACTIVE_KEYS)


def load_rate_tiers(rows: Iterable[dict[str, Any]]) -> list[RateTier]:
    """Validate tier rows (camelCase or snake_case keys) into RateTiers.

    Rows flagged inactive are skipped.

    Raises:
        RateTierConfigError: On the first row that fails validation.
    """
    tiers: list[RateTier] = []
    skipped = 0
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise RateTierConfigError(f"Rate tier row {index} is not an object: {row!r}")
        if _is_inactive(row):
            skipped += 1
            continue
        data = {k: v for k, v in row.items() if k not in _INACTIVE_KEYS}
        try:
            tiers.append(RateTier.model_validate(data))
        except ValidationError as e:
            raise RateTierConfigError(f"Invalid rate tier row {index}: {e}") from e

    logger.debug("Loaded %d rate tier(s), skipped %d inactive", len(tiers), skipped)
    return tiers


def load_bookings(rows: Iterable[dict[str, Any]]) -> list[Booking]:
    """Validate booking rows into Bookings. Raises pydantic ValidationError on bad rows."""
    return [Booking.model_validate(row) for row in rows]


def _read_json_list(path: Union[str, Path]) -> list:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "data" in data:
        data = data["data"]
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list in {path}")
    return data


def load_rate_tiers_file(path: Union[str, Path]) -> list[RateTier]:
    """Load a tier table from a JSON file (a list, or ``{"data": [...]}``)."""
    return load_rate_tiers(_read_json_list(path))


def load_bookings_file(path: Union[str, Path]) -> list[Booking]:
    """Load bookings from a JSON file (a list, or ``{"data": [...]}``)."""
    return load_bookings(_read_json_list(path))
