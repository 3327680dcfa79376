# File: utils/dt_utils.py
"""Date and time utilities for the homework progress engine.

Pure functions only: nothing in this module reads the system clock. Every
"current time" is passed in by the caller so report computations are
deterministic and testable.

Functions:
    - as_utc: Normalize a datetime to UTC (naive values are taken as UTC)
    - as_zone: Convert a datetime to a named timezone
    - days_until: Signed ceiling of whole days between two instants
    - is_after_epoch: Guard against zero/placeholder timestamps
    - week_key: "YYYY-Www" key from fractional days since Jan 1
    - month_key: "YYYY-MM" key used for monthly grouping
    - dt_parse: Normalize string/date/datetime/epoch inputs to aware UTC
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from functools import lru_cache
import logging
import math
from zoneinfo import ZoneInfo

from dateutil import parser as dt_parser

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

SECONDS_PER_DAY = 86400
DAYS_PER_WEEK = 7
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
WEEK_KEY_TEMPLATE = "{year}-W{week:02d}"
MONTH_KEY_FORMAT = "%Y-%m"


# ==============================================================================
# Timezone Conversion
# ==============================================================================


@lru_cache(maxsize=32)
def get_zone(tz_name: str) -> ZoneInfo:
    """Return the ZoneInfo for an IANA name (cached, immutable)."""
    return ZoneInfo(tz_name)


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Args:
        dt_obj: Datetime object; naive values are interpreted as UTC

    Returns:
        Datetime in UTC timezone
    """
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(UTC)


def as_zone(dt_obj: datetime, tz_name: str = "UTC") -> datetime:
    """Convert a datetime to the named timezone.

    Args:
        dt_obj: Datetime object; naive values are interpreted as UTC
        tz_name: IANA timezone name

    Returns:
        Datetime in the requested timezone
    """
    return as_utc(dt_obj).astimezone(get_zone(tz_name))


# ==============================================================================
# Calculations
# ==============================================================================


def days_until(target: datetime, now: datetime) -> int:
    """Return ceil((target - now) / 1 day), negative once target has passed.

    Examples:
        target 1.5 days ahead → 2
        target 6 hours ahead → 1
        target 6 hours ago → 0
        target 1.5 days ago → -1
    """
    delta = as_utc(target) - as_utc(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def is_after_epoch(dt_obj: datetime | None) -> bool:
    """Return True when dt_obj is a real timestamp strictly after the epoch."""
    if dt_obj is None:
        return False
    return as_utc(dt_obj) > EPOCH


def week_key(dt_obj: datetime | date, tz_name: str = "UTC") -> str:
    """Return the weekly grouping key for a date.

    Weeks are counted from midnight of January 1st in tz_name:
    week = ceil((elapsed days since Jan 1 + 1) / 7). Elapsed days keep their
    fraction, so any instant after midnight of Jan 7 already falls in
    week 02, and the last days of December fall in week 53.

    Args:
        dt_obj: Date or datetime; a plain date counts as its midnight
        tz_name: IANA timezone of the year start

    Returns:
        Key formatted as "YYYY-Www"

    Examples:
        week_key(date(2026, 1, 7)) → "2026-W01"
        week_key(datetime(2026, 1, 7, 9, tzinfo=UTC)) → "2026-W02"
    """
    if isinstance(dt_obj, datetime):
        local = as_zone(dt_obj, tz_name)
        year = local.year
        year_start = datetime(year, 1, 1, tzinfo=get_zone(tz_name))
        # Elapsed real time, not the wall-clock difference
        elapsed = (as_utc(local) - as_utc(year_start)).total_seconds()
        elapsed_days = elapsed / SECONDS_PER_DAY
    else:
        year = dt_obj.year
        elapsed_days = (dt_obj - date(year, 1, 1)).days
    week = math.ceil((elapsed_days + 1) / DAYS_PER_WEEK)
    return WEEK_KEY_TEMPLATE.format(year=year, week=week)


def month_key(dt_obj: datetime | date, tz_name: str = "UTC") -> str:
    """Return the monthly grouping key ("YYYY-MM") for a date."""
    return _calendar_date(dt_obj, tz_name).strftime(MONTH_KEY_FORMAT)


def _calendar_date(dt_obj: datetime | date, tz_name: str) -> date:
    if isinstance(dt_obj, datetime):
        return as_zone(dt_obj, tz_name).date()
    return dt_obj


# ==============================================================================
# Parsing / Formatting
# ==============================================================================


def dt_parse(dt_input: str | date | datetime | int | float | None) -> datetime | None:
    """Normalize various datetime inputs to an aware UTC datetime.

    Accepts:
    - ISO 8601 strings (with or without offset, "Z" suffix supported)
    - date objects (midnight UTC)
    - datetime objects (naive values taken as UTC)
    - numbers as Unix epoch milliseconds (0 stays the epoch sentinel)

    Args:
        dt_input: Value to normalize, or None

    Returns:
        Aware UTC datetime, or None for empty input

    Raises:
        ValueError: If a string cannot be parsed
    """
    if dt_input is None or dt_input == "":
        return None

    if isinstance(dt_input, datetime):
        return as_utc(dt_input)

    if isinstance(dt_input, date):
        return datetime(dt_input.year, dt_input.month, dt_input.day, tzinfo=UTC)

    if isinstance(dt_input, bool):
        raise ValueError(f"Unsupported datetime value: {dt_input!r}")

    if isinstance(dt_input, (int, float)):
        return datetime.fromtimestamp(dt_input / 1000, tz=UTC)

    try:
        parsed = dt_parser.isoparse(dt_input)
    except (ValueError, OverflowError) as err:
        _LOGGER.debug("Unparseable datetime string %r: %s", dt_input, err)
        raise ValueError(f"Invalid datetime: {dt_input!r}") from err
    return as_utc(parsed)


def dt_format(dt_obj: datetime | None) -> str | None:
    """Return the ISO 8601 string of a datetime in UTC, or None."""
    if dt_obj is None:
        return None
    return as_utc(dt_obj).isoformat()
