"""Unit tests for utils - rate math and date handling.

Test Categories:
- round_half_up / calculate_rate / calculate_progress / clamp
- days_until / is_after_epoch
- week_key / month_key
- dt_parse / dt_format
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from homework_progress.utils.dt_utils import (
    EPOCH,
    as_utc,
    days_until,
    dt_format,
    dt_parse,
    is_after_epoch,
    month_key,
    week_key,
)
from homework_progress.utils.math_utils import (
    calculate_progress,
    calculate_rate,
    clamp,
    round_half_up,
)
from tests.helpers import NOW

# =============================================================================
# Test: Rate math
# =============================================================================


class TestRates:
    """Tests for math_utils."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(12.5, 13), (12.49, 12), (87.5, 88), (0.0, 0), (99.5, 100)],
    )
    def test_round_half_up(self, value: float, expected: int) -> None:
        """Halves round up, unlike round()."""
        assert round_half_up(value) == expected

    @pytest.mark.parametrize(
        ("numerator", "denominator", "expected"),
        [
            (1, 8, 13),
            (2, 3, 67),
            (1, 3, 33),
            (9, 10, 90),
            (0, 4, 0),
            (4, 4, 100),
            (5, 0, 0),
        ],
    )
    def test_calculate_rate(self, numerator: int, denominator: int, expected: int) -> None:
        """Whole-number percentages with a zero-denominator guard."""
        assert calculate_rate(numerator, denominator) == expected

    def test_calculate_progress(self) -> None:
        """Progress is capped at 1.0 and 0.0 for a zero threshold."""
        assert calculate_progress(3, 5) == pytest.approx(0.6)
        assert calculate_progress(7, 5) == 1.0
        assert calculate_progress(3, 0) == 0.0

    def test_clamp(self) -> None:
        """Values are bounded on both sides."""
        assert clamp(150, 0, 100) == 100
        assert clamp(-10, 0, 100) == 0
        assert clamp(42, 0, 100) == 42


# =============================================================================
# Test: Day distance and epoch guard
# =============================================================================


class TestDayDistance:
    """Tests for days_until() and is_after_epoch()."""

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(days=1, hours=12), 2),
            (timedelta(hours=6), 1),
            (timedelta(0), 0),
            (timedelta(hours=-6), 0),
            (timedelta(days=-1, hours=-12), -1),
            (timedelta(days=7), 7),
        ],
    )
    def test_days_until_ceiling(self, delta: timedelta, expected: int) -> None:
        """Partial days round toward the future."""
        assert days_until(NOW + delta, NOW) == expected

    def test_naive_values_are_utc(self) -> None:
        """Naive datetimes are read as UTC."""
        naive = datetime(2026, 3, 16, 12, 0)

        assert as_utc(naive) == datetime(2026, 3, 16, 12, 0, tzinfo=UTC)
        assert days_until(naive, NOW) == 1

    def test_is_after_epoch(self) -> None:
        """None and the epoch itself are placeholders."""
        assert is_after_epoch(None) is False
        assert is_after_epoch(EPOCH) is False
        assert is_after_epoch(EPOCH + timedelta(seconds=1)) is True


# =============================================================================
# Test: Grouping keys
# =============================================================================


class TestGroupingKeys:
    """Tests for week_key() and month_key()."""

    @pytest.mark.parametrize(
        ("day", "expected"),
        [
            (date(2026, 1, 1), "2026-W01"),
            (date(2026, 1, 7), "2026-W01"),
            (date(2026, 1, 8), "2026-W02"),
            (date(2026, 12, 30), "2026-W52"),
            (date(2026, 12, 31), "2026-W53"),
        ],
    )
    def test_week_key(self, day: date, expected: str) -> None:
        """Seven-day blocks counted from January 1st."""
        assert week_key(day) == expected

    @pytest.mark.parametrize(
        ("instant", "expected"),
        [
            (datetime(2026, 1, 7, 0, 0, tzinfo=UTC), "2026-W01"),
            (datetime(2026, 1, 7, 0, 0, 1, tzinfo=UTC), "2026-W02"),
            (datetime(2026, 1, 7, 23, 0, tzinfo=UTC), "2026-W02"),
            (datetime(2026, 1, 14, 0, 0, tzinfo=UTC), "2026-W02"),
            (datetime(2026, 1, 14, 12, 0, tzinfo=UTC), "2026-W03"),
        ],
    )
    def test_week_key_counts_time_of_day(self, instant: datetime, expected: str) -> None:
        """Elapsed days keep their fraction; only midnight stays in the week."""
        assert week_key(instant) == expected

    def test_week_boundary_in_timezone(self) -> None:
        """The year start is midnight of January 1st in the requested zone."""
        local_midnight = datetime(2026, 1, 6, 19, 0, tzinfo=UTC)  # Jan 7 00:00 +05

        assert week_key(local_midnight, "Asia/Tashkent") == "2026-W01"
        assert (
            week_key(local_midnight + timedelta(seconds=1), "Asia/Tashkent")
            == "2026-W02"
        )

    def test_keys_follow_timezone(self) -> None:
        """The calendar date is taken in the requested timezone."""
        instant = datetime(2025, 12, 31, 22, tzinfo=UTC)

        assert month_key(instant) == "2025-12"
        assert month_key(instant, "Asia/Tashkent") == "2026-01"
        assert week_key(instant, "Asia/Tashkent") == "2026-W01"


# =============================================================================
# Test: Parsing
# =============================================================================


class TestDtParse:
    """Tests for dt_parse() and dt_format()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2026-03-15T12:00:00Z", NOW),
            ("2026-03-15T17:00:00+05:00", NOW),
            ("2026-03-15T12:00:00", NOW),
            (date(2026, 3, 15), datetime(2026, 3, 15, tzinfo=UTC)),
            (NOW.astimezone(timezone(timedelta(hours=-4))), NOW),
            (1773576000000, NOW),
            (0, EPOCH),
        ],
    )
    def test_accepted_inputs(self, value: object, expected: datetime) -> None:
        """Strings, dates, datetimes and epoch milliseconds become aware UTC."""
        parsed = dt_parse(value)

        assert parsed == expected
        assert parsed.utcoffset() == timedelta(0)

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_inputs(self, value: object) -> None:
        """Empty values mean no timestamp."""
        assert dt_parse(value) is None

    @pytest.mark.parametrize("value", ["yesterday", True])
    def test_rejected_inputs(self, value: object) -> None:
        """Unparseable values raise ValueError."""
        with pytest.raises(ValueError):
            dt_parse(value)

    def test_dt_format(self) -> None:
        """ISO 8601 in UTC, None passes through."""
        assert dt_format(NOW) == "2026-03-15T12:00:00+00:00"
        assert dt_format(None) is None
