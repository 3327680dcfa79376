# File: utils/math_utils.py
"""Rate and rounding utilities for the homework progress engine.

Pure Python math functions shared by every engine and view, so all
percentages shown anywhere are computed by the same formula.

Functions:
    - round_half_up: Integer rounding with halves going up
    - calculate_rate: Whole-number percentage with zero-denominator guard
    - calculate_progress: Progress ratio toward a threshold (0.0-1.0)
    - clamp: Bound a value to a range
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
import logging

# Module-level logger
_LOGGER = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's built-in round() uses banker's rounding (round(12.5) == 12),
    which would make a 12.5% rate render as 12 in one view and 13 in another.

    Examples:
        round_half_up(12.5) → 13
        round_half_up(12.49) → 12
        round_half_up(0.0) → 0
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_rate(numerator: int, denominator: int) -> int:
    """Return round_half_up(100 * numerator / denominator), or 0.

    Computed with integer arithmetic so no float error can move a value
    across a .5 boundary.

    Args:
        numerator: Count of matching records
        denominator: Count of records in scope

    Returns:
        Whole-number percentage, 0 when the denominator is not positive

    Examples:
        calculate_rate(1, 8) → 13   # 12.5 rounds up
        calculate_rate(2, 3) → 67
        calculate_rate(5, 0) → 0    # Division by zero protection
    """
    if denominator <= 0:
        return 0
    if numerator < 0:
        _LOGGER.debug("Negative rate numerator %s clamped to 0", numerator)
        numerator = 0
    return (200 * numerator + denominator) // (2 * denominator)


def calculate_progress(current: float, threshold: float) -> float:
    """Return progress toward a threshold capped at 1.0.

    Examples:
        calculate_progress(3, 5) → 0.6
        calculate_progress(7, 5) → 1.0
        calculate_progress(3, 0) → 0.0
    """
    if threshold <= 0:
        return 0.0
    return clamp(current / threshold, 0.0, 1.0)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between minimum and maximum bounds.

    Examples:
        clamp(150, 0, 100) → 100
        clamp(-10, 0, 100) → 0
    """
    return max(min_val, min(value, max_val))
