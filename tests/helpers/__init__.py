"""Test helpers for the homework progress engine.

This module re-exports all helpers for convenient imports:

    from tests.helpers import NOW, make_assignment, make_record, make_submission

See builders.py for the time model and defaults.
"""

from tests.helpers.builders import (
    NOW,
    days_from_now,
    make_assignment,
    make_record,
    make_series,
    make_submission,
)

__all__ = [
    "NOW",
    "days_from_now",
    "make_assignment",
    "make_record",
    "make_series",
    "make_submission",
]
