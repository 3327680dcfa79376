"""Managers for the homework progress engine.

- progress_facade: Orchestrates every engine into one ProgressReport
"""

from .progress_facade import (
    DuplicateAssignmentError,
    ProgressFacade,
    ProgressInputError,
    UnknownAssignmentError,
)

__all__ = [
    "DuplicateAssignmentError",
    "ProgressFacade",
    "ProgressInputError",
    "UnknownAssignmentError",
]
