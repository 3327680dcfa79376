"""Homework progress engine.

Pure computation of homework status, streaks, statistics, badges and
insights for one student from an immutable snapshot and an explicit `now`.

Usage:
    from homework_progress import ProgressFacade

    report = ProgressFacade().build_report(assignments, submissions, now)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from .data_builders import (
    DuplicateSubmissionError,
    RecordValidationError,
    build_assignment,
    build_progress_config,
    build_submission,
    build_submission_lookup,
)
from .engines import (
    AggregationEngine,
    BadgeEngine,
    InsightGenerator,
    StatusResolver,
    StreakAnalyzer,
)
from .managers import (
    DuplicateAssignmentError,
    ProgressFacade,
    ProgressInputError,
    UnknownAssignmentError,
)
from .models import (
    AggregationResult,
    Assignment,
    Badge,
    BadgeProgress,
    GroupAxis,
    GroupKey,
    GroupStats,
    HomeworkStatus,
    OverallStats,
    ProgressReport,
    ResolvedRecord,
    StatusResolution,
    StreakResult,
    StreakRun,
    Submission,
    SubmissionStatus,
)


def build_report(
    assignments: Iterable[Assignment],
    submissions_by_assignment: Mapping[str, Submission],
    now: datetime,
    config: Mapping[str, Any] | None = None,
) -> ProgressReport:
    """Build a report with a one-off ProgressFacade."""
    return ProgressFacade(config).build_report(assignments, submissions_by_assignment, now)


__all__ = [
    "AggregationEngine",
    "AggregationResult",
    "Assignment",
    "Badge",
    "BadgeEngine",
    "BadgeProgress",
    "DuplicateAssignmentError",
    "DuplicateSubmissionError",
    "GroupAxis",
    "GroupKey",
    "GroupStats",
    "HomeworkStatus",
    "InsightGenerator",
    "OverallStats",
    "ProgressFacade",
    "ProgressInputError",
    "ProgressReport",
    "RecordValidationError",
    "ResolvedRecord",
    "StatusResolution",
    "StatusResolver",
    "StreakAnalyzer",
    "StreakResult",
    "StreakRun",
    "Submission",
    "SubmissionStatus",
    "UnknownAssignmentError",
    "build_assignment",
    "build_progress_config",
    "build_report",
    "build_submission",
    "build_submission_lookup",
]
