"""Progress Facade - The single entry point that composes every engine.

Flow of one build_report() call:
    1. Validate the snapshot (unique assignment ids, no orphan submissions)
    2. StatusResolver → one ResolvedRecord per assignment
    3. AggregationEngine → overall / subject / week / month statistics
    4. StreakAnalyzer → current, longest and historical streaks
    5. BadgeEngine → earned badges and badge progress
    6. InsightGenerator → insights and encouragement
    7. One immutable ProgressReport for every view

The facade owns the configuration and nothing else: no caches, no stored
results. Independent calls may run concurrently.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from .. import const
from ..data_builders import build_progress_config
from ..engines.aggregation_engine import AggregationEngine
from ..engines.badge_engine import BadgeEngine
from ..engines.insight_generator import InsightGenerator
from ..engines.status_resolver import StatusResolver
from ..engines.streak_analyzer import StreakAnalyzer
from ..models import Assignment, ProgressReport, ResolvedRecord, Submission
from ..type_defs import ProgressConfig
from ..utils.dt_utils import as_utc

__all__ = [
    "DuplicateAssignmentError",
    "ProgressFacade",
    "ProgressInputError",
    "UnknownAssignmentError",
]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ProgressInputError(Exception):
    """Base class for snapshot errors detected before any computation."""


class DuplicateAssignmentError(ProgressInputError):
    """Raised when the same assignment id appears more than once.

    Attributes:
        assignment_id: The repeated assignment id
    """

    def __init__(self, assignment_id: str) -> None:
        """Initialize DuplicateAssignmentError.

        Args:
            assignment_id: The repeated assignment id
        """
        self.assignment_id = assignment_id
        super().__init__(f"Assignment {assignment_id!r} appears more than once")


class UnknownAssignmentError(ProgressInputError):
    """Raised when a submission is keyed by an assignment not in the snapshot.

    Attributes:
        assignment_id: The assignment id the submission refers to
    """

    def __init__(self, assignment_id: str) -> None:
        """Initialize UnknownAssignmentError.

        Args:
            assignment_id: The assignment id the submission refers to
        """
        self.assignment_id = assignment_id
        super().__init__(
            f"Submission refers to unknown assignment {assignment_id!r}"
        )


# =============================================================================
# FACADE
# =============================================================================


class ProgressFacade:
    """Compose status, streak, aggregation, badge and insight engines.

    Responsibilities:
    - Validate the input snapshot
    - Resolve records once and hand the same records to every engine
    - Assemble one ProgressReport

    NOT responsible for:
    - Reading the clock (`now` is always passed in)
    - Persistence, authorization or transport
    - View shaping (helpers/report_helpers.py)

    Example:
        facade = ProgressFacade({"timezone": "Asia/Tashkent"})
        report = facade.build_report(assignments, submissions, now)
    """

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        """Initialize the facade.

        Args:
            config: Optional overrides (see ProgressConfig); validated and
                completed with defaults

        Raises:
            RecordValidationError: If the configuration is invalid
        """
        self._config: ProgressConfig = build_progress_config(config)
        self._aggregation = AggregationEngine(self._config)
        self._streaks = StreakAnalyzer(self._config)
        self._badges = BadgeEngine(self._config)

    @property
    def config(self) -> ProgressConfig:
        """Return a copy of the resolved configuration."""
        return ProgressConfig(**self._config)

    def build_report(
        self,
        assignments: Iterable[Assignment],
        submissions_by_assignment: Mapping[str, Submission],
        now: datetime,
    ) -> ProgressReport:
        """Build the complete progress report for one student.

        Args:
            assignments: Assignments visible to the student
            submissions_by_assignment: The student's stored submission rows
                keyed by assignment id (at most one per assignment)
            now: Evaluation instant; naive values are taken as UTC

        Returns:
            Immutable ProgressReport

        Raises:
            DuplicateAssignmentError: If an assignment id is repeated
            UnknownAssignmentError: If a submission key matches no assignment
        """
        now = as_utc(now)
        assignment_list = self._validate_snapshot(assignments, submissions_by_assignment)

        records = self.resolve_records(assignment_list, submissions_by_assignment, now)
        aggregation = self._aggregation.aggregate(records)
        streak = self._streaks.analyze(records)
        badges = self._badges.award(records, streak, aggregation, now)
        badge_progress = self._badges.progress(records, streak, aggregation)

        overall = aggregation.overall
        insights = InsightGenerator.generate(
            overall, streak, overall.upcoming_count, aggregation.by_subject
        )
        encouragement = InsightGenerator.encourage(
            overall, streak, overall.upcoming_count
        )

        const.LOGGER.debug(
            "Built progress report: %d records (%d completed, %d late, %d missed, "
            "%d pending), streak %d/%d, %d badges",
            overall.total,
            overall.completed,
            overall.late,
            overall.missed,
            overall.pending,
            streak.current_streak,
            streak.longest_streak,
            len(badges),
        )

        return ProgressReport(
            generated_at=now,
            records=records,
            stats=overall,
            streak=streak,
            badges=badges,
            badge_progress=badge_progress,
            by_subject=aggregation.by_subject,
            by_week=aggregation.by_week,
            by_month=aggregation.by_month,
            insights=insights,
            encouragement=encouragement,
            timezone=self._config[const.CONF_TIMEZONE],
        )

    @staticmethod
    def resolve_records(
        assignments: Iterable[Assignment],
        submissions_by_assignment: Mapping[str, Submission],
        now: datetime,
    ) -> tuple[ResolvedRecord, ...]:
        """Resolve every assignment, ordered for the list view.

        Order: due date ascending, then assigned date descending, then id.
        """
        records = [
            StatusResolver.resolve_record(
                assignment,
                submissions_by_assignment.get(assignment.assignment_id),
                now,
            )
            for assignment in assignments
        ]
        records.sort(
            key=lambda record: (
                as_utc(record.due_date),
                -as_utc(record.assignment.assigned_date).timestamp(),
                record.assignment_id,
            )
        )
        return tuple(records)

    @staticmethod
    def _validate_snapshot(
        assignments: Iterable[Assignment],
        submissions_by_assignment: Mapping[str, Submission],
    ) -> list[Assignment]:
        assignment_list = list(assignments)
        seen: set[str] = set()
        for assignment in assignment_list:
            if assignment.assignment_id in seen:
                raise DuplicateAssignmentError(assignment.assignment_id)
            seen.add(assignment.assignment_id)

        # Sorted so the reported id does not depend on mapping order
        for assignment_id in sorted(submissions_by_assignment):
            if assignment_id not in seen:
                raise UnknownAssignmentError(assignment_id)

        return assignment_list
