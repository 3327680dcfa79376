"""Immutable data structures for the homework progress engine.

Inputs (Assignment, Submission) are owned by the caller and treated as a
read-only snapshot. Everything else is derived on each report computation and
never persisted.

All classes are frozen dataclasses and every collection they hold is a tuple,
so a finished ProgressReport cannot be altered by any of its consumers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class SubmissionStatus(StrEnum):
    """Status tag stored on a submission row."""

    NOT_SUBMITTED = "NOT_SUBMITTED"
    SUBMITTED = "SUBMITTED"
    GRADED = "GRADED"


class HomeworkStatus(StrEnum):
    """Derived lifecycle status of one assignment for one student."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    LATE = "LATE"
    MISSED = "MISSED"


class GroupAxis(StrEnum):
    """Axis a GroupKey belongs to."""

    SUBJECT = "subject"
    WEEK = "week"
    MONTH = "month"
    TIMELINE = "timeline"


# =============================================================================
# Input Snapshot
# =============================================================================


@dataclass(frozen=True)
class Assignment:
    """A homework item, independent of any student's submission."""

    assignment_id: str
    subject_id: str
    assigned_date: datetime
    due_date: datetime
    title: str = ""
    subject_name: str | None = None
    total_points: float | None = None

    @property
    def subject_label(self) -> str:
        """Human-readable subject name, falling back to the identifier."""
        return self.subject_name or self.subject_id


@dataclass(frozen=True)
class Submission:
    """A student's hand-in for one assignment, as stored upstream."""

    status: SubmissionStatus
    submitted_at: datetime | None = None
    content: str | None = None
    attachment_count: int = 0
    is_late: bool = False
    grade: float | None = None
    feedback: str | None = None


# =============================================================================
# Resolution
# =============================================================================


@dataclass(frozen=True)
class StatusResolution:
    """Computed status fields for one (assignment, submission) pair.

    Attributes:
        status: Lifecycle status at the evaluation instant
        is_overdue: True when now is past the due date
        days_until_due: Ceiling of (due - now) in days, negative once overdue
        has_actual_submission: True when the submission passed the
            actual-submission guard
    """

    status: HomeworkStatus
    is_overdue: bool
    days_until_due: int
    has_actual_submission: bool


@dataclass(frozen=True)
class ResolvedRecord:
    """An assignment composed with its actual submission and derived status.

    ``submission`` is None both when no row exists and when the stored row is
    not an actual submission, so consumers never show placeholder rows.
    """

    assignment: Assignment
    submission: Submission | None
    status: HomeworkStatus
    is_overdue: bool
    days_until_due: int

    @property
    def assignment_id(self) -> str:
        return self.assignment.assignment_id

    @property
    def subject_id(self) -> str:
        return self.assignment.subject_id

    @property
    def due_date(self) -> datetime:
        return self.assignment.due_date


# =============================================================================
# Streaks
# =============================================================================


@dataclass(frozen=True)
class StreakRun:
    """One maximal run of consecutive on-time submissions."""

    length: int
    end_date: datetime


@dataclass(frozen=True)
class StreakResult:
    """Streak analysis for one student."""

    current_streak: int = 0
    longest_streak: int = 0
    streak_history: tuple[StreakRun, ...] = ()


# =============================================================================
# Aggregation
# =============================================================================


@dataclass(frozen=True, order=True)
class GroupKey:
    """Typed grouping key; keys of different axes never compare equal."""

    axis: GroupAxis
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GroupStats:
    """Status counts and rates for one group of records."""

    key: GroupKey
    label: str
    total: int = 0
    completed: int = 0
    late: int = 0
    missed: int = 0
    pending: int = 0
    completion_rate: int = 0
    on_time_rate: int = 0


@dataclass(frozen=True)
class OverallStats:
    """Status counts, rates and grade summary over every record."""

    total: int = 0
    completed: int = 0
    late: int = 0
    missed: int = 0
    pending: int = 0
    completion_rate: int = 0
    on_time_rate: int = 0
    upcoming_count: int = 0
    average_grade: int = 0
    graded_count: int = 0

    @property
    def submitted(self) -> int:
        """Records handed in at all (on time or late)."""
        return self.completed + self.late


@dataclass(frozen=True)
class AggregationResult:
    """Output of AggregationEngine.aggregate()."""

    overall: OverallStats
    by_subject: tuple[GroupStats, ...] = ()
    by_week: tuple[GroupStats, ...] = ()
    by_month: tuple[GroupStats, ...] = ()


# =============================================================================
# Gamification
# =============================================================================


@dataclass(frozen=True)
class Badge:
    """A recognition recomputed on every report; never stored on its own."""

    badge_id: str
    title: str
    description: str
    icon: str
    category: str
    earned_at: datetime


@dataclass(frozen=True)
class BadgeProgress:
    """Distance to one threshold badge.

    Attributes:
        badge_id: Badge the progress refers to
        current_value: Value achieved so far
        threshold: Value required to earn the badge
        progress: 0.0 to 1.0 (capped at 1.0)
        remaining: How much is still missing (0 once reached)
        earned: True when every condition of the rule is met
    """

    badge_id: str
    current_value: int
    threshold: int
    progress: float
    remaining: int
    earned: bool


# =============================================================================
# Report
# =============================================================================


@dataclass(frozen=True)
class ProgressReport:
    """The composite returned by ProgressFacade.build_report()."""

    generated_at: datetime
    records: tuple[ResolvedRecord, ...]
    stats: OverallStats
    streak: StreakResult
    badges: tuple[Badge, ...] = ()
    badge_progress: tuple[BadgeProgress, ...] = ()
    by_subject: tuple[GroupStats, ...] = ()
    by_week: tuple[GroupStats, ...] = ()
    by_month: tuple[GroupStats, ...] = ()
    insights: tuple[str, ...] = ()
    encouragement: tuple[str, ...] = ()
    timezone: str = "UTC"  # IANA name every grouping date was taken in
