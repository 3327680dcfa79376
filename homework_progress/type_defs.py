"""Type definitions for configuration and view payloads.

Engine inputs and outputs are frozen dataclasses (see models.py). The
structures below are plain dictionaries with fixed keys: the engine
configuration and the JSON-ready payloads produced by helpers/report_helpers.py
for the list, timeline, analytics and export views.

IMPORTANT: This file must NOT import from engines/ or managers/ to avoid
circular dependencies. Only import from models.py and typing.
"""

from datetime import datetime
from typing import Any, TypedDict

from .models import GroupStats, OverallStats, ResolvedRecord, StreakResult

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

AssignmentId = str
SubjectId = str
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
PeriodKey = str  # "2026-W03" or "2026-01"


# =============================================================================
# Configuration
# =============================================================================


class ProgressConfig(TypedDict, total=False):
    """Overridable engine settings.

    Every key is optional; data_builders.build_progress_config() fills the
    const.DEFAULT_* values for missing keys.
    """

    timezone: str  # IANA name used for week/month grouping dates
    upcoming_window_days: int  # PENDING due within this many days is "upcoming"
    week_history_limit: int  # Most recent week groups kept in by_week
    streak_history_limit: int  # Longest runs kept in streak_history
    mastery_min_assignments: int  # Minimum subject size for a mastery badge
    completion_badge_rate: int  # Completion rate required for completion_90
    completion_badge_min_total: int  # Sample-size guard for completion_90
    early_bird_min_count: int  # Early COMPLETED submissions for early_bird


# =============================================================================
# View Payloads
# =============================================================================


class StatsPayload(TypedDict):
    """Counts and rates of a record group in serialized form."""

    total: int
    completed: int
    late: int
    missed: int
    pending: int
    completion_rate: int
    on_time_rate: int


class TimelineEntry(TypedDict):
    """One month of the timeline view (grouped by assigned date)."""

    month: PeriodKey
    records: list[dict[str, Any]]
    stats: StatsPayload


class ExportRow(TypedDict):
    """Flat row handed to an external CSV/PDF renderer."""

    assignment_id: AssignmentId
    assigned_date: ISODatetime
    subject_id: SubjectId
    subject: str
    title: str
    due_date: ISODatetime
    status: str
    submitted_at: ISODatetime | None
    grade: float | None
    feedback: str | None


class AnalyticsView(TypedDict):
    """Payload of the analytics view."""

    overall: dict[str, Any]
    subject_performance: list[dict[str, Any]]
    weekly_progress: list[dict[str, Any]]
    monthly_trends: list[dict[str, Any]]
    streak_analysis: dict[str, Any]
    badges: list[dict[str, Any]]
    badge_progress: list[dict[str, Any]]
    insights: list[str]


# =============================================================================
# Badge Evaluation
# =============================================================================


class BadgeContext(TypedDict):
    """Everything a badge rule handler may read.

    Built once per BadgeEngine.award() call; handlers never compute
    aggregates of their own.
    """

    records: tuple[ResolvedRecord, ...]
    streak: StreakResult
    overall: OverallStats
    by_subject: tuple[GroupStats, ...]
    earned_at: datetime
    mastery_min_assignments: int
    completion_badge_rate: int
    completion_badge_min_total: int
    early_bird_min_count: int
