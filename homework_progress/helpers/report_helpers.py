"""Reporting helper functions for the homework progress views.

This module provides read-only data shaping on top of one ProgressReport.
Every view (list, timeline, analytics, export) derives from the same report,
so no view aggregates records on its own except the timeline's per-month
stats, which reuse AggregationEngine.build_group().

All payloads are plain JSON-ready structures: datetimes become ISO 8601 UTC
strings, enums become their tag values, tuples become lists.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Any

from ..engines.aggregation_engine import AggregationEngine
from ..models import GroupAxis, GroupKey, HomeworkStatus
from ..utils.dt_utils import as_utc, dt_format, month_key

if TYPE_CHECKING:
    from datetime import datetime

    from ..models import (
        Badge,
        BadgeProgress,
        GroupStats,
        OverallStats,
        ProgressReport,
        ResolvedRecord,
        StreakResult,
        Submission,
    )
    from ..type_defs import AnalyticsView, ExportRow, StatsPayload, TimelineEntry


# ==============================================================================
# LIST VIEW
# ==============================================================================


def filter_records(
    report: ProgressReport,
    status: HomeworkStatus | str | None = None,
    subject_id: str | None = None,
) -> tuple[ResolvedRecord, ...]:
    """Return the report's records matching the given filters.

    Args:
        report: Built progress report
        status: Keep only records with this status (tag value accepted)
        subject_id: Keep only records of this subject

    Returns:
        Matching records in report order

    Raises:
        ValueError: If status is not a known HomeworkStatus tag
    """
    wanted = HomeworkStatus(status) if status is not None else None
    return tuple(
        record
        for record in report.records
        if (wanted is None or record.status == wanted)
        and (subject_id is None or record.subject_id == subject_id)
    )


# ==============================================================================
# TIMELINE VIEW
# ==============================================================================


def build_timeline(
    report: ProgressReport,
    timezone_name: str | None = None,
) -> list[TimelineEntry]:
    """Group records by the month they were assigned, newest month first.

    Records inside a month are ordered by due date ascending.

    Args:
        report: Built progress report
        timezone_name: Timezone of the calendar month; defaults to the
            timezone the report was built with

    Returns:
        One TimelineEntry per month that has records
    """
    zone = timezone_name or report.timezone
    grouped: dict[str, list[ResolvedRecord]] = defaultdict(list)
    for record in report.records:
        grouped[month_key(record.assignment.assigned_date, zone)].append(record)

    timeline: list[TimelineEntry] = []
    for month in sorted(grouped, reverse=True):
        members = sorted(
            grouped[month],
            key=lambda record: (as_utc(record.due_date), record.assignment_id),
        )
        group = AggregationEngine.build_group(
            GroupKey(GroupAxis.TIMELINE, month), month, members
        )
        timeline.append(
            {
                "month": month,
                "records": [record_to_dict(record) for record in members],
                "stats": stats_to_dict(group),
            }
        )
    return timeline


# ==============================================================================
# ANALYTICS VIEW
# ==============================================================================


def build_analytics(report: ProgressReport) -> AnalyticsView:
    """Build the analytics payload (stats, groups, streaks, badges, insights)."""
    return {
        "overall": overall_to_dict(report.stats),
        "subject_performance": [group_to_dict(group) for group in report.by_subject],
        "weekly_progress": [group_to_dict(group) for group in report.by_week],
        "monthly_trends": [group_to_dict(group) for group in report.by_month],
        "streak_analysis": streak_to_dict(report.streak),
        "badges": [badge_to_dict(badge) for badge in report.badges],
        "badge_progress": [
            badge_progress_to_dict(entry) for entry in report.badge_progress
        ],
        "insights": list(report.insights),
    }


# ==============================================================================
# EXPORT ROWS
# ==============================================================================


def build_export_rows(report: ProgressReport) -> list[ExportRow]:
    """Flatten the report's records into rows for an external renderer.

    Records without an actual submission have empty submission columns.
    """
    rows: list[ExportRow] = []
    for record in report.records:
        assignment = record.assignment
        submission = record.submission
        rows.append(
            {
                "assignment_id": assignment.assignment_id,
                "assigned_date": _iso(assignment.assigned_date),
                "subject_id": assignment.subject_id,
                "subject": assignment.subject_label,
                "title": assignment.title,
                "due_date": _iso(assignment.due_date),
                "status": str(record.status),
                "submitted_at": dt_format(submission.submitted_at) if submission else None,
                "grade": submission.grade if submission else None,
                "feedback": submission.feedback if submission else None,
            }
        )
    return rows


# ==============================================================================
# SERIALIZATION
# ==============================================================================


def report_to_dict(report: ProgressReport) -> dict[str, Any]:
    """Serialize a full report.

    The result is deterministic: the same report always produces the same
    structure, so `json.dumps(..., sort_keys=True)` is byte-identical.
    """
    return {
        "generated_at": _iso(report.generated_at),
        "records": [record_to_dict(record) for record in report.records],
        "stats": overall_to_dict(report.stats),
        "streak": streak_to_dict(report.streak),
        "badges": [badge_to_dict(badge) for badge in report.badges],
        "badge_progress": [
            badge_progress_to_dict(entry) for entry in report.badge_progress
        ],
        "by_subject": [group_to_dict(group) for group in report.by_subject],
        "by_week": [group_to_dict(group) for group in report.by_week],
        "by_month": [group_to_dict(group) for group in report.by_month],
        "insights": list(report.insights),
        "encouragement": list(report.encouragement),
        "timezone": report.timezone,
    }


def record_to_dict(record: ResolvedRecord) -> dict[str, Any]:
    """Serialize one resolved record."""
    assignment = record.assignment
    return {
        "assignment_id": assignment.assignment_id,
        "subject_id": assignment.subject_id,
        "subject": assignment.subject_label,
        "title": assignment.title,
        "assigned_date": _iso(assignment.assigned_date),
        "due_date": _iso(assignment.due_date),
        "total_points": assignment.total_points,
        "status": str(record.status),
        "is_overdue": record.is_overdue,
        "days_until_due": record.days_until_due,
        "submission": _submission_to_dict(record.submission),
    }


def stats_to_dict(stats: GroupStats | OverallStats) -> StatsPayload:
    """Serialize the counts and rates shared by group and overall stats."""
    return {
        "total": stats.total,
        "completed": stats.completed,
        "late": stats.late,
        "missed": stats.missed,
        "pending": stats.pending,
        "completion_rate": stats.completion_rate,
        "on_time_rate": stats.on_time_rate,
    }


def overall_to_dict(overall: OverallStats) -> dict[str, Any]:
    """Serialize overall stats including deadlines and grades."""
    payload: dict[str, Any] = dict(stats_to_dict(overall))
    payload.update(
        {
            "upcoming_count": overall.upcoming_count,
            "average_grade": overall.average_grade,
            "graded_count": overall.graded_count,
        }
    )
    return payload


def group_to_dict(group: GroupStats) -> dict[str, Any]:
    """Serialize one group with its typed key."""
    payload: dict[str, Any] = {
        "axis": str(group.key.axis),
        "key": group.key.value,
        "label": group.label,
    }
    payload.update(stats_to_dict(group))
    return payload


def streak_to_dict(streak: StreakResult) -> dict[str, Any]:
    """Serialize a streak result."""
    return {
        "current_streak": streak.current_streak,
        "longest_streak": streak.longest_streak,
        "streak_history": [
            {"length": run.length, "end_date": _iso(run.end_date)}
            for run in streak.streak_history
        ],
    }


def badge_to_dict(badge: Badge) -> dict[str, Any]:
    """Serialize one badge."""
    return {
        "badge_id": badge.badge_id,
        "title": badge.title,
        "description": badge.description,
        "icon": badge.icon,
        "category": badge.category,
        "earned_at": _iso(badge.earned_at),
    }


def badge_progress_to_dict(entry: BadgeProgress) -> dict[str, Any]:
    """Serialize one badge progress entry."""
    return {
        "badge_id": entry.badge_id,
        "current_value": entry.current_value,
        "threshold": entry.threshold,
        "progress": entry.progress,
        "remaining": entry.remaining,
        "earned": entry.earned,
    }


def _submission_to_dict(submission: Submission | None) -> dict[str, Any] | None:
    if submission is None:
        return None
    return {
        "status": str(submission.status),
        "submitted_at": dt_format(submission.submitted_at),
        "content": submission.content,
        "attachment_count": submission.attachment_count,
        "is_late": submission.is_late,
        "grade": submission.grade,
        "feedback": submission.feedback,
    }


def _iso(value: datetime) -> str:
    """ISO string of a datetime that is always present."""
    return as_utc(value).isoformat()
