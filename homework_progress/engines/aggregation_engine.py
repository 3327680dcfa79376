"""Aggregation Engine - Multi-axis counts and rates over resolved records.

Produces one AggregationResult holding:
    - overall: counts, completion/on-time rates, upcoming deadlines, grades
    - by_subject: one group per subject, best completion rate first
    - by_week: "YYYY-Www" groups of the due date, most recent N, ascending
    - by_month: "YYYY-MM" groups of the due date, all, ascending

Rate definitions (integer percent, halves round up, 0 on empty scope):
    completion_rate = (completed + late) / total
    on_time_rate    = completed / (completed + late)

Grouping dates are calendar dates in the configured timezone.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import datetime
from typing import TYPE_CHECKING, Any

from .. import const
from ..models import (
    AggregationResult,
    GroupAxis,
    GroupKey,
    GroupStats,
    HomeworkStatus,
    OverallStats,
    ResolvedRecord,
)
from ..utils.dt_utils import days_until, month_key, week_key
from ..utils.math_utils import calculate_rate, round_half_up

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping


class AggregationEngine:
    """Group resolved records and compute their statistics.

    Holds read-only configuration only; every call is independent.

    Example:
        engine = AggregationEngine({"timezone": "Asia/Tashkent"})
        result = engine.aggregate(records)
        result.overall.completion_rate  # 83
    """

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        """Initialize with optional overrides (see ProgressConfig)."""
        config = config or {}
        self._timezone: str = config.get(const.CONF_TIMEZONE, const.DEFAULT_TIMEZONE)
        self._upcoming_window: int = config.get(
            const.CONF_UPCOMING_WINDOW_DAYS, const.DEFAULT_UPCOMING_WINDOW_DAYS
        )
        self._week_limit: int = config.get(
            const.CONF_WEEK_HISTORY_LIMIT, const.DEFAULT_WEEK_HISTORY_LIMIT
        )

    # ────────────────────────────────────────────────────────────────
    # Public API
    # ────────────────────────────────────────────────────────────────

    def aggregate(
        self,
        records: Iterable[ResolvedRecord],
        now: datetime | None = None,
    ) -> AggregationResult:
        """Aggregate records along every axis.

        Args:
            records: Resolved records in any order
            now: Optional instant for the upcoming-deadline window. When
                omitted, each record's own days_until_due is used.

        Returns:
            AggregationResult; empty input yields zeroed overall stats and
            empty groups
        """
        # Stable base order so group labels never depend on input order
        ordered = sorted(records, key=lambda record: record.assignment_id)

        return AggregationResult(
            overall=self.compute_overall(ordered, now),
            by_subject=self._by_subject(ordered),
            by_week=self._by_period(
                ordered,
                GroupAxis.WEEK,
                lambda record: week_key(record.due_date, self._timezone),
                limit=self._week_limit,
            ),
            by_month=self._by_period(
                ordered,
                GroupAxis.MONTH,
                lambda record: month_key(record.due_date, self._timezone),
            ),
        )

    def compute_overall(
        self,
        records: Iterable[ResolvedRecord],
        now: datetime | None = None,
    ) -> OverallStats:
        """Compute counts, rates, upcoming deadlines and grade summary."""
        records = list(records)
        counts = Counter(record.status for record in records)
        completed = counts[HomeworkStatus.COMPLETED]
        late = counts[HomeworkStatus.LATE]

        grades = [
            record.submission.grade
            for record in records
            if record.submission is not None and record.submission.grade is not None
        ]
        average_grade = round_half_up(sum(grades) / len(grades)) if grades else 0

        return OverallStats(
            total=len(records),
            completed=completed,
            late=late,
            missed=counts[HomeworkStatus.MISSED],
            pending=counts[HomeworkStatus.PENDING],
            completion_rate=calculate_rate(completed + late, len(records)),
            on_time_rate=calculate_rate(completed, completed + late),
            upcoming_count=sum(
                1 for record in records if self._is_upcoming(record, now)
            ),
            average_grade=average_grade,
            graded_count=len(grades),
        )

    @staticmethod
    def build_group(
        key: GroupKey,
        label: str,
        records: Iterable[ResolvedRecord],
    ) -> GroupStats:
        """Build GroupStats for one set of records.

        Args:
            key: Typed group key
            label: Display label (subject name or period key)
            records: Records belonging to the group

        Returns:
            GroupStats with counts and both rates
        """
        counts = Counter(record.status for record in records)
        total = sum(counts.values())
        completed = counts[HomeworkStatus.COMPLETED]
        late = counts[HomeworkStatus.LATE]
        return GroupStats(
            key=key,
            label=label,
            total=total,
            completed=completed,
            late=late,
            missed=counts[HomeworkStatus.MISSED],
            pending=counts[HomeworkStatus.PENDING],
            completion_rate=calculate_rate(completed + late, total),
            on_time_rate=calculate_rate(completed, completed + late),
        )

    # ────────────────────────────────────────────────────────────────
    # Grouping
    # ────────────────────────────────────────────────────────────────

    def _by_subject(self, records: list[ResolvedRecord]) -> tuple[GroupStats, ...]:
        grouped: dict[str, list[ResolvedRecord]] = defaultdict(list)
        for record in records:
            grouped[record.subject_id].append(record)

        groups = [
            self.build_group(
                GroupKey(GroupAxis.SUBJECT, subject_id),
                members[0].assignment.subject_label,
                members,
            )
            for subject_id, members in grouped.items()
        ]
        groups.sort(key=lambda group: (-group.completion_rate, group.key.value))
        return tuple(groups)

    def _by_period(
        self,
        records: list[ResolvedRecord],
        axis: GroupAxis,
        key_func: Callable[[ResolvedRecord], str],
        limit: int | None = None,
    ) -> tuple[GroupStats, ...]:
        grouped: dict[str, list[ResolvedRecord]] = defaultdict(list)
        for record in records:
            grouped[key_func(record)].append(record)

        # Period keys sort chronologically as strings
        keys = sorted(grouped)
        if limit is not None:
            keys = keys[-limit:] if limit > 0 else []

        return tuple(
            self.build_group(GroupKey(axis, period), period, grouped[period])
            for period in keys
        )

    def _is_upcoming(self, record: ResolvedRecord, now: datetime | None) -> bool:
        if record.status != HomeworkStatus.PENDING:
            return False
        remaining = (
            days_until(record.due_date, now) if now is not None else record.days_until_due
        )
        return 0 <= remaining <= self._upcoming_window
