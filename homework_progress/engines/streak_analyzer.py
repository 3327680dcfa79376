"""Streak Analyzer - Consecutive on-time submission tracking.

Only handed-in records take part: COMPLETED continues a run, LATE breaks it.
PENDING and MISSED records are dropped before the scan, so an assignment the
student has not handed in yet neither extends nor breaks a streak.

Ordering:
    Records are ordered by due date; equal due dates fall back to the
    assignment id so the result never depends on input order.

Outputs:
    - current_streak: COMPLETED run counted back from the most recent due date
    - longest_streak: Longest COMPLETED run anywhere in the history
    - streak_history: Every maximal run (trailing run included), longest
      first, capped at the configured limit
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import const
from ..models import HomeworkStatus, ResolvedRecord, StreakResult, StreakRun
from ..utils.dt_utils import as_utc

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

_STREAK_STATUSES = frozenset({HomeworkStatus.COMPLETED, HomeworkStatus.LATE})


class StreakAnalyzer:
    """Compute current, longest and historical streaks.

    Example:
        analyzer = StreakAnalyzer()
        result = analyzer.analyze(records)
        result.current_streak  # 3
    """

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        """Initialize with optional overrides (see ProgressConfig)."""
        config = config or {}
        self._history_limit: int = config.get(
            const.CONF_STREAK_HISTORY_LIMIT, const.DEFAULT_STREAK_HISTORY_LIMIT
        )

    def analyze(self, records: Iterable[ResolvedRecord]) -> StreakResult:
        """Analyze streaks over a set of resolved records.

        Args:
            records: Resolved records in any order

        Returns:
            StreakResult; all zeros and an empty history when nothing was
            handed in
        """
        ordered = self.chronological(records)
        if not ordered:
            return StreakResult()

        runs = self._collect_runs(ordered)
        longest = max((run.length for run in runs), default=0)
        # sorted() is stable, so equal lengths stay in chronological order
        history = sorted(runs, key=lambda run: run.length, reverse=True)

        return StreakResult(
            current_streak=self._current_streak(ordered),
            longest_streak=longest,
            streak_history=tuple(history[: self._history_limit]),
        )

    @staticmethod
    def chronological(records: Iterable[ResolvedRecord]) -> list[ResolvedRecord]:
        """Return the handed-in records sorted by (due date, assignment id)."""
        return sorted(
            (record for record in records if record.status in _STREAK_STATUSES),
            key=lambda record: (as_utc(record.due_date), record.assignment_id),
        )

    @staticmethod
    def _current_streak(ordered: list[ResolvedRecord]) -> int:
        streak = 0
        for record in reversed(ordered):
            if record.status != HomeworkStatus.COMPLETED:
                break
            streak += 1
        return streak

    @staticmethod
    def _collect_runs(ordered: list[ResolvedRecord]) -> list[StreakRun]:
        runs: list[StreakRun] = []
        length = 0
        last: ResolvedRecord | None = None

        for record in ordered:
            if record.status == HomeworkStatus.COMPLETED:
                length += 1
                last = record
                continue
            if length and last is not None:
                runs.append(StreakRun(length=length, end_date=last.due_date))
            length = 0

        # Trailing run
        if length and last is not None:
            runs.append(StreakRun(length=length, end_date=last.due_date))

        return runs
