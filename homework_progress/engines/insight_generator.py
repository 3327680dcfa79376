"""Insight Generator - Advisory messages derived from statistics.

Two message sets, both ordered and deterministic:

generate() → insights shown on the analytics view
    1. completion tier (>= 95 / >= 85 / >= 70 / below)
    2. punctuality (>= 90 praise, < 70 recommendation; needs a submission)
    3. upcoming deadlines (> 3 plan ahead, > 0 coming up)
    4. streak (>= 5 strong, >= 2 building)
    5. weakest subject below 70, then top subject at or above 90

encourage() → short motivational lines for the student dashboard,
with a default line when nothing else applies.

An empty record set yields only the "no assignments yet" insight.
"""

from __future__ import annotations

from collections.abc import Sequence

from .. import const
from ..models import GroupStats, OverallStats, StreakResult


class InsightGenerator:
    """Produce insight and encouragement strings. All methods are static."""

    @staticmethod
    def generate(
        overall: OverallStats,
        streak: StreakResult,
        upcoming_count: int,
        by_subject: Sequence[GroupStats] = (),
    ) -> tuple[str, ...]:
        """Return the ordered insight messages.

        Args:
            overall: Overall statistics of the report
            streak: Streak result of the report
            upcoming_count: PENDING records due within the upcoming window
            by_subject: Subject groups, best completion rate first

        Returns:
            Tuple of messages; never empty
        """
        if overall.total == 0:
            return (const.MSG_NO_ASSIGNMENTS,)

        insights: list[str] = []

        # Completion tier
        rate = overall.completion_rate
        if rate >= const.INSIGHT_COMPLETION_OUTSTANDING:
            insights.append(const.MSG_COMPLETION_OUTSTANDING)
        elif rate >= const.INSIGHT_COMPLETION_GREAT:
            insights.append(const.MSG_COMPLETION_GREAT)
        elif rate >= const.INSIGHT_COMPLETION_GOOD:
            insights.append(const.MSG_COMPLETION_GOOD)
        else:
            insights.append(const.MSG_COMPLETION_LOW)

        # Punctuality: an empty on-time scope is not a punctuality problem
        if overall.submitted > 0:
            if overall.on_time_rate >= const.INSIGHT_ON_TIME_EXCELLENT:
                insights.append(const.MSG_ON_TIME_EXCELLENT)
            elif overall.on_time_rate < const.INSIGHT_ON_TIME_POOR:
                insights.append(const.MSG_ON_TIME_POOR)

        # Deadlines
        if upcoming_count > const.INSIGHT_UPCOMING_BUSY:
            insights.append(const.MSG_UPCOMING_BUSY.format(count=upcoming_count))
        elif upcoming_count > 0:
            insights.append(const.MSG_UPCOMING_SOME.format(count=upcoming_count))

        # Streak
        current = streak.current_streak
        if current >= const.INSIGHT_STREAK_STRONG:
            insights.append(const.MSG_STREAK_STRONG.format(streak=current))
        elif current >= const.INSIGHT_STREAK_BUILDING:
            insights.append(const.MSG_STREAK_BUILDING.format(streak=current))

        # Subjects
        weakest = next(
            (
                group
                for group in by_subject
                if group.completion_rate < const.INSIGHT_SUBJECT_WEAK
            ),
            None,
        )
        if weakest is not None:
            insights.append(
                const.MSG_SUBJECT_FOCUS.format(
                    subject=weakest.label, rate=weakest.completion_rate
                )
            )
        if by_subject and by_subject[0].completion_rate >= const.INSIGHT_SUBJECT_STRONG:
            insights.append(const.MSG_SUBJECT_EXCELLING.format(subject=by_subject[0].label))

        return tuple(insights)

    @staticmethod
    def encourage(
        overall: OverallStats,
        streak: StreakResult,
        upcoming_count: int,
    ) -> tuple[str, ...]:
        """Return encouragement lines, falling back to a default line."""
        lines: list[str] = []

        current = streak.current_streak
        if current >= const.INSIGHT_STREAK_STRONG:
            lines.append(const.MSG_ENCOURAGE_STREAK_STRONG.format(streak=current))
        elif current >= const.INSIGHT_STREAK_BUILDING:
            lines.append(const.MSG_ENCOURAGE_STREAK_BUILDING.format(streak=current))

        rate = overall.completion_rate
        if rate >= const.ENCOURAGE_COMPLETION_OUTSTANDING:
            lines.append(const.MSG_ENCOURAGE_COMPLETION_OUTSTANDING.format(rate=rate))
        elif rate >= const.ENCOURAGE_COMPLETION_GOOD:
            lines.append(const.MSG_ENCOURAGE_COMPLETION_GOOD.format(rate=rate))

        if upcoming_count > 0:
            lines.append(const.MSG_ENCOURAGE_UPCOMING.format(count=upcoming_count))

        if overall.on_time_rate >= const.INSIGHT_ON_TIME_EXCELLENT:
            lines.append(const.MSG_ENCOURAGE_ON_TIME.format(rate=overall.on_time_rate))

        if not lines:
            lines.append(const.MSG_ENCOURAGE_DEFAULT)

        return tuple(lines)
