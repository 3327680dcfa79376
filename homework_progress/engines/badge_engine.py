"""Badge Engine - Rule-based badge evaluation.

Badges are never stored: every call recomputes the full set from the
resolved records, the streak result and the aggregated statistics.

Rules (one handler per category, evaluated independently):
- subject_mastery: every assignment of a subject COMPLETED on time, with a
  minimum subject size → perfect_<subject_id>
- streak: current streak milestones → streak_5, streak_10 (cumulative)
- completion: completion rate and sample-size guard → completion_90
- early_submission: COMPLETED before the due date, minimum count → early_bird

ARCHITECTURE: Handlers are static methods registered in _RULE_HANDLERS and
receive one pre-computed BadgeContext. They never read the clock and never
aggregate on their own.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from .. import const
from ..models import (
    AggregationResult,
    Badge,
    BadgeProgress,
    HomeworkStatus,
    ResolvedRecord,
    StreakResult,
)
from ..utils.dt_utils import EPOCH, as_utc
from ..utils.math_utils import calculate_progress
from .aggregation_engine import AggregationEngine

if TYPE_CHECKING:
    from ..type_defs import BadgeContext


# =============================================================================
# TYPE ALIASES
# =============================================================================

# Handler function signature: (context) -> badges earned by that rule
RuleHandler = Callable[["BadgeContext"], list[Badge]]

# Streak milestone presentation: badge id → (title, icon)
_STREAK_BADGE_DISPLAY: dict[str, tuple[str, str]] = {
    const.BADGE_ID_STREAK_5: (const.BADGE_TITLE_STREAK_5, const.BADGE_ICON_STREAK_5),
    const.BADGE_ID_STREAK_10: (const.BADGE_TITLE_STREAK_10, const.BADGE_ICON_STREAK_10),
}


# =============================================================================
# BADGE ENGINE
# =============================================================================


class BadgeEngine:
    """Evaluate badge rules against one student's resolved records.

    Holds read-only thresholds only. Results for the same inputs are always
    identical; a badge id appears at most once per call.

    Example:
        engine = BadgeEngine()
        badges = engine.award(records, streak, aggregation, now)
        [badge.badge_id for badge in badges]  # ["perfect_math", "streak_5"]
    """

    # =========================================================================
    # RULE HANDLER REGISTRY
    # =========================================================================

    # Maps badge category to handler function
    _RULE_HANDLERS: dict[str, RuleHandler] = {}

    @classmethod
    def _register_handlers(cls) -> None:
        """Register all rule handlers (idempotent)."""
        if cls._RULE_HANDLERS:
            return  # Already registered

        cls._RULE_HANDLERS = {
            const.BADGE_CATEGORY_SUBJECT_MASTERY: cls._evaluate_subject_mastery,
            const.BADGE_CATEGORY_STREAK: cls._evaluate_streak,
            const.BADGE_CATEGORY_COMPLETION: cls._evaluate_completion,
            const.BADGE_CATEGORY_EARLY_SUBMISSION: cls._evaluate_early_submission,
        }

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        rules: Iterable[str] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Optional overrides (see ProgressConfig)
            rules: Rule categories to evaluate, in order. Defaults to
                const.BADGE_RULE_ORDER. Unknown categories are skipped with a
                warning at evaluation time.
        """
        self._register_handlers()
        self._config: Mapping[str, Any] = config or {}
        self._rules: tuple[str, ...] = (
            tuple(rules) if rules is not None else const.BADGE_RULE_ORDER
        )
        self._mastery_min: int = self._config.get(
            const.CONF_MASTERY_MIN_ASSIGNMENTS, const.DEFAULT_MASTERY_MIN_ASSIGNMENTS
        )
        self._completion_rate: int = self._config.get(
            const.CONF_COMPLETION_BADGE_RATE, const.DEFAULT_COMPLETION_BADGE_RATE
        )
        self._completion_min_total: int = self._config.get(
            const.CONF_COMPLETION_BADGE_MIN_TOTAL,
            const.DEFAULT_COMPLETION_BADGE_MIN_TOTAL,
        )
        self._early_bird_min: int = self._config.get(
            const.CONF_EARLY_BIRD_MIN_COUNT, const.DEFAULT_EARLY_BIRD_MIN_COUNT
        )

    # =========================================================================
    # MAIN EVALUATION METHODS
    # =========================================================================

    def award(
        self,
        records: Iterable[ResolvedRecord],
        streak: StreakResult,
        aggregation: AggregationResult | None = None,
        now: datetime | None = None,
    ) -> tuple[Badge, ...]:
        """Evaluate every registered rule and return the earned badges.

        Args:
            records: Resolved records in any order
            streak: Streak result for the same records
            aggregation: Pre-computed aggregation; computed when omitted
            now: Evaluation instant stamped as earned_at. When omitted, the
                latest actual submission time is used.

        Returns:
            Earned badges in rule order, without duplicate ids
        """
        context = self._build_context(tuple(records), streak, aggregation, now)

        earned: dict[str, Badge] = {}
        for rule in self._rules:
            handler = self._RULE_HANDLERS.get(rule)
            if handler is None:
                const.LOGGER.warning("Unknown badge rule: %s (skipped)", rule)
                continue
            for badge in handler(context):
                earned.setdefault(badge.badge_id, badge)

        return tuple(earned.values())

    def progress(
        self,
        records: Iterable[ResolvedRecord],
        streak: StreakResult,
        aggregation: AggregationResult | None = None,
    ) -> tuple[BadgeProgress, ...]:
        """Report the distance to every threshold badge.

        Covers the streak milestones, completion mastery and early bird.
        Subject mastery has no single threshold and is not included.

        Args:
            records: Resolved records in any order
            streak: Streak result for the same records
            aggregation: Pre-computed aggregation; computed when omitted

        Returns:
            BadgeProgress entries in a fixed order
        """
        context = self._build_context(tuple(records), streak, aggregation, EPOCH)
        overall = context["overall"]

        entries = [
            self._make_progress(
                badge_id,
                current=streak.current_streak,
                threshold=threshold,
                earned=streak.current_streak >= threshold,
            )
            for badge_id, threshold in const.STREAK_MILESTONES
        ]
        entries.append(
            self._make_progress(
                const.BADGE_ID_COMPLETION_90,
                current=overall.completion_rate,
                threshold=self._completion_rate,
                earned=self._completion_earned(context),
            )
        )
        early_count = self._count_early_completions(context["records"])
        entries.append(
            self._make_progress(
                const.BADGE_ID_EARLY_BIRD,
                current=early_count,
                threshold=self._early_bird_min,
                earned=early_count >= self._early_bird_min,
            )
        )
        return tuple(entries)

    # =========================================================================
    # RULE HANDLERS
    # =========================================================================

    @staticmethod
    def _evaluate_subject_mastery(context: BadgeContext) -> list[Badge]:
        """Subjects where every assignment was COMPLETED on time."""
        badges = []
        for group in context["by_subject"]:
            if group.total < context["mastery_min_assignments"]:
                continue
            if group.completed != group.total:
                continue
            badges.append(
                Badge(
                    badge_id=f"{const.BADGE_ID_SUBJECT_PREFIX}{group.key.value}",
                    title=const.BADGE_TITLE_SUBJECT_MASTERY.format(subject=group.label),
                    description=const.BADGE_DESC_SUBJECT_MASTERY.format(
                        subject=group.label
                    ),
                    icon=const.BADGE_ICON_SUBJECT_MASTERY,
                    category=const.BADGE_CATEGORY_SUBJECT_MASTERY,
                    earned_at=context["earned_at"],
                )
            )
        return badges

    @staticmethod
    def _evaluate_streak(context: BadgeContext) -> list[Badge]:
        """Every milestone reached by the current streak."""
        current = context["streak"].current_streak
        badges = []
        for badge_id, threshold in const.STREAK_MILESTONES:
            if current < threshold:
                continue
            title, icon = _STREAK_BADGE_DISPLAY[badge_id]
            badges.append(
                Badge(
                    badge_id=badge_id,
                    title=title,
                    description=const.BADGE_DESC_STREAK.format(streak=current),
                    icon=icon,
                    category=const.BADGE_CATEGORY_STREAK,
                    earned_at=context["earned_at"],
                )
            )
        return badges

    @classmethod
    def _evaluate_completion(cls, context: BadgeContext) -> list[Badge]:
        """High overall completion rate over a large enough sample."""
        if not cls._completion_earned(context):
            return []
        return [
            Badge(
                badge_id=const.BADGE_ID_COMPLETION_90,
                title=const.BADGE_TITLE_COMPLETION_90,
                description=const.BADGE_DESC_COMPLETION.format(
                    rate=context["overall"].completion_rate
                ),
                icon=const.BADGE_ICON_COMPLETION_90,
                category=const.BADGE_CATEGORY_COMPLETION,
                earned_at=context["earned_at"],
            )
        ]

    @classmethod
    def _evaluate_early_submission(cls, context: BadgeContext) -> list[Badge]:
        """Enough on-time submissions handed in before the due instant."""
        count = cls._count_early_completions(context["records"])
        if count < context["early_bird_min_count"]:
            return []
        return [
            Badge(
                badge_id=const.BADGE_ID_EARLY_BIRD,
                title=const.BADGE_TITLE_EARLY_BIRD,
                description=const.BADGE_DESC_EARLY_BIRD.format(count=count),
                icon=const.BADGE_ICON_EARLY_BIRD,
                category=const.BADGE_CATEGORY_EARLY_SUBMISSION,
                earned_at=context["earned_at"],
            )
        ]

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _build_context(
        self,
        records: tuple[ResolvedRecord, ...],
        streak: StreakResult,
        aggregation: AggregationResult | None,
        now: datetime | None,
    ) -> BadgeContext:
        if aggregation is None:
            aggregation = AggregationEngine(self._config).aggregate(records)
        return {
            "records": records,
            "streak": streak,
            "overall": aggregation.overall,
            "by_subject": aggregation.by_subject,
            "earned_at": now if now is not None else self._latest_submission(records),
            "mastery_min_assignments": self._mastery_min,
            "completion_badge_rate": self._completion_rate,
            "completion_badge_min_total": self._completion_min_total,
            "early_bird_min_count": self._early_bird_min,
        }

    @staticmethod
    def _completion_earned(context: BadgeContext) -> bool:
        overall = context["overall"]
        return (
            overall.completion_rate >= context["completion_badge_rate"]
            and overall.total >= context["completion_badge_min_total"]
        )

    @staticmethod
    def _count_early_completions(records: Iterable[ResolvedRecord]) -> int:
        count = 0
        for record in records:
            if record.status != HomeworkStatus.COMPLETED or record.submission is None:
                continue
            submitted_at = record.submission.submitted_at
            if submitted_at is not None and as_utc(submitted_at) < as_utc(
                record.due_date
            ):
                count += 1
        return count

    @staticmethod
    def _latest_submission(records: Iterable[ResolvedRecord]) -> datetime:
        times = [
            as_utc(record.submission.submitted_at)
            for record in records
            if record.submission is not None
            and record.submission.submitted_at is not None
        ]
        return max(times, default=EPOCH)

    @staticmethod
    def _make_progress(
        badge_id: str, *, current: int, threshold: int, earned: bool
    ) -> BadgeProgress:
        return BadgeProgress(
            badge_id=badge_id,
            current_value=current,
            threshold=threshold,
            progress=calculate_progress(current, threshold),
            remaining=max(threshold - current, 0),
            earned=earned,
        )
