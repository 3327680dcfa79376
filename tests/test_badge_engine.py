"""Unit tests for BadgeEngine - pure Python logic tests.

Test Categories:
- Subject mastery rule
- Streak milestone rule (including monotonicity)
- Completion mastery rule (sample-size guard)
- Early-submission rule
- Registry behaviour (order, duplicates, unknown rules)
- Badge progress
"""

from __future__ import annotations

from datetime import timedelta
import logging

import pytest

from homework_progress import const
from homework_progress.engines.badge_engine import BadgeEngine
from homework_progress.engines.streak_analyzer import StreakAnalyzer
from homework_progress.models import HomeworkStatus, StreakResult
from tests.helpers import NOW, days_from_now, make_record, make_series

C = HomeworkStatus.COMPLETED
L = HomeworkStatus.LATE
M = HomeworkStatus.MISSED


def award_ids(records, *, engine: BadgeEngine | None = None) -> list[str]:
    """Badge ids earned for records with their real streak."""
    engine = engine or BadgeEngine()
    streak = StreakAnalyzer().analyze(records)
    return [badge.badge_id for badge in engine.award(records, streak, now=NOW)]


# =============================================================================
# Test: Subject mastery
# =============================================================================


class TestSubjectMastery:
    """Tests for perfect_<subject> badges."""

    def test_all_completed_subject_earns_badge(self) -> None:
        """Six COMPLETED in one subject → mastery for that subject."""
        records = make_series([C] * 6, subject_id="x", prefix="x")

        assert "perfect_x" in award_ids(records)

    def test_missed_assignments_block_mastery(self) -> None:
        """Two COMPLETED and two MISSED → no mastery."""
        records = make_series([C, C, M, M], subject_id="y", prefix="y")

        assert "perfect_y" not in award_ids(records)

    def test_late_blocks_mastery(self) -> None:
        """Mastery counts on-time submissions only."""
        records = make_series([C, C, C, C, L], subject_id="x", prefix="x")

        assert "perfect_x" not in award_ids(records)

    def test_minimum_subject_size(self) -> None:
        """Four perfect assignments are not enough."""
        records = make_series([C] * 4, subject_id="x", prefix="x")

        assert "perfect_x" not in award_ids(records)

    def test_badge_uses_subject_label(self) -> None:
        """Title and description use the subject's display name."""
        records = [
            make_record(
                f"hw-{index}",
                C,
                due=days_from_now(-index - 1),
                subject_id="math",
                subject_name="Mathematics",
            )
            for index in range(5)
        ]
        streak = StreakAnalyzer().analyze(records)

        badges = BadgeEngine().award(records, streak, now=NOW)

        mastery = next(badge for badge in badges if badge.badge_id == "perfect_math")
        assert mastery.title == "Mathematics Champion"
        assert mastery.category == const.BADGE_CATEGORY_SUBJECT_MASTERY
        assert mastery.earned_at == NOW


# =============================================================================
# Test: Streak milestones
# =============================================================================


class TestStreakMilestones:
    """Tests for streak_5 / streak_10."""

    @pytest.mark.parametrize(
        ("current", "expected"),
        [
            (4, []),
            (5, ["streak_5"]),
            (9, ["streak_5"]),
            (10, ["streak_5", "streak_10"]),
        ],
    )
    def test_thresholds(self, current: int, expected: list[str]) -> None:
        """Both tiers can be held at once."""
        engine = BadgeEngine(rules=[const.BADGE_CATEGORY_STREAK])
        streak = StreakResult(current_streak=current, longest_streak=current)

        badges = engine.award([], streak, now=NOW)

        assert [badge.badge_id for badge in badges] == expected

    def test_description_uses_current_streak(self) -> None:
        """The description states the streak actually reached."""
        engine = BadgeEngine(rules=[const.BADGE_CATEGORY_STREAK])

        badges = engine.award([], StreakResult(7, 7), now=NOW)

        assert badges[0].description == "7 homework submitted on time in a row"

    def test_monotonic_in_current_streak(self) -> None:
        """A longer current streak never loses a streak badge."""
        engine = BadgeEngine(rules=[const.BADGE_CATEGORY_STREAK])
        previous: set[str] = set()
        for current in range(0, 15):
            earned = {
                badge.badge_id
                for badge in engine.award([], StreakResult(current, current), now=NOW)
            }
            assert previous <= earned
            previous = earned


# =============================================================================
# Test: Completion mastery
# =============================================================================


class TestCompletionMastery:
    """Tests for completion_90."""

    def test_ten_records_at_ninety_percent(self) -> None:
        """9 of 10 handed in → 90% → badge."""
        records = make_series([C] * 9 + [M])

        assert "completion_90" in award_ids(records)

    def test_description_uses_actual_rate(self) -> None:
        """19 of 20 handed in → the badge states 95%, not the threshold."""
        records = make_series([C] * 19 + [M])
        engine = BadgeEngine(rules=[const.BADGE_CATEGORY_COMPLETION])

        (badge,) = engine.award(records, StreakAnalyzer().analyze(records), now=NOW)

        assert badge.badge_id == "completion_90"
        assert badge.description == "95% completion rate"

    def test_late_submissions_count_toward_completion(self) -> None:
        """LATE submissions are still completions."""
        records = make_series([L] * 10)

        assert "completion_90" in award_ids(records)

    def test_sample_size_guard(self) -> None:
        """Nine perfect records are not enough."""
        records = make_series([C] * 9)

        assert "completion_90" not in award_ids(records)

    def test_below_rate(self) -> None:
        """8 of 10 → 80% → no badge."""
        records = make_series([C] * 8 + [M, M])

        assert "completion_90" not in award_ids(records)


# =============================================================================
# Test: Early submissions
# =============================================================================


class TestEarlyBird:
    """Tests for early_bird."""

    def _early_records(self, count: int, *, offset: timedelta) -> list:
        return [
            make_record(
                f"hw-{index}",
                C,
                due=days_from_now(-index - 1),
                submitted_at=days_from_now(-index - 1) + offset,
            )
            for index in range(count)
        ]

    def test_five_early_completions(self) -> None:
        """Five COMPLETED before the deadline → badge."""
        records = self._early_records(5, offset=timedelta(hours=-1))

        assert "early_bird" in award_ids(records)

    def test_submitted_exactly_at_due_is_not_early(self) -> None:
        """Strictly before the due instant only."""
        records = self._early_records(5, offset=timedelta(0))

        assert "early_bird" not in award_ids(records)

    def test_late_records_are_not_early(self) -> None:
        """LATE records never count, whatever their timestamp."""
        records = [
            make_record(
                f"hw-{index}",
                L,
                due=days_from_now(-index - 1),
                submitted_at=days_from_now(-index - 2),
            )
            for index in range(6)
        ]

        assert "early_bird" not in award_ids(records)


# =============================================================================
# Test: Registry behaviour
# =============================================================================


class TestAwardBehaviour:
    """Tests for ordering, duplicates, unknown rules and earned_at."""

    def test_perfect_record_earns_every_rule(self) -> None:
        """Twelve on-time, early submissions earn every badge in rule order."""
        records = make_series([C] * 12)

        assert award_ids(records) == [
            "perfect_math",
            "streak_5",
            "streak_10",
            "completion_90",
            "early_bird",
        ]

    def test_no_records_no_badges(self) -> None:
        """Nothing to evaluate → nothing earned."""
        assert BadgeEngine().award([], StreakResult(), now=NOW) == ()

    def test_duplicate_rules_do_not_duplicate_badges(self) -> None:
        """A badge id appears at most once per call."""
        engine = BadgeEngine(
            rules=[const.BADGE_CATEGORY_STREAK, const.BADGE_CATEGORY_STREAK]
        )

        badges = engine.award([], StreakResult(5, 5), now=NOW)

        assert [badge.badge_id for badge in badges] == ["streak_5"]

    def test_unknown_rule_is_skipped_with_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unknown rule ids are logged and ignored."""
        engine = BadgeEngine(rules=["attendance", const.BADGE_CATEGORY_STREAK])

        with caplog.at_level(logging.WARNING, logger="homework_progress"):
            badges = engine.award([], StreakResult(5, 5), now=NOW)

        assert [badge.badge_id for badge in badges] == ["streak_5"]
        assert "Unknown badge rule: attendance" in caplog.text

    def test_earned_at_defaults_to_latest_submission(self) -> None:
        """Without now, badges are stamped with the latest hand-in."""
        records = make_series([C] * 5)
        latest = max(record.submission.submitted_at for record in records)

        badges = BadgeEngine().award(records, StreakAnalyzer().analyze(records))

        assert badges
        assert {badge.earned_at for badge in badges} == {latest}

    def test_recomputed_from_scratch(self) -> None:
        """The same inputs always give the same badges."""
        records = make_series([C] * 10)
        streak = StreakAnalyzer().analyze(records)
        engine = BadgeEngine()

        assert engine.award(records, streak, now=NOW) == engine.award(
            records, streak, now=NOW
        )


# =============================================================================
# Test: Badge progress
# =============================================================================


class TestBadgeProgress:
    """Tests for BadgeEngine.progress()."""

    def test_progress_entries(self) -> None:
        """Three on-time records: distance to every threshold badge."""
        records = make_series([C, C, C])
        streak = StreakAnalyzer().analyze(records)

        entries = {
            entry.badge_id: entry for entry in BadgeEngine().progress(records, streak)
        }

        assert list(entries) == ["streak_5", "streak_10", "completion_90", "early_bird"]
        assert entries["streak_5"].current_value == 3
        assert entries["streak_5"].remaining == 2
        assert entries["streak_5"].progress == pytest.approx(0.6)
        assert entries["streak_10"].remaining == 7
        assert entries["early_bird"].current_value == 3
        assert entries["early_bird"].earned is False

    def test_completion_progress_requires_sample_size(self) -> None:
        """100% over three records is at threshold but not earned."""
        records = make_series([C, C, C])
        streak = StreakAnalyzer().analyze(records)

        entry = next(
            entry
            for entry in BadgeEngine().progress(records, streak)
            if entry.badge_id == "completion_90"
        )

        assert entry.current_value == 100
        assert entry.progress == 1.0
        assert entry.remaining == 0
        assert entry.earned is False

    def test_progress_capped(self) -> None:
        """Beyond the threshold progress stays at 1.0."""
        records = make_series([C] * 12)
        streak = StreakAnalyzer().analyze(records)

        entries = BadgeEngine().progress(records, streak)

        assert all(entry.progress <= 1.0 for entry in entries)
        assert all(entry.earned for entry in entries)
