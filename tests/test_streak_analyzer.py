"""Unit tests for StreakAnalyzer - pure Python logic tests.

Test Categories:
- Current streak (counted back from the most recent due date)
- Longest streak (chronological scan)
- Streak history (maximal runs, trailing run, limit)
- Filtering of PENDING / MISSED records
- Determinism (input order, equal due dates)
"""

from __future__ import annotations

import random

from homework_progress.engines.streak_analyzer import StreakAnalyzer
from homework_progress.models import HomeworkStatus, StreakResult
from tests.helpers import days_from_now, make_record, make_series

C = HomeworkStatus.COMPLETED
L = HomeworkStatus.LATE
M = HomeworkStatus.MISSED
P = HomeworkStatus.PENDING


# =============================================================================
# Test: Current and longest streak
# =============================================================================


class TestStreakCounts:
    """Tests for current_streak and longest_streak."""

    def test_empty_input(self) -> None:
        """No records → zeroed result."""
        assert StreakAnalyzer().analyze([]) == StreakResult()

    def test_all_completed(self) -> None:
        """Every on-time submission extends both streaks."""
        result = StreakAnalyzer().analyze(make_series([C] * 12))

        assert result.current_streak == 12
        assert result.longest_streak == 12

    def test_most_recent_late_resets_current(self) -> None:
        """Nine on-time then one LATE → current 0, longest 9."""
        result = StreakAnalyzer().analyze(make_series([C] * 9 + [L]))

        assert result.current_streak == 0
        assert result.longest_streak == 9

    def test_current_counts_back_to_last_late(self) -> None:
        """Only the run after the most recent LATE is current."""
        result = StreakAnalyzer().analyze(make_series([C, C, C, C, L, C, C]))

        assert result.current_streak == 2
        assert result.longest_streak == 4

    def test_only_late(self) -> None:
        """LATE submissions never build a streak."""
        result = StreakAnalyzer().analyze(make_series([L, L, L]))

        assert result.current_streak == 0
        assert result.longest_streak == 0
        assert result.streak_history == ()

    def test_current_never_exceeds_longest(self) -> None:
        """current_streak <= longest_streak for arbitrary sequences."""
        rng = random.Random(7)
        for _ in range(50):
            statuses = [rng.choice([C, L, M, P]) for _ in range(rng.randint(0, 20))]
            result = StreakAnalyzer().analyze(make_series(statuses))
            assert result.current_streak <= result.longest_streak


# =============================================================================
# Test: PENDING / MISSED filtering
# =============================================================================


class TestNonSubmittedRecords:
    """PENDING and MISSED records do not take part in streaks."""

    def test_missed_between_completed_does_not_break(self) -> None:
        """A MISSED record is dropped before the scan."""
        result = StreakAnalyzer().analyze(make_series([C, C, M, C]))

        assert result.current_streak == 3
        assert result.longest_streak == 3

    def test_pending_after_completed_does_not_reset(self) -> None:
        """Upcoming homework does not zero the current streak."""
        records = make_series([C, C, C])
        records.append(make_record("hw-next", P, due=days_from_now(2)))

        result = StreakAnalyzer().analyze(records)

        assert result.current_streak == 3

    def test_only_unsubmitted_records(self) -> None:
        """Nothing handed in → empty result."""
        assert StreakAnalyzer().analyze(make_series([M, P, M])) == StreakResult()


# =============================================================================
# Test: Streak history
# =============================================================================


class TestStreakHistory:
    """Tests for streak_history."""

    def test_runs_longest_first_with_trailing_run(self) -> None:
        """Every maximal run is listed, including the one still going."""
        records = make_series([C, C, L, C, C, C, L, C])

        result = StreakAnalyzer().analyze(records)

        assert [run.length for run in result.streak_history] == [3, 2, 1]
        # end_date is the due date of the last record in the run
        assert result.streak_history[0].end_date == records[5].due_date
        assert result.streak_history[2].end_date == records[7].due_date

    def test_equal_lengths_keep_chronological_order(self) -> None:
        """Stable sort: earlier runs of equal length come first."""
        records = make_series([C, C, L, C, C])

        result = StreakAnalyzer().analyze(records)

        assert [run.end_date for run in result.streak_history] == [
            records[1].due_date,
            records[4].due_date,
        ]

    def test_history_keeps_five_longest(self) -> None:
        """Only the five longest runs are kept by default."""
        statuses = [C, L, C, C, L, C, C, C, L, C, L, C, C, C, C, L, C, C, L, C]
        result = StreakAnalyzer().analyze(make_series(statuses))

        assert [run.length for run in result.streak_history] == [4, 3, 2, 2, 1]

    def test_history_limit_is_configurable(self) -> None:
        """streak_history_limit overrides the default of five."""
        analyzer = StreakAnalyzer({"streak_history_limit": 1})

        result = analyzer.analyze(make_series([C, L, C, C]))

        assert [run.length for run in result.streak_history] == [2]


# =============================================================================
# Test: Determinism
# =============================================================================


class TestDeterminism:
    """Results never depend on input order."""

    def test_shuffled_input_same_result(self) -> None:
        """Any permutation of the same records gives the same result."""
        records = make_series([C, C, L, C, M, C, C, C, L, C])
        expected = StreakAnalyzer().analyze(records)

        shuffled = list(records)
        random.Random(3).shuffle(shuffled)

        assert StreakAnalyzer().analyze(shuffled) == expected

    def test_equal_due_dates_ordered_by_id(self) -> None:
        """Same due date: the higher assignment id is the more recent one."""
        due = days_from_now(-1)
        completed = make_record("hw-a", C, due=due)
        late = make_record("hw-b", L, due=due)

        forward = StreakAnalyzer().analyze([completed, late])
        backward = StreakAnalyzer().analyze([late, completed])

        assert forward == backward
        assert forward.current_streak == 0
        assert forward.longest_streak == 1
