"""Status Resolver - Pure derivation of a homework lifecycle status.

Turns one (assignment, submission, now) triple into exactly one of
PENDING / COMPLETED / LATE / MISSED plus the overdue flag and the signed
day distance to the due date.

ARCHITECTURE: Stateless static methods. The evaluation instant is always an
argument; this module never reads the clock.

Actual-submission guard:
    Upstream stores placeholder submission rows (status tag set, epoch
    timestamp, no content). A row only counts as handed in when ALL hold:
    - status tag is not NOT_SUBMITTED
    - submitted_at is present and strictly after the Unix epoch
    - content is non-empty OR at least one attachment exists
"""

from __future__ import annotations

from datetime import datetime

from ..models import (
    Assignment,
    HomeworkStatus,
    ResolvedRecord,
    StatusResolution,
    Submission,
    SubmissionStatus,
)
from ..utils.dt_utils import as_utc, days_until, is_after_epoch


class StatusResolver:
    """Derive the lifecycle status of an assignment at a given instant."""

    @staticmethod
    def has_actual_submission(submission: Submission | None) -> bool:
        """Return True when a stored submission row is a real hand-in.

        Args:
            submission: Stored row, or None when the student has none

        Returns:
            True only when the row passes every condition of the guard
        """
        if submission is None:
            return False
        if submission.status == SubmissionStatus.NOT_SUBMITTED:
            return False
        if not is_after_epoch(submission.submitted_at):
            return False
        return bool(submission.content) or submission.attachment_count >= 1

    @classmethod
    def resolve(
        cls,
        assignment: Assignment,
        submission: Submission | None,
        now: datetime,
    ) -> StatusResolution:
        """Compute status fields for one assignment.

        Pure and total: the same inputs always produce the same result and
        no combination of inputs raises.

        Args:
            assignment: Assignment definition (only due_date is read)
            submission: Stored submission row or None
            now: Evaluation instant; naive values are taken as UTC

        Returns:
            StatusResolution with status, is_overdue, days_until_due
        """
        due = as_utc(assignment.due_date)
        current = as_utc(now)
        is_overdue = current > due
        actual = cls.has_actual_submission(submission)

        if actual and submission is not None:
            status = HomeworkStatus.LATE if submission.is_late else HomeworkStatus.COMPLETED
        elif is_overdue:
            status = HomeworkStatus.MISSED
        else:
            status = HomeworkStatus.PENDING

        return StatusResolution(
            status=status,
            is_overdue=is_overdue,
            days_until_due=days_until(due, current),
            has_actual_submission=actual,
        )

    @classmethod
    def resolve_record(
        cls,
        assignment: Assignment,
        submission: Submission | None,
        now: datetime,
    ) -> ResolvedRecord:
        """Resolve an assignment and compose it with its actual submission."""
        resolution = cls.resolve(assignment, submission, now)
        return ResolvedRecord(
            assignment=assignment,
            submission=submission if resolution.has_actual_submission else None,
            status=resolution.status,
            is_overdue=resolution.is_overdue,
            days_until_due=resolution.days_until_due,
        )
