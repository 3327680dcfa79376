"""Input validation and snapshot building.

This module is the SINGLE SOURCE OF TRUTH for:
- Engine configuration defaults and validation
- Raw assignment / submission row validation
- Conversion of raw rows into the immutable input snapshot

### Build Functions
- `build_progress_config()` - Validated ProgressConfig with defaults filled in
- `build_assignment()` / `build_submission()` - One typed record per raw row
- `build_submission_lookup()` - Submission rows keyed by assignment id

Raw rows are plain mappings with the DATA_* keys from const.py, as returned by
a database query or a JSON payload. Timestamps may be ISO 8601 strings,
date/datetime objects or epoch milliseconds (0 is kept as the epoch
placeholder so the actual-submission guard can reject it).

All schemas use voluptuous. Any schema failure is re-raised as
RecordValidationError naming the offending field.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, cast
from zoneinfo import ZoneInfoNotFoundError

import voluptuous as vol

from . import const
from .models import Assignment, Submission, SubmissionStatus
from .type_defs import ProgressConfig
from .utils.dt_utils import dt_parse, get_zone

# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class RecordValidationError(Exception):
    """Validation error with field-specific information.

    Attributes:
        field: DATA_* / CONF_* key of the value that failed validation
        message: Human-readable reason

    Example:
        raise RecordValidationError(
            field=const.DATA_SUBMISSION_GRADE,
            message="value must be at most 100",
        )
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize RecordValidationError.

        Args:
            field: Key of the value that failed validation
            message: Human-readable reason
        """
        self.field = field
        self.message = message
        super().__init__(f"Invalid {field or 'record'}: {message}")


class DuplicateSubmissionError(RecordValidationError):
    """Two submission rows target the same assignment."""

    def __init__(self, assignment_id: str) -> None:
        """Initialize DuplicateSubmissionError.

        Args:
            assignment_id: Assignment targeted more than once
        """
        self.assignment_id = assignment_id
        super().__init__(
            const.DATA_ASSIGNMENT_ID,
            f"more than one submission for assignment {assignment_id!r}",
        )


# ==============================================================================
# FIELD VALIDATORS
# ==============================================================================


def _timestamp(value: Any) -> Any:
    """Validate and normalize a required timestamp to aware UTC."""
    try:
        parsed = dt_parse(value)
    except (ValueError, TypeError, OverflowError, OSError) as err:
        raise vol.Invalid(f"invalid timestamp {value!r}") from err
    if parsed is None:
        raise vol.Invalid("timestamp is required")
    return parsed


def _optional_timestamp(value: Any) -> Any:
    """Like _timestamp(), but None and "" mean "not submitted"."""
    if value is None or value == "":
        return None
    return _timestamp(value)


def _timezone(value: Any) -> str:
    """Validate an IANA timezone name."""
    if not isinstance(value, str) or not value:
        raise vol.Invalid("timezone must be a non-empty string")
    try:
        get_zone(value)
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise vol.Invalid(f"unknown timezone {value!r}") from err
    return value


_NON_EMPTY_STRING = vol.All(str, vol.Length(min=1))
_OPTIONAL_STRING = vol.Any(None, str)
_NON_NEGATIVE_INT = vol.All(vol.Coerce(int), vol.Range(min=0))
_POSITIVE_INT = vol.All(vol.Coerce(int), vol.Range(min=1))
_PERCENT = vol.All(vol.Coerce(int), vol.Range(min=0, max=100))


# ==============================================================================
# SCHEMAS
# ==============================================================================

PROGRESS_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(const.CONF_TIMEZONE, default=const.DEFAULT_TIMEZONE): _timezone,
        vol.Optional(
            const.CONF_UPCOMING_WINDOW_DAYS,
            default=const.DEFAULT_UPCOMING_WINDOW_DAYS,
        ): _NON_NEGATIVE_INT,
        vol.Optional(
            const.CONF_WEEK_HISTORY_LIMIT,
            default=const.DEFAULT_WEEK_HISTORY_LIMIT,
        ): _POSITIVE_INT,
        vol.Optional(
            const.CONF_STREAK_HISTORY_LIMIT,
            default=const.DEFAULT_STREAK_HISTORY_LIMIT,
        ): _POSITIVE_INT,
        vol.Optional(
            const.CONF_MASTERY_MIN_ASSIGNMENTS,
            default=const.DEFAULT_MASTERY_MIN_ASSIGNMENTS,
        ): _POSITIVE_INT,
        vol.Optional(
            const.CONF_COMPLETION_BADGE_RATE,
            default=const.DEFAULT_COMPLETION_BADGE_RATE,
        ): _PERCENT,
        vol.Optional(
            const.CONF_COMPLETION_BADGE_MIN_TOTAL,
            default=const.DEFAULT_COMPLETION_BADGE_MIN_TOTAL,
        ): _POSITIVE_INT,
        vol.Optional(
            const.CONF_EARLY_BIRD_MIN_COUNT,
            default=const.DEFAULT_EARLY_BIRD_MIN_COUNT,
        ): _POSITIVE_INT,
    }
)

ASSIGNMENT_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_ASSIGNMENT_ID): _NON_EMPTY_STRING,
        vol.Required(const.DATA_ASSIGNMENT_SUBJECT_ID): _NON_EMPTY_STRING,
        vol.Required(const.DATA_ASSIGNMENT_ASSIGNED_DATE): _timestamp,
        vol.Required(const.DATA_ASSIGNMENT_DUE_DATE): _timestamp,
        vol.Optional(const.DATA_ASSIGNMENT_TITLE, default=""): _OPTIONAL_STRING,
        vol.Optional(const.DATA_ASSIGNMENT_SUBJECT_NAME, default=None): _OPTIONAL_STRING,
        vol.Optional(const.DATA_ASSIGNMENT_TOTAL_POINTS, default=None): vol.Any(
            None, vol.Coerce(float)
        ),
    },
    extra=vol.REMOVE_EXTRA,
)

SUBMISSION_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_SUBMISSION_STATUS): vol.All(
            str, vol.Upper, vol.Coerce(SubmissionStatus)
        ),
        vol.Optional(const.DATA_SUBMISSION_SUBMITTED_AT, default=None): (
            _optional_timestamp
        ),
        vol.Optional(const.DATA_SUBMISSION_CONTENT, default=None): _OPTIONAL_STRING,
        vol.Optional(const.DATA_SUBMISSION_ATTACHMENTS): vol.Any(None, list),
        vol.Optional(const.DATA_SUBMISSION_ATTACHMENT_COUNT): _NON_NEGATIVE_INT,
        vol.Optional(const.DATA_SUBMISSION_IS_LATE, default=False): vol.Boolean(),
        vol.Optional(const.DATA_SUBMISSION_GRADE, default=None): vol.Any(
            None,
            vol.All(
                vol.Coerce(float), vol.Range(min=const.GRADE_MIN, max=const.GRADE_MAX)
            ),
        ),
        vol.Optional(const.DATA_SUBMISSION_FEEDBACK, default=None): _OPTIONAL_STRING,
    },
    extra=vol.REMOVE_EXTRA,
)


def _validate(schema: vol.Schema, raw: Mapping[str, Any]) -> dict[str, Any]:
    """Run a schema and translate voluptuous errors to RecordValidationError."""
    try:
        return cast("dict[str, Any]", schema(dict(raw)))
    except vol.Invalid as err:
        field = str(err.path[0]) if err.path else ""
        raise RecordValidationError(field, err.msg) from err


# ==============================================================================
# CONFIGURATION
# ==============================================================================


def build_progress_config(user_input: Mapping[str, Any] | None = None) -> ProgressConfig:
    """Build a complete, validated engine configuration.

    Args:
        user_input: Partial overrides with CONF_* keys, or None

    Returns:
        ProgressConfig with every key present

    Raises:
        RecordValidationError: If a value is invalid or a key is unknown
    """
    return cast("ProgressConfig", _validate(PROGRESS_CONFIG_SCHEMA, user_input or {}))


# ==============================================================================
# ASSIGNMENTS / SUBMISSIONS
# ==============================================================================


def build_assignment(raw: Mapping[str, Any]) -> Assignment:
    """Build an Assignment from a raw row.

    Raises:
        RecordValidationError: If a required field is missing or malformed
    """
    data = _validate(ASSIGNMENT_SCHEMA, raw)
    return Assignment(
        assignment_id=data[const.DATA_ASSIGNMENT_ID],
        subject_id=data[const.DATA_ASSIGNMENT_SUBJECT_ID],
        assigned_date=data[const.DATA_ASSIGNMENT_ASSIGNED_DATE],
        due_date=data[const.DATA_ASSIGNMENT_DUE_DATE],
        title=data[const.DATA_ASSIGNMENT_TITLE] or "",
        subject_name=data[const.DATA_ASSIGNMENT_SUBJECT_NAME],
        total_points=data[const.DATA_ASSIGNMENT_TOTAL_POINTS],
    )


def build_submission(raw: Mapping[str, Any]) -> Submission:
    """Build a Submission from a raw row.

    The attachment count comes from `attachment_count` when given, otherwise
    from the length of the `attachments` list.

    Raises:
        RecordValidationError: If a field is missing or malformed
    """
    data = _validate(SUBMISSION_SCHEMA, raw)

    attachment_count = data.get(const.DATA_SUBMISSION_ATTACHMENT_COUNT)
    if attachment_count is None:
        attachment_count = len(data.get(const.DATA_SUBMISSION_ATTACHMENTS) or [])

    return Submission(
        status=data[const.DATA_SUBMISSION_STATUS],
        submitted_at=data[const.DATA_SUBMISSION_SUBMITTED_AT],
        content=data[const.DATA_SUBMISSION_CONTENT],
        attachment_count=attachment_count,
        is_late=data[const.DATA_SUBMISSION_IS_LATE],
        grade=data[const.DATA_SUBMISSION_GRADE],
        feedback=data[const.DATA_SUBMISSION_FEEDBACK],
    )


def build_submission_lookup(rows: Iterable[Mapping[str, Any]]) -> dict[str, Submission]:
    """Key submission rows by the assignment they belong to.

    Each row carries DATA_ASSIGNMENT_ID next to the submission fields.

    Raises:
        RecordValidationError: If a row lacks an assignment id or is malformed
        DuplicateSubmissionError: If two rows target the same assignment
    """
    lookup: dict[str, Submission] = {}
    for row in rows:
        assignment_id = row.get(const.DATA_ASSIGNMENT_ID)
        if not isinstance(assignment_id, str) or not assignment_id:
            raise RecordValidationError(
                const.DATA_ASSIGNMENT_ID, "submission row has no assignment id"
            )
        if assignment_id in lookup:
            raise DuplicateSubmissionError(assignment_id)
        lookup[assignment_id] = build_submission(row)

    const.LOGGER.debug("Built submission lookup for %d assignments", len(lookup))
    return lookup
