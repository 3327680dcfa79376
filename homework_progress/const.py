# File: const.py
"""Constants for the homework progress engine.

This file centralizes status tags, grouping formats, rule thresholds, badge
definitions and message texts so every engine and view reads the same values.
"""

import logging
from typing import Final

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------
# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_TIMEZONE = "timezone"
CONF_UPCOMING_WINDOW_DAYS = "upcoming_window_days"
CONF_WEEK_HISTORY_LIMIT = "week_history_limit"
CONF_STREAK_HISTORY_LIMIT = "streak_history_limit"
CONF_MASTERY_MIN_ASSIGNMENTS = "mastery_min_assignments"
CONF_COMPLETION_BADGE_RATE = "completion_badge_rate"
CONF_COMPLETION_BADGE_MIN_TOTAL = "completion_badge_min_total"
CONF_EARLY_BIRD_MIN_COUNT = "early_bird_min_count"

# ------------------------------------------------------------------------------------------------
# Raw Record Keys
# ------------------------------------------------------------------------------------------------
DATA_ASSIGNMENT_ID = "assignment_id"
DATA_ASSIGNMENT_SUBJECT_ID = "subject_id"
DATA_ASSIGNMENT_SUBJECT_NAME = "subject_name"
DATA_ASSIGNMENT_TITLE = "title"
DATA_ASSIGNMENT_ASSIGNED_DATE = "assigned_date"
DATA_ASSIGNMENT_DUE_DATE = "due_date"
DATA_ASSIGNMENT_TOTAL_POINTS = "total_points"

DATA_SUBMISSION_STATUS = "status"
DATA_SUBMISSION_SUBMITTED_AT = "submitted_at"
DATA_SUBMISSION_CONTENT = "content"
DATA_SUBMISSION_ATTACHMENTS = "attachments"
DATA_SUBMISSION_ATTACHMENT_COUNT = "attachment_count"
DATA_SUBMISSION_IS_LATE = "is_late"
DATA_SUBMISSION_GRADE = "grade"
DATA_SUBMISSION_FEEDBACK = "feedback"

GRADE_MIN = 0
GRADE_MAX = 100

# ------------------------------------------------------------------------------------------------
# Configuration Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_TIMEZONE = "UTC"
DEFAULT_UPCOMING_WINDOW_DAYS = 7
DEFAULT_WEEK_HISTORY_LIMIT = 12
DEFAULT_STREAK_HISTORY_LIMIT = 5
DEFAULT_MASTERY_MIN_ASSIGNMENTS = 5
DEFAULT_COMPLETION_BADGE_RATE = 90
DEFAULT_COMPLETION_BADGE_MIN_TOTAL = 10
DEFAULT_EARLY_BIRD_MIN_COUNT = 5

# ------------------------------------------------------------------------------------------------
# Insight / Encouragement Thresholds
# ------------------------------------------------------------------------------------------------
INSIGHT_COMPLETION_OUTSTANDING = 95
INSIGHT_COMPLETION_GREAT = 85
INSIGHT_COMPLETION_GOOD = 70
INSIGHT_ON_TIME_EXCELLENT = 90
INSIGHT_ON_TIME_POOR = 70
INSIGHT_UPCOMING_BUSY = 3
INSIGHT_STREAK_STRONG = 5
INSIGHT_STREAK_BUILDING = 2
INSIGHT_SUBJECT_WEAK = 70
INSIGHT_SUBJECT_STRONG = 90

ENCOURAGE_COMPLETION_OUTSTANDING = 90
ENCOURAGE_COMPLETION_GOOD = 75

# ------------------------------------------------------------------------------------------------
# Badges
# ------------------------------------------------------------------------------------------------
BADGE_CATEGORY_SUBJECT_MASTERY = "subject_mastery"
BADGE_CATEGORY_STREAK = "streak"
BADGE_CATEGORY_COMPLETION = "completion"
BADGE_CATEGORY_EARLY_SUBMISSION = "early_submission"

# Rule evaluation order; each category is one registered rule handler
BADGE_RULE_ORDER: Final[tuple[str, ...]] = (
    BADGE_CATEGORY_SUBJECT_MASTERY,
    BADGE_CATEGORY_STREAK,
    BADGE_CATEGORY_COMPLETION,
    BADGE_CATEGORY_EARLY_SUBMISSION,
)

BADGE_ID_SUBJECT_PREFIX = "perfect_"
BADGE_ID_STREAK_5 = "streak_5"
BADGE_ID_STREAK_10 = "streak_10"
BADGE_ID_COMPLETION_90 = "completion_90"
BADGE_ID_EARLY_BIRD = "early_bird"

# Streak milestones in ascending order: (badge id, required current streak)
STREAK_MILESTONES: Final[tuple[tuple[str, int], ...]] = (
    (BADGE_ID_STREAK_5, 5),
    (BADGE_ID_STREAK_10, 10),
)

BADGE_ICON_SUBJECT_MASTERY = "mdi:trophy"
BADGE_ICON_STREAK_5 = "mdi:star"
BADGE_ICON_STREAK_10 = "mdi:shield-star"
BADGE_ICON_COMPLETION_90 = "mdi:school"
BADGE_ICON_EARLY_BIRD = "mdi:bird"

BADGE_TITLE_SUBJECT_MASTERY = "{subject} Champion"
BADGE_TITLE_STREAK_5 = "Consistency Star"
BADGE_TITLE_STREAK_10 = "Homework Hero"
BADGE_TITLE_COMPLETION_90 = "Homework Master"
BADGE_TITLE_EARLY_BIRD = "Early Bird"

BADGE_DESC_SUBJECT_MASTERY = "Perfect completion in {subject}"
BADGE_DESC_STREAK = "{streak} homework submitted on time in a row"
BADGE_DESC_COMPLETION = "{rate}% completion rate"
BADGE_DESC_EARLY_BIRD = "{count} homework submitted early"

# ------------------------------------------------------------------------------------------------
# Insight Messages
# ------------------------------------------------------------------------------------------------
MSG_NO_ASSIGNMENTS = "No homework assignments yet. Check back soon!"

MSG_COMPLETION_OUTSTANDING = (
    "Outstanding! You're completing almost all your homework!"
)
MSG_COMPLETION_GREAT = "Great job! You're staying on top of your homework!"
MSG_COMPLETION_GOOD = (
    "Good progress! Try to improve your completion rate a bit more."
)
MSG_COMPLETION_LOW = (
    "Focus on completing more homework to improve your academic performance."
)

MSG_ON_TIME_EXCELLENT = (
    "Excellent time management! You submit homework on time consistently."
)
MSG_ON_TIME_POOR = "Try to start homework earlier to avoid late submissions."

MSG_UPCOMING_BUSY = "You have {count} homework due soon. Plan your time wisely!"
MSG_UPCOMING_SOME = "{count} homework coming up. You've got this!"

MSG_STREAK_STRONG = "Amazing streak of {streak} on-time submissions! Keep it going!"
MSG_STREAK_BUILDING = "{streak} on-time submissions in a row. You're building great habits!"

MSG_SUBJECT_FOCUS = "Consider focusing more on {subject} ({rate}% completion rate)."
MSG_SUBJECT_EXCELLING = "You're excelling in {subject}! Keep up the great work!"

# ------------------------------------------------------------------------------------------------
# Encouragement Messages
# ------------------------------------------------------------------------------------------------
MSG_ENCOURAGE_STREAK_STRONG = (
    "Amazing {streak}-assignment streak! Keep up the excellent work!"
)
MSG_ENCOURAGE_STREAK_BUILDING = (
    "Great {streak}-assignment streak! You're building great habits!"
)
MSG_ENCOURAGE_COMPLETION_OUTSTANDING = "Outstanding {rate}% completion rate!"
MSG_ENCOURAGE_COMPLETION_GOOD = "Good {rate}% completion rate! You're doing well!"
MSG_ENCOURAGE_UPCOMING = "You have {count} homework due soon. Stay on track!"
MSG_ENCOURAGE_ON_TIME = "Excellent punctuality! {rate}% on-time submissions!"
MSG_ENCOURAGE_DEFAULT = (
    "Keep working hard! Every submission counts towards your success!"
)
