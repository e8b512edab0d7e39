"""Constants for TaskMaster.

This module centralizes all magic numbers and default values used throughout the application.
"""

from taskmaster.models.task import Priority, TaskCategory, SortMode


# Task defaults
DEFAULT_PRIORITY = Priority.MEDIUM
DEFAULT_CATEGORY = TaskCategory.OTHER
DEFAULT_SORT_MODE = SortMode.SMART

# Field limits
MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_TAGS = 5
MAX_TAG_LENGTH = 20

# Priority weights (higher = more important)
PRIORITY_WEIGHTS = {
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 1,
}
MAX_PRIORITY_WEIGHT = 3

# Smart score
URGENCY_HORIZON_MS = 7 * 24 * 60 * 60 * 1000  # 7 days
PRIORITY_SCORE_WEIGHT = 0.5
URGENCY_SCORE_WEIGHT = 0.35
OVERDUE_BONUS = 0.15

# Statistics
WEEK_DAYS = 7
