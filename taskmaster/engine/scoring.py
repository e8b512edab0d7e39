"""Scoring logic for TaskMaster.

Implements the Smart score used to order tasks: a weighted blend of priority,
deadline urgency over a 7-day horizon, and a flat bonus for overdue tasks.

    urgency = clamp(0, 1, 1 - (deadline - now) / 7 days)
    score   = (priority_weight / 3) * 0.5 + urgency * 0.35 + (0.15 if overdue else 0)

All timestamps are compared as milliseconds since the Unix epoch.
This module is pure - same inputs always produce same outputs.
"""

import math
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from taskmaster.models.task import Priority
from taskmaster.models.constants import (
    PRIORITY_WEIGHTS,
    MAX_PRIORITY_WEIGHT,
    URGENCY_HORIZON_MS,
    PRIORITY_SCORE_WEIGHT,
    URGENCY_SCORE_WEIGHT,
    OVERDUE_BONUS,
)


# Effective deadline for records whose deadline is missing or unparseable.
# Sorts before every real deadline and yields full urgency plus the overdue bonus.
MAXIMALLY_OVERDUE_MS = float("-inf")

_PRIORITY_WEIGHTS_LOWER = {key.lower(): weight for key, weight in PRIORITY_WEIGHTS.items()}


def read_field(task: Any, name: str, default: Any = None) -> Any:
    """Read a field from a Task model or a plain mapping.

    Args:
        task: Task model, mapping, or any object with attributes
        name: Field name
        default: Value returned when the field is missing or None

    Returns:
        Field value, or default
    """
    if isinstance(task, Mapping):
        value = task.get(name, default)
    else:
        value = getattr(task, name, default)
    return default if value is None else value


def to_epoch_ms(moment: Union[datetime, date]) -> float:
    """Convert a datetime (or date) to milliseconds since the Unix epoch.

    Naive datetimes are interpreted as UTC. Dates are taken at midnight UTC.
    """
    if not isinstance(moment, datetime):
        moment = datetime(moment.year, moment.month, moment.day)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp() * 1000.0


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a datetime, date or ISO-8601 string (trailing "Z" allowed).

    Returns:
        datetime, or None if the value is missing or unparseable
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def _parse_timestamp(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = float(value)
        return value if math.isfinite(value) else None
    parsed = parse_datetime(value)
    return to_epoch_ms(parsed) if parsed is not None else None


def deadline_ms(task: Any) -> float:
    """Get the task deadline as epoch milliseconds.

    Accepts datetimes, ISO-8601 strings and numeric epoch milliseconds.
    A missing or unparseable deadline is treated as maximally overdue.

    Args:
        task: Task model or mapping

    Returns:
        Deadline in milliseconds, or MAXIMALLY_OVERDUE_MS
    """
    parsed = _parse_timestamp(read_field(task, "deadline"))
    return MAXIMALLY_OVERDUE_MS if parsed is None else parsed


def priority_weight(value: Any) -> int:
    """Get numeric weight for a priority (High=3, Medium=2, Low=1).

    Unrecognized values weigh the same as Low.
    """
    if isinstance(value, Priority):
        value = value.value
    if isinstance(value, str):
        weight = _PRIORITY_WEIGHTS_LOWER.get(value.strip().lower())
        if weight is not None:
            return weight
    return PRIORITY_WEIGHTS[Priority.LOW.value]


def urgency(deadline: float, now_ms: float) -> float:
    """Normalized closeness of a deadline within the 7-day horizon (0 to 1)."""
    raw = 1.0 - (deadline - now_ms) / URGENCY_HORIZON_MS
    return max(0.0, min(1.0, raw))


def overdue_bonus(deadline: float, now_ms: float) -> float:
    """Flat bonus for tasks whose deadline has passed."""
    return OVERDUE_BONUS if deadline < now_ms else 0.0


def is_overdue(task: Any, now: Union[datetime, float]) -> bool:
    """Check if an incomplete task is past its deadline.

    Completed tasks are never overdue.
    """
    if read_field(task, "is_completed", False) is True:
        return False
    return deadline_ms(task) < _as_ms(now)


def smart_score(task: Any, now: Union[datetime, float]) -> float:
    """Compute the Smart score for a task.

    Args:
        task: Task model or mapping
        now: Reference time (datetime, or epoch milliseconds)

    Returns:
        Score in [0, 1.0]; higher means more pressing
    """
    now_ms = _as_ms(now)
    deadline = deadline_ms(task)
    weight = priority_weight(read_field(task, "priority"))
    return (
        (weight / MAX_PRIORITY_WEIGHT) * PRIORITY_SCORE_WEIGHT
        + urgency(deadline, now_ms) * URGENCY_SCORE_WEIGHT
        + overdue_bonus(deadline, now_ms)
    )


def _as_ms(now: Union[datetime, date, float]) -> float:
    if isinstance(now, (datetime, date)):
        return to_epoch_ms(now)
    return float(now)
