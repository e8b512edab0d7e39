"""Dashboard statistics for TaskMaster."""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field

from taskmaster.models.constants import WEEK_DAYS
from taskmaster.engine.scoring import read_field, is_overdue, parse_datetime


class TaskStats(BaseModel):
    """Aggregate counters over a user's tasks."""

    total: int = Field(0, description="Number of tasks")
    completed: int = Field(0, description="Number of completed tasks")
    pending: int = Field(0, description="Number of incomplete tasks")
    overdue: int = Field(0, description="Incomplete tasks past their deadline")
    completion_rate: float = Field(0.0, ge=0.0, le=100.0, description="Completed share as a percentage")
    today_tasks: int = Field(0, description="Tasks scheduled for today (UTC)")
    week_tasks: int = Field(0, description="Tasks scheduled within the next 7 days, starting today (UTC)")


def compute_task_stats(tasks: Sequence[Any], now: datetime) -> TaskStats:
    """Compute dashboard statistics.

    Reads records the same way the ranking engine does: a missing or
    unparseable deadline counts as overdue, and a missing scheduled time
    simply excludes the task from the today/week counters.

    Args:
        tasks: Task models or mappings
        now: Reference time

    Returns:
        TaskStats
    """
    today = _utc_date(now)
    week_end = today + timedelta(days=WEEK_DAYS)

    total = len(tasks)
    completed = 0
    overdue = 0
    today_tasks = 0
    week_tasks = 0

    for task in tasks:
        if read_field(task, "is_completed", False) is True:
            completed += 1
        elif is_overdue(task, now):
            overdue += 1

        scheduled = _scheduled_date(task)
        if scheduled is None:
            continue
        if scheduled == today:
            today_tasks += 1
        if today <= scheduled < week_end:
            week_tasks += 1

    completion_rate = round(completed / total * 100, 1) if total else 0.0

    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        overdue=overdue,
        completion_rate=completion_rate,
        today_tasks=today_tasks,
        week_tasks=week_tasks,
    )


def _utc_date(moment: datetime) -> date:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


def _scheduled_date(task: Any) -> Optional[date]:
    scheduled = parse_datetime(read_field(task, "scheduled_time"))
    return _utc_date(scheduled) if scheduled is not None else None
