"""Ranking engine for TaskMaster."""

from taskmaster.engine.scoring import smart_score, priority_weight, urgency, deadline_ms, is_overdue
from taskmaster.engine.ranking import (
    rank,
    filter_by_category,
    filter_by_search,
    sort_tasks,
    resolve_category_selector,
    resolve_sort_mode,
)
from taskmaster.engine.stats import compute_task_stats, TaskStats

__all__ = [
    "smart_score",
    "priority_weight",
    "urgency",
    "deadline_ms",
    "is_overdue",
    "rank",
    "filter_by_category",
    "filter_by_search",
    "sort_tasks",
    "resolve_category_selector",
    "resolve_sort_mode",
    "compute_task_stats",
    "TaskStats",
]
