"""Data models for TaskMaster."""

from taskmaster.models.task import Task, Priority, TaskCategory, SortMode, CATEGORY_ALL

__all__ = [
    "Task",
    "Priority",
    "TaskCategory",
    "SortMode",
    "CATEGORY_ALL",
]
