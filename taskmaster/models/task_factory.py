"""Task creation factory for TaskMaster.

This module centralizes task creation logic to eliminate duplication
and ensure consistent default values across the application.
"""

import uuid
from datetime import datetime
from typing import Optional, Dict, Any, List

from taskmaster.models.task import Task, Priority, TaskCategory
from taskmaster.models.constants import DEFAULT_PRIORITY, DEFAULT_CATEGORY


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Strip tags and drop blank ones, preserving order.

    Args:
        tags: Raw tag list (may be None)

    Returns:
        Cleaned tag list
    """
    if not tags:
        return []
    cleaned = []
    for tag in tags:
        tag = (tag or "").strip()
        if tag:
            cleaned.append(tag)
    return cleaned


def create_task_defaults() -> Dict[str, Any]:
    """Get default task values as a dictionary.

    Returns:
        Dictionary with default task field values using constants
    """
    return {
        "description": None,
        "priority": DEFAULT_PRIORITY,
        "is_completed": False,
        "tags": [],
        "category": DEFAULT_CATEGORY,
    }


def create_task_base(
    title: str,
    scheduled_time: datetime,
    deadline: datetime,
    description: Optional[str] = None,
    priority: Optional[Priority] = None,
    tags: Optional[List[str]] = None,
    category: Optional[TaskCategory] = None,
) -> Task:
    """Create a task with defaults, allowing overrides.

    Field constraints (lengths, tag limits, deadline ordering) are checked by
    the request models before this is called.

    Args:
        title: Task title (required)
        scheduled_time: When the task is meant to be worked on
        deadline: Task deadline
        description: Optional description
        priority: Task priority (defaults to Medium)
        tags: Tag list (blank entries dropped)
        category: Task category (defaults to Other)

    Returns:
        Task object with defaults applied
    """
    now = datetime.utcnow()
    defaults = create_task_defaults()

    return Task(
        id=str(uuid.uuid4()),
        title=title.strip(),
        description=description if description is not None else defaults["description"],
        scheduled_time=scheduled_time,
        deadline=deadline,
        priority=priority if priority is not None else defaults["priority"],
        is_completed=defaults["is_completed"],
        tags=normalize_tags(tags) if tags is not None else defaults["tags"],
        category=category if category is not None else defaults["category"],
        created_at=now,
        updated_at=now,
    )
