"""Task data model for TaskMaster."""

from datetime import datetime
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, Field


class Priority(str, Enum):
    """Task priority enumeration."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TaskCategory(str, Enum):
    """Task category enumeration.

    "All" is a filter selector only and is never stored on a task
    (see CATEGORY_ALL).
    """
    WORK = "Work"
    PERSONAL = "Personal"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    STUDY = "Study"
    OTHER = "Other"


# Pseudo-category used by callers to request no category filtering
CATEGORY_ALL = "All"


class SortMode(str, Enum):
    """Sort mode enumeration for ranked task listings."""
    SMART = "smart"
    PRIORITY = "priority"
    DEADLINE = "deadline"
    ALPHABETICAL = "alphabetical"


class Task(BaseModel):
    """Canonical Task model."""

    id: str = Field(..., description="Unique task identifier (UUID v4)")
    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = Field(None, description="Optional task description")
    scheduled_time: datetime = Field(..., description="When the task is meant to be worked on")
    deadline: datetime = Field(..., description="Task deadline")
    priority: Priority = Field(Priority.MEDIUM, description="Task priority")
    is_completed: bool = Field(False, description="Whether the task is done")
    tags: List[str] = Field(default_factory=list, description="Short free-form tags")
    category: TaskCategory = Field(TaskCategory.OTHER, description="Task category")
    created_at: datetime = Field(..., description="Task creation timestamp")
    updated_at: datetime = Field(..., description="Task last update timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
