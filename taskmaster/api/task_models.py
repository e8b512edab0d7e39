"""Request/response models for task endpoints."""

from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from taskmaster.models.task import Task, Priority, TaskCategory
from taskmaster.models.task_factory import normalize_tags
from taskmaster.models.constants import (
    MIN_TITLE_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_TAGS,
    MAX_TAG_LENGTH,
)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to naive UTC (the storage convention)."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TaskCreateRequest(BaseModel):
    """Request model for creating a task.

    Enforces the creation-time invariants: title length, description length,
    tag limits, and deadline not before scheduled time.
    """
    title: str = Field(..., description=f"Task title ({MIN_TITLE_LENGTH}-{MAX_TITLE_LENGTH} chars)")
    description: Optional[str] = Field(
        None, max_length=MAX_DESCRIPTION_LENGTH, description="Optional task description"
    )
    scheduled_time: datetime = Field(..., description="When the task is meant to be worked on (ISO 8601)")
    deadline: datetime = Field(..., description="Deadline (ISO 8601), not before scheduled_time")
    priority: Priority = Field(Priority.MEDIUM, description="Task priority level")
    tags: List[str] = Field(default_factory=list, description=f"Up to {MAX_TAGS} tags")
    category: TaskCategory = Field(TaskCategory.OTHER, description="Task category")

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        value = value.strip()
        if len(value) < MIN_TITLE_LENGTH:
            raise ValueError(f"Title must be at least {MIN_TITLE_LENGTH} characters long")
        if len(value) > MAX_TITLE_LENGTH:
            raise ValueError(f"Title must be at most {MAX_TITLE_LENGTH} characters long")
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, value):
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValueError("tags must be a list of strings")
        if not all(isinstance(tag, str) for tag in value):
            raise ValueError("tags must be a list of strings")
        tags = normalize_tags(value)
        if len(tags) > MAX_TAGS:
            raise ValueError(f"At most {MAX_TAGS} tags are allowed")
        for tag in tags:
            if len(tag) > MAX_TAG_LENGTH:
                raise ValueError(f"Tag '{tag}' exceeds {MAX_TAG_LENGTH} characters")
        return tags

    @field_validator("scheduled_time", "deadline")
    @classmethod
    def normalize_datetime(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def validate_deadline_order(self):
        if self.deadline < self.scheduled_time:
            raise ValueError("deadline must not be before scheduled_time")
        return self


class TaskUpdateRequest(BaseModel):
    """Request model for partially updating a task.

    Only fields present in the request are applied. The merged task is
    re-checked against the creation invariants.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    scheduled_time: Optional[datetime] = None
    deadline: Optional[datetime] = None
    priority: Optional[Priority] = None
    tags: Optional[List[str]] = None
    category: Optional[TaskCategory] = None
    is_completed: Optional[bool] = None


class TaskResponse(BaseModel):
    """Response wrapping a single task."""
    task: Task


class TaskListResponse(BaseModel):
    """Response for a ranked task listing."""
    tasks: List[Task]
    count: int
    category: str = Field(..., description="Effective category selector")
    sort_by: str = Field(..., description="Effective sort mode")
