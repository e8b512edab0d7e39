"""SQLAlchemy database models for TaskMaster."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, JSON

from typing import Union, TypeVar, Type
from taskmaster.database.database import Base
from taskmaster.models.task import Priority, TaskCategory

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).

    Args:
        enum_obj: Enum instance or string value

    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.

    Matching is case-insensitive against the enum values.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value)
    except ValueError:
        pass
    for member in enum_class:
        if member.value.lower() == str(value).lower():
            return member
    return default


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Basic fields
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    priority = Column(String, nullable=False, default=Priority.MEDIUM.value)
    is_completed = Column(Boolean, nullable=False, default=False, index=True)
    category = Column(String, nullable=False, default=TaskCategory.OTHER.value, index=True)

    # Tags (stored as JSON array)
    tags = Column(JSON, nullable=False, default=list)

    # Scheduling fields
    scheduled_time = Column(DateTime, nullable=False)
    deadline = Column(DateTime, nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from taskmaster.models.task import Task

        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            scheduled_time=self.scheduled_time,
            deadline=self.deadline,
            priority=value_to_enum(self.priority, Priority, Priority.MEDIUM),
            is_completed=bool(self.is_completed),
            tags=list(self.tags or []),
            category=value_to_enum(self.category, TaskCategory, TaskCategory.OTHER),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, task):
        """Create database model from Pydantic model."""
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            scheduled_time=task.scheduled_time,
            deadline=task.deadline,
            priority=enum_to_value(task.priority),
            is_completed=task.is_completed,
            tags=list(task.tags),
            category=enum_to_value(task.category),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
