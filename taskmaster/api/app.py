"""FastAPI web application for TaskMaster."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, HTTPException, Query, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from taskmaster.api.task_models import (
    TaskCreateRequest,
    TaskUpdateRequest,
    TaskResponse,
    TaskListResponse,
)
from taskmaster.database.database import get_db, init_db
from taskmaster.database.repository import TaskRepository
from taskmaster.engine.ranking import rank, resolve_category_selector, resolve_sort_mode
from taskmaster.engine.stats import compute_task_stats, TaskStats
from taskmaster.models.task import Task, CATEGORY_ALL
from taskmaster.models.task_factory import create_task_base

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# Fields a client may change on an existing task (besides is_completed)
_EDITABLE_FIELDS = ("title", "description", "scheduled_time", "deadline", "priority", "tags", "category")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="TaskMaster API",
    description="Personal task manager with smart ranking",
    version=API_VERSION,
    lifespan=lifespan,
)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": API_VERSION}


@app.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(request: TaskCreateRequest, db: Session = Depends(get_db)):
    """Create a new task."""
    task = create_task_base(
        title=request.title,
        scheduled_time=request.scheduled_time,
        deadline=request.deadline,
        description=request.description,
        priority=request.priority,
        tags=request.tags,
        category=request.category,
    )
    try:
        created = TaskRepository(db).create(task)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create task: {str(e)}")
    return TaskResponse(task=created)


@app.get("/tasks", response_model=TaskListResponse)
def list_tasks(
    category: str = Query(CATEGORY_ALL, description="'All' or a task category"),
    search: str = Query("", description="Case-insensitive text to find in title, description or tags"),
    sort_by: str = Query("smart", description="smart, priority, deadline or alphabetical"),
    db: Session = Depends(get_db),
):
    """List tasks filtered and ordered by the ranking engine."""
    tasks = TaskRepository(db).get_all()
    now = datetime.utcnow()

    selected = resolve_category_selector(category)
    mode = resolve_sort_mode(sort_by)
    ranked = rank(tasks, selected or CATEGORY_ALL, search, mode, now=now)
    logger.debug(
        f"Ranked {len(ranked)}/{len(tasks)} tasks "
        f"(category={category!r}, search={search!r}, sort_by={mode.value})"
    )

    return TaskListResponse(
        tasks=ranked,
        count=len(ranked),
        category=selected.value if selected else CATEGORY_ALL,
        sort_by=mode.value,
    )


@app.get("/tasks/stats", response_model=TaskStats)
def task_stats(db: Session = Depends(get_db)):
    """Dashboard statistics over all tasks."""
    tasks = TaskRepository(db).get_all()
    return compute_task_stats(tasks, datetime.utcnow())


@app.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, db: Session = Depends(get_db)):
    """Get a single task."""
    task = TaskRepository(db).get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return TaskResponse(task=task)


@app.patch("/tasks/{task_id}", response_model=TaskResponse)
def update_task(task_id: str, request: TaskUpdateRequest, db: Session = Depends(get_db)):
    """Partially update a task (including marking it completed)."""
    repository = TaskRepository(db)
    existing = repository.get(task_id)
    if existing is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")

    changes = request.model_dump(exclude_unset=True)
    is_completed = changes.pop("is_completed", None)
    if is_completed is None:
        is_completed = existing.is_completed

    merged = {field: getattr(existing, field) for field in _EDITABLE_FIELDS}
    merged.update(changes)
    try:
        validated = TaskCreateRequest(**merged)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    task = Task(
        **{
            **existing.model_dump(),
            **validated.model_dump(),
            "is_completed": is_completed,
            "updated_at": datetime.utcnow(),
        }
    )
    try:
        updated = repository.update(task)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update task: {str(e)}")
    return TaskResponse(task=updated)


@app.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, db: Session = Depends(get_db)):
    """Delete a task."""
    try:
        deleted = TaskRepository(db).delete(task_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete task: {str(e)}")
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
