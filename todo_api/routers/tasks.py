from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ..database import Database, get_db
from ..errors import NotFoundError
from ..models import Task as TaskModel
from ..schemas.task import Task as TaskSchema, TaskCreate, TaskDeleted, TaskUpdate
from ..schemas.user import TokenData
from .auth import get_current_user

router = APIRouter()


def _parse_task_id(task_id: str) -> int:
    # A non-numeric id can't name any task, so it gets the same 404.
    try:
        return int(task_id)
    except ValueError:
        raise NotFoundError()


def _to_schema(task: TaskModel) -> TaskSchema:
    return TaskSchema.model_validate(task.model_dump())


@router.get("", response_model=List[TaskSchema], response_model_exclude_none=True)
def get_tasks(
    current_user: TokenData = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Get all tasks owned by the current user, oldest first."""
    return [_to_schema(t) for t in db.tasks.list(current_user.user_id)]


@router.post(
    "",
    response_model=TaskSchema,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    task: TaskCreate,
    current_user: TokenData = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Create a new task for the user."""
    created = db.tasks.create(current_user.user_id, task.title, task.body)
    return _to_schema(created)


@router.get("/{task_id}", response_model=TaskSchema, response_model_exclude_none=True)
def get_task(
    task_id: str,
    current_user: TokenData = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Get a specific task by ID."""
    return _to_schema(db.tasks.get(current_user.user_id, _parse_task_id(task_id)))


@router.put("/{task_id}", response_model=TaskSchema, response_model_exclude_none=True)
def update_task(
    task_id: str,
    task_update: Optional[TaskUpdate] = None,
    current_user: TokenData = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Update the fields present in the body; omitted fields are left alone."""
    task = db.tasks.update(
        current_user.user_id,
        _parse_task_id(task_id),
        task_update.model_dump(exclude_unset=True) if task_update else {},
    )
    return _to_schema(task)


@router.delete("/{task_id}", response_model=TaskDeleted, response_model_exclude_none=True)
def delete_task(
    task_id: str,
    current_user: TokenData = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Delete a specific task and return it."""
    removed = db.tasks.delete(current_user.user_id, _parse_task_id(task_id))
    return {"success": True, "item": _to_schema(removed)}
