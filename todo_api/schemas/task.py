from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TaskCreate(BaseModel):
    """Schema for creating new tasks."""
    title: Optional[str] = None
    body: Optional[str] = None


class TaskUpdate(BaseModel):
    """Schema for updating existing tasks. Only fields present in the body are applied."""
    title: Optional[str] = None
    body: Optional[str] = None


class Task(BaseModel):
    """Task as returned to clients (camelCase keys)."""
    id: int
    title: str
    body: str
    owner_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TaskDeleted(BaseModel):
    success: bool = True
    item: Task
