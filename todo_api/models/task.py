from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(BaseModel):
    """Task record owned by a single user."""

    id: int
    title: str
    body: str = ""
    owner_id: int
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: Optional[datetime] = None
