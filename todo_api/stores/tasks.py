import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..errors import InvalidInputError, NotFoundError
from ..models import Task

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "body")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskStore:
    """
    In-memory task store scoped by owner.

    Tasks live in an id -> Task dict, so lookups are O(1) and ``list`` keeps
    insertion order. Ids are never reused, even after a delete.

    A task that exists but belongs to someone else is reported exactly like a
    task that does not exist.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._tasks: Dict[int, Task] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def _owned(self, caller_id: int, task_id: int) -> Task:
        # Caller must hold self._lock.
        task = self._tasks.get(task_id)
        if task is None or task.owner_id != caller_id:
            raise NotFoundError()
        return task

    def list(self, caller_id: int) -> List[Task]:
        with self._lock:
            return [t.model_copy() for t in self._tasks.values() if t.owner_id == caller_id]

    def create(self, caller_id: int, title: Optional[str], body: Optional[str] = None) -> Task:
        if not title:
            raise InvalidInputError("title required")

        with self._lock:
            task = Task(
                id=self._next_id,
                title=title,
                body=body or "",
                owner_id=caller_id,
                created_at=self._clock(),
            )
            self._next_id += 1
            self._tasks[task.id] = task

        logger.debug("Created task id=%s owner=%s", task.id, caller_id)
        return task.model_copy()

    def get(self, caller_id: int, task_id: int) -> Task:
        with self._lock:
            return self._owned(caller_id, task_id).model_copy()

    def update(self, caller_id: int, task_id: int, fields: Mapping[str, Any]) -> Task:
        """Apply the supplied title/body values and stamp ``updated_at``.

        Keys that are absent or None are left unchanged; an empty string
        still overwrites. Unknown keys are ignored.
        """
        changes = {k: fields[k] for k in UPDATABLE_FIELDS if fields.get(k) is not None}
        for name, value in changes.items():
            if not isinstance(value, str):
                raise InvalidInputError(f"{name} must be a string")

        with self._lock:
            task = self._owned(caller_id, task_id)
            updated = task.model_copy(update={**changes, "updated_at": self._clock()})
            self._tasks[task_id] = updated

        logger.debug("Updated task id=%s fields=%s", task_id, sorted(changes))
        return updated.model_copy()

    def delete(self, caller_id: int, task_id: int) -> Task:
        with self._lock:
            self._owned(caller_id, task_id)
            removed = self._tasks.pop(task_id)

        logger.debug("Deleted task id=%s owner=%s", task_id, caller_id)
        return removed

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)
