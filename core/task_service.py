"""
Ownership-scoped task operations.

Every method takes the authenticated ``owner_id``. A task that exists but
belongs to another user raises the same ``NotFound`` as a missing one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from core.errors import NotFound
from database.models import Task, TaskCategory
from database.stores import TaskStore

logger = logging.getLogger(__name__)


class _Unset:
    """Marker for a field that was left out of a partial update."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


@dataclass(frozen=True)
class TaskPatch:
    """
    Partial update. ``UNSET`` leaves a field alone; any other value
    overwrites it. ``description=None`` clears the description.
    """

    title: Union[str, _Unset] = UNSET
    description: Union[Optional[str], _Unset] = UNSET
    category: Union[TaskCategory, _Unset] = UNSET
    completed: Union[bool, _Unset] = UNSET

    def apply(self, task: Task) -> None:
        if self.title is not UNSET:
            task.title = self.title
        if self.description is not UNSET:
            task.description = self.description
        if self.category is not UNSET:
            task.category = self.category
        if self.completed is not UNSET:
            task.completed = self.completed


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskService:
    def __init__(self, tasks: TaskStore, clock=_utcnow) -> None:
        self._tasks = tasks
        self._clock = clock

    async def create(
        self,
        owner_id: int,
        title: str,
        description: Optional[str] = None,
        category: Optional[TaskCategory] = None,
    ) -> Task:
        task = await self._tasks.insert(
            owner_id=owner_id,
            title=title,
            description=description,
            category=category or TaskCategory.PERSONAL,
            now=self._clock(),
        )
        logger.info("Created task %s for user %s", task.id, owner_id)
        return task

    async def list(self, owner_id: int) -> List[Task]:
        return await self._tasks.list_for_owner(owner_id)

    async def get(self, owner_id: int, task_id: int) -> Task:
        task = await self._tasks.find(task_id, owner_id)
        if task is None:
            raise NotFound()
        return task

    async def update(self, owner_id: int, task_id: int, patch: TaskPatch) -> Task:
        task = await self.get(owner_id, task_id)
        patch.apply(task)
        task.updated_at = self._clock()
        task = await self._tasks.save(task)
        logger.info("Updated task %s for user %s", task_id, owner_id)
        return task

    async def set_completed(self, owner_id: int, task_id: int, completed: bool) -> Task:
        return await self.update(owner_id, task_id, TaskPatch(completed=completed))

    async def delete(self, owner_id: int, task_id: int) -> Dict[str, str]:
        if not await self._tasks.delete(task_id, owner_id):
            raise NotFound()
        logger.info("Deleted task %s for user %s", task_id, owner_id)
        return {"message": "Task removed"}
