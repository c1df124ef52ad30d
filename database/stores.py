"""
Persistence stores for users and tasks.

Services depend on the abstract ``UserStore`` / ``TaskStore`` interfaces and
receive a concrete store per request; the SQLAlchemy implementations below
wrap a single ``AsyncSession``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DuplicateUser
from database.models import Task, TaskCategory, User

logger = logging.getLogger(__name__)


class UserStore(ABC):
    """Credential store: owns all ``User`` records."""

    @abstractmethod
    async def insert(self, username: str, password_hash: str) -> User:
        """
        Persist a new user.

        Raises ``DuplicateUser`` if the username is taken, including when a
        concurrent insert wins the race.
        """
        ...

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    async def update_token(self, user_id: int, token: str) -> None:
        ...


class TaskStore(ABC):
    """Task store: every lookup is scoped by ``owner_id``."""

    @abstractmethod
    async def insert(
        self,
        owner_id: int,
        title: str,
        description: Optional[str],
        category: TaskCategory,
        now: datetime,
    ) -> Task:
        ...

    @abstractmethod
    async def list_for_owner(self, owner_id: int) -> List[Task]:
        """Newest first; equal timestamps fall back to insertion order."""
        ...

    @abstractmethod
    async def find(self, task_id: int, owner_id: int) -> Optional[Task]:
        ...

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Persist changes made to a task returned by ``find``."""
        ...

    @abstractmethod
    async def delete(self, task_id: int, owner_id: int) -> bool:
        """Return ``True`` if a task was removed."""
        ...


# ── SQLAlchemy implementations ─────────────────────────────────────────


class SqlUserStore(UserStore):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, username: str, password_hash: str) -> User:
        user = User(username=username, password_hash=password_hash)
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            logger.info("Username %r lost an insert race", username)
            raise DuplicateUser() from exc
        return user

    async def find_by_username(self, username: str) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        result = await self._session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def update_token(self, user_id: int, token: str) -> None:
        await self._session.execute(
            update(User).where(User.id == user_id).values(token=token)
        )
        await self._session.commit()


class SqlTaskStore(TaskStore):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(
        self,
        owner_id: int,
        title: str,
        description: Optional[str],
        category: TaskCategory,
        now: datetime,
    ) -> Task:
        task = Task(
            owner_id=owner_id,
            title=title,
            description=description,
            category=category,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        self._session.add(task)
        await self._session.commit()
        return task

    async def list_for_owner(self, owner_id: int) -> List[Task]:
        result = await self._session.execute(
            select(Task)
            .where(Task.owner_id == owner_id)
            .order_by(Task.created_at.desc(), Task.id.asc())
        )
        return list(result.scalars().all())

    async def find(self, task_id: int, owner_id: int) -> Optional[Task]:
        result = await self._session.execute(
            select(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def save(self, task: Task) -> Task:
        self._session.add(task)
        await self._session.commit()
        return task

    async def delete(self, task_id: int, owner_id: int) -> bool:
        result = await self._session.execute(
            delete(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        )
        await self._session.commit()
        return result.rowcount > 0
