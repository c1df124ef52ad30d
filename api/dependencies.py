"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user
from core.task_service import TaskService
from database.stores import SqlTaskStore, TaskStore
from utils.validators import parse_task_id

__all__ = ["db_session", "get_current_user", "get_task_service", "valid_task_id"]


def get_task_store(session: AsyncSession = Depends(db_session)) -> TaskStore:
    return SqlTaskStore(session)


def get_task_service(tasks: TaskStore = Depends(get_task_store)) -> TaskService:
    return TaskService(tasks)


def valid_task_id(id: str) -> int:
    """Path parameter ``id`` parsed into a task id (400 if malformed)."""
    return parse_task_id(id)
