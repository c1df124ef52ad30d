"""
Task REST routes.

Route prefix: /api/tasks (all routes require a Bearer token)
"""

from __future__ import annotations

from typing import Dict, List

from fastapi import APIRouter, Depends, status

from api.dependencies import get_current_user, get_task_service, valid_task_id
from core.task_service import TaskService
from database.models import Task, User
from utils.schemas import (
    MessageResponse,
    TaskCompleteRequest,
    TaskCreateRequest,
    TaskResponse,
    TaskUpdateRequest,
)

router = APIRouter(tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    req: TaskCreateRequest,
    user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> Task:
    """Create a task owned by the caller."""
    return await service.create(
        user.id,
        title=req.title,
        description=req.description,
        category=req.category,
    )


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> List[Task]:
    """All of the caller's tasks, newest first."""
    return await service.list(user.id)


@router.get("/{id}", response_model=TaskResponse)
async def get_task(
    user: User = Depends(get_current_user),
    task_id: int = Depends(valid_task_id),
    service: TaskService = Depends(get_task_service),
) -> Task:
    return await service.get(user.id, task_id)


@router.put("/{id}", response_model=TaskResponse)
async def update_task(
    req: TaskUpdateRequest,
    user: User = Depends(get_current_user),
    task_id: int = Depends(valid_task_id),
    service: TaskService = Depends(get_task_service),
) -> Task:
    """Partial update: fields missing from the body keep their values."""
    return await service.update(user.id, task_id, req.to_patch())


@router.put("/{id}/complete", response_model=TaskResponse)
async def complete_task(
    req: TaskCompleteRequest,
    user: User = Depends(get_current_user),
    task_id: int = Depends(valid_task_id),
    service: TaskService = Depends(get_task_service),
) -> Task:
    """Mark a task complete or incomplete."""
    return await service.set_completed(user.id, task_id, req.completed)


@router.delete("/{id}", response_model=MessageResponse)
async def delete_task(
    user: User = Depends(get_current_user),
    task_id: int = Depends(valid_task_id),
    service: TaskService = Depends(get_task_service),
) -> Dict[str, str]:
    return await service.delete(user.id, task_id)
