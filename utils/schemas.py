"""
Pydantic schemas for the auth and task endpoints.

Request models carry the field constraints; violations are collected by
pydantic and rendered as one ``{"errors": [...]}`` response.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.task_service import TaskPatch
from database.models import TaskCategory
from utils.validators import (
    check_category,
    check_completed,
    check_description,
    check_password,
    check_required,
    check_title,
    check_username,
)


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    username: Optional[str] = Field(default=None, validate_default=True)
    password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("username", mode="before")
    @classmethod
    def _username(cls, value: Any) -> str:
        return check_username(value)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        return check_password(value)


class LoginRequest(BaseModel):
    username: Optional[str] = Field(default=None, validate_default=True)
    password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("username", mode="before")
    @classmethod
    def _username(cls, value: Any) -> str:
        return check_required(value, "Username is required")

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        return check_required(value, "Password is required", strip=False)


class AuthResponse(BaseModel):
    id: int
    username: str
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# Tasks
# ═══════════════════════════════════════════════════════════════════════════════


class TaskCreateRequest(BaseModel):
    title: Optional[str] = Field(default=None, validate_default=True)
    description: Optional[str] = None
    category: Optional[TaskCategory] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value: Any) -> str:
        return check_title(value)

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> Optional[str]:
        return check_description(value)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> Optional[TaskCategory]:
        return check_category(value)


class TaskUpdateRequest(BaseModel):
    """
    Every field is optional. Only fields present in the request body end
    up in the ``TaskPatch``; see ``to_patch``.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[TaskCategory] = None
    completed: Optional[bool] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value: Any) -> str:
        return check_title(value, "Title cannot be empty")

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> Optional[str]:
        return check_description(value)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> TaskCategory:
        return check_category(value)

    @field_validator("completed", mode="before")
    @classmethod
    def _completed(cls, value: Any) -> bool:
        return check_completed(value)

    def to_patch(self) -> TaskPatch:
        present = {name: getattr(self, name) for name in self.model_fields_set}
        return TaskPatch(**present)


class TaskCompleteRequest(BaseModel):
    completed: Optional[bool] = Field(default=None, validate_default=True)

    @field_validator("completed", mode="before")
    @classmethod
    def _completed(cls, value: Any) -> bool:
        return check_completed(value)


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    category: TaskCategory
    completed: bool
    owner_id: int
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    message: str
