"""
Domain errors raised by services and the auth gate.

Each error knows the HTTP status it maps to; ``api.middleware`` renders
them into JSON responses.
"""

from __future__ import annotations


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateUser(AppError):
    status_code = 400
    default_message = "User already exists"


class InvalidCredentials(AppError):
    """Same message for unknown user and wrong password."""

    status_code = 401
    default_message = "Invalid username or password"


class Unauthorized(AppError):
    status_code = 401
    default_message = "Not authorized"


class NotFound(AppError):
    """Raised for missing tasks and for tasks owned by someone else alike."""

    status_code = 404
    default_message = "Task not found"


class InvalidTaskId(AppError):
    status_code = 400
    default_message = "Invalid task ID"

    def __init__(self, value: str, message: str | None = None) -> None:
        self.value = value
        super().__init__(message)
