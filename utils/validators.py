"""
Field validators shared by the request schemas, plus helpers that turn
validation failures into the ``{"errors": [...]}`` response body.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional

from pydantic_core import PydanticCustomError

from core.errors import InvalidTaskId
from database.models import TaskCategory

TITLE_MAX = 100
DESCRIPTION_MAX = 500
USERNAME_MIN = 3
USERNAME_MAX = 128
PASSWORD_MIN = 6
PASSWORD_MAX_BYTES = 72  # bcrypt ignores anything past this
TASK_CATEGORIES = [c.value for c in TaskCategory]

_TASK_ID_RE = re.compile(r"[1-9][0-9]{0,18}")
_TASK_ID_MAX = 2**63 - 1


def field_error(message: str) -> PydanticCustomError:
    return PydanticCustomError("field_invalid", message)


def clean_string(value: Any, message: str) -> str:
    """Require a string and strip surrounding whitespace."""
    if not isinstance(value, str):
        raise field_error(message)
    return value.strip()


def check_username(value: Any) -> str:
    message = f"Username must be at least {USERNAME_MIN} characters long"
    username = clean_string(value, message)
    if len(username) < USERNAME_MIN:
        raise field_error(message)
    if len(username) > USERNAME_MAX:
        raise field_error(f"Username cannot exceed {USERNAME_MAX} characters")
    return username


def check_password(value: Any) -> str:
    message = f"Password must be at least {PASSWORD_MIN} characters long"
    if not isinstance(value, str) or len(value) < PASSWORD_MIN:
        raise field_error(message)
    if len(value.encode()) > PASSWORD_MAX_BYTES:
        raise field_error(f"Password cannot exceed {PASSWORD_MAX_BYTES} bytes")
    return value


def check_required(value: Any, message: str, strip: bool = True) -> str:
    if not isinstance(value, str):
        raise field_error(message)
    cleaned = value.strip() if strip else value
    if not cleaned:
        raise field_error(message)
    return cleaned


def check_title(value: Any, missing_message: str = "Title is required") -> str:
    title = check_required(value, missing_message)
    if len(title) > TITLE_MAX:
        raise field_error(f"Title cannot exceed {TITLE_MAX} characters")
    return title


def check_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    message = f"Description cannot exceed {DESCRIPTION_MAX} characters"
    description = clean_string(value, message)
    if len(description) > DESCRIPTION_MAX:
        raise field_error(message)
    return description


def check_category(value: Any) -> TaskCategory:
    if isinstance(value, TaskCategory):
        return value
    if isinstance(value, str) and value in TASK_CATEGORIES:
        return TaskCategory(value)
    raise field_error(f"Category must be one of: {', '.join(TASK_CATEGORIES)}")


def check_completed(value: Any) -> bool:
    """Only JSON booleans pass; ``"false"``, ``0`` and ``null`` do not."""
    if not isinstance(value, bool):
        raise field_error("Completed must be a boolean value")
    return value


def parse_task_id(value: str) -> int:
    """Parse a task id from the URL path, raising ``InvalidTaskId``."""
    if not _TASK_ID_RE.fullmatch(value):
        raise InvalidTaskId(value)
    task_id = int(value)
    if task_id > _TASK_ID_MAX:
        raise InvalidTaskId(value)
    return task_id


# ── Error rendering ────────────────────────────────────────────────────


def error_entry(msg: str, path: str, location: str) -> Dict[str, Any]:
    # submitted values are not echoed back, passwords included
    return {"type": "field", "msg": msg, "path": path, "location": location}


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten pydantic error dicts into ``{type, msg, path, location}`` entries."""
    formatted = []
    for err in errors:
        loc = list(err.get("loc", ()))
        location = str(loc[0]) if loc else "body"
        path = ".".join(str(part) for part in loc[1:])
        formatted.append(error_entry(err.get("msg", "Invalid value"), path, location))
    return formatted
