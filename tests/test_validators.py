"""
Tests for request schemas and field validators.
"""

import pytest
from pydantic import ValidationError

from core.errors import InvalidTaskId
from core.task_service import UNSET, TaskPatch
from database.models import TaskCategory
from utils.schemas import (
    LoginRequest,
    RegisterRequest,
    TaskCompleteRequest,
    TaskCreateRequest,
    TaskUpdateRequest,
)
from utils.validators import format_validation_errors, parse_task_id


def _messages(exc_info) -> dict:
    return {e["loc"][0]: e["msg"] for e in exc_info.value.errors()}


class TestParseTaskId:
    def test_valid(self):
        assert parse_task_id("17") == 17

    @pytest.mark.parametrize(
        "value",
        ["abc", "0", "-1", "01", "1.5", "", " 1", "1\n", "99999999999999999999", "9223372036854775808"],
    )
    def test_invalid(self, value):
        with pytest.raises(InvalidTaskId):
            parse_task_id(value)

    def test_largest_id_accepted(self):
        assert parse_task_id("9223372036854775807") == 2**63 - 1


class TestAuthSchemas:
    def test_register_reports_every_violation(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(username="a", password="123")
        assert _messages(exc_info) == {
            "username": "Username must be at least 3 characters long",
            "password": "Password must be at least 6 characters long",
        }

    def test_register_trims_username(self):
        req = RegisterRequest(username="  alice  ", password="secret1")
        assert req.username == "alice"

    def test_register_whitespace_username_too_short(self):
        with pytest.raises(ValidationError):
            RegisterRequest(username="  ab  ", password="secret1")

    def test_register_missing_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest()
        assert set(_messages(exc_info)) == {"username", "password"}

    def test_login_requires_both_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            LoginRequest(username="", password="")
        assert _messages(exc_info) == {
            "username": "Username is required",
            "password": "Password is required",
        }


class TestTaskSchemas:
    def test_create_defaults(self):
        req = TaskCreateRequest(title="  Buy groceries ")
        assert req.title == "Buy groceries"
        assert req.description is None
        assert req.category is None

    def test_create_collects_all_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskCreateRequest(description="x" * 501, category="Hobby")
        assert _messages(exc_info) == {
            "title": "Title is required",
            "description": "Description cannot exceed 500 characters",
            "category": "Category must be one of: Personal, Work, Shopping, Other",
        }

    def test_title_length_limit(self):
        TaskCreateRequest(title="x" * 100)
        with pytest.raises(ValidationError) as exc_info:
            TaskCreateRequest(title="x" * 101)
        assert _messages(exc_info)["title"] == "Title cannot exceed 100 characters"

    def test_category_parsed_to_enum(self):
        assert TaskCreateRequest(title="t", category="Work").category is TaskCategory.WORK

    @pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
    def test_completed_must_be_strict_boolean(self, value):
        with pytest.raises(ValidationError) as exc_info:
            TaskCompleteRequest(completed=value)
        assert _messages(exc_info)["completed"] == "Completed must be a boolean value"
        with pytest.raises(ValidationError):
            TaskUpdateRequest(completed=value)

    def test_completed_required_on_complete(self):
        with pytest.raises(ValidationError):
            TaskCompleteRequest()

    def test_update_patch_contains_only_present_fields(self):
        patch = TaskUpdateRequest(category="Work").to_patch()
        assert patch.category is TaskCategory.WORK
        assert patch.title is UNSET
        assert patch.description is UNSET
        assert patch.completed is UNSET

    def test_update_explicit_null_description_clears(self):
        patch = TaskUpdateRequest(description=None).to_patch()
        assert patch.description is None

    def test_update_empty_body_is_empty_patch(self):
        assert TaskUpdateRequest().to_patch() == TaskPatch()

    def test_update_rejects_empty_title(self):
        with pytest.raises(ValidationError) as exc_info:
            TaskUpdateRequest(title="   ")
        assert _messages(exc_info)["title"] == "Title cannot be empty"


class TestFormatValidationErrors:
    def test_shape(self):
        errors = [{"loc": ("body", "title"), "msg": "Title is required", "type": "field_invalid"}]
        assert format_validation_errors(errors) == [
            {"type": "field", "msg": "Title is required", "path": "title", "location": "body"}
        ]
