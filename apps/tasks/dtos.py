"""
Request/response schemas for the Tasks API.

Input is cleaned on the way in (trimmed, control characters removed) and
markup is escaped on the way out, so stored text is never double-encoded.
"""
import re
from datetime import datetime
from typing import Any, List, Optional

from django.utils.html import escape
from ninja import Field, Schema
from pydantic import field_validator
from pydantic_core import PydanticCustomError

from .models import TITLE_MAX_LENGTH

# C0 controls and DEL, keeping tab and newline
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")

TRUE_STRINGS = {"true", "1"}
FALSE_STRINGS = {"false", "0"}


def clean_text(value: str) -> str:
    return CONTROL_CHARS.sub("", value).strip()


def parse_bool(value: Any) -> bool:
    """
    Strict boolean parsing for request bodies.

    Accepts JSON booleans, 0/1 and "true"/"false"/"1"/"0" (any case).
    Raises ValueError for anything else.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    raise ValueError(f"Not a boolean: {value!r}")


class TaskIn(Schema):
    """Body for POST /tasks and PUT /tasks/{id}. PUT is a full replace."""
    title: str = Field(None, validate_default=True)
    description: Optional[str] = None
    completed: bool = False

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, value):
        if value is None:
            raise PydanticCustomError("title_required", "Title is required")
        if not isinstance(value, str):
            raise PydanticCustomError("title_type", "Title must be a string")
        value = clean_text(value)
        if not value:
            raise PydanticCustomError("title_required", "Title is required")
        if len(value) > TITLE_MAX_LENGTH:
            raise PydanticCustomError(
                "title_length",
                "Title must be at most {max_length} characters",
                {"max_length": TITLE_MAX_LENGTH},
            )
        return value

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, value):
        if value is None:
            return None
        if not isinstance(value, str):
            raise PydanticCustomError("description_type", "Description must be a string")
        return clean_text(value)

    @field_validator("completed", mode="before")
    @classmethod
    def validate_completed(cls, value):
        if value is None:
            return False
        try:
            return parse_bool(value)
        except ValueError:
            raise PydanticCustomError("completed_type", "Completed must be a boolean")


class TaskOut(Schema):
    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def resolve_title(obj) -> str:
        return escape(obj.title)

    @staticmethod
    def resolve_description(obj) -> Optional[str]:
        if obj.description is None:
            return None
        return escape(obj.description)


class TaskEnvelope(Schema):
    task: TaskOut


class TaskPage(Schema):
    tasks: List[TaskOut]
    count: int


class TaskAck(Schema):
    message: str
    task_id: int = Field(..., alias="taskId")


class MessageOut(Schema):
    message: str
