"""Project and task data models."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from taskflow.errors import ValidationError

TaskStatus = Literal["pending", "in-progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]

DEFAULT_STATUS: TaskStatus = "pending"
DEFAULT_PRIORITY: TaskPriority = "medium"


class CamelModel(BaseModel):
    """Base model using camelCase field names on the wire and on disk."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict[str, Any]:
        """Serialize to the JSON record shape (camelCase keys, no null fields)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Project(CamelModel):
    """Project model representing a stored project.

    Attributes:
        id: Unique identifier for the project
        name: Project name
        description: Free-form description, may be empty
        created_at: Creation timestamp, set once by the store
    """

    id: str
    name: str
    description: str = ""
    created_at: datetime


class ProjectView(Project):
    """Project enriched with the number of tasks referencing it."""

    task_count: int = Field(default=0, ge=0)


class ProjectCreate(CamelModel):
    """Model for creating a new project.

    Attributes:
        name: Project name (required, not blank)
        description: Optional description, defaults to ""
    """

    name: str
    description: str = ""

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name is required")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, value: Any) -> Any:
        return "" if value is None else value


class Task(CamelModel):
    """Task model representing a stored task.

    Attributes:
        id: Unique identifier for the task
        project_id: Id of the owning project (not checked for existence)
        title: Task title
        description: Free-form description, may be empty
        status: One of pending, in-progress, completed
        priority: One of low, medium, high
        due_date: Optional due date
        created_at: Creation timestamp, set once by the store
    """

    id: str
    project_id: str
    title: str
    description: str = ""
    status: TaskStatus = DEFAULT_STATUS
    priority: TaskPriority = DEFAULT_PRIORITY
    due_date: date | None = None
    created_at: datetime

    @field_validator("due_date", mode="before")
    @classmethod
    def _empty_due_date(cls, value: Any) -> Any:
        return _blank_to_none(value)


class TaskCreate(CamelModel):
    """Model for creating a new task.

    Null or omitted optional fields fall back to their defaults.

    Attributes:
        project_id: Owning project id (required, not blank)
        title: Task title (required, not blank)
        description: Optional description, defaults to ""
        status: Defaults to "pending"
        priority: Defaults to "medium"
        due_date: Optional due date (ISO format)
    """

    project_id: str
    title: str
    description: str = ""
    status: TaskStatus = DEFAULT_STATUS
    priority: TaskPriority = DEFAULT_PRIORITY
    due_date: date | None = None

    @field_validator("project_id", "title")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return _blank_to_none(value) or DEFAULT_STATUS

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value: Any) -> Any:
        return _blank_to_none(value) or DEFAULT_PRIORITY

    @field_validator("due_date", mode="before")
    @classmethod
    def _empty_due_date(cls, value: Any) -> Any:
        return _blank_to_none(value)


class TaskUpdate(CamelModel):
    """Sparse patch for an existing task.

    Only fields present in the input are applied; presence is tracked by
    ``model_fields_set``, so an explicit empty description is a change while
    an omitted one is not. ``due_date`` may be set to null to clear it.
    Immutable fields (id, projectId, createdAt) are ignored if sent.
    """

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None

    @field_validator("title", "description", "status", "priority")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("cannot be null")
        return value

    @field_validator("title")
    @classmethod
    def _require_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("due_date", mode="before")
    @classmethod
    def _empty_due_date(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were explicitly supplied."""
        return self.model_dump(exclude_unset=True)


ModelT = TypeVar("ModelT", bound=BaseModel)


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "body"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def parse_model(model_cls: type[ModelT], data: Any) -> ModelT:
    """Build ``model_cls`` from a mapping or pass an instance through.

    Args:
        model_cls: Target pydantic model class
        data: Model instance, mapping of fields (camelCase or snake_case), or None

    Returns:
        Validated model instance

    Raises:
        ValidationError: If the data does not satisfy the model
    """
    if isinstance(data, model_cls):
        return data
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValidationError(f"Expected an object, got {type(data).__name__}")
    try:
        return model_cls.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc
