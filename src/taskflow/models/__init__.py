"""Taskflow domain models.

Pydantic models for the two entity kinds and the payloads used to create
and update them.
"""

from .core import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    Project,
    ProjectCreate,
    ProjectView,
    Task,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
    parse_model,
)

__all__ = [
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectView",
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskStatus",
    "TaskPriority",
    "DEFAULT_STATUS",
    "DEFAULT_PRIORITY",
    "parse_model",
]
