"""Error taxonomy shared by the store, the repositories and the transports.

Repositories raise these, the entity service lets them through untouched,
and each transport decides how they look to its caller (HTTP status,
tool text, exit code).
"""

from __future__ import annotations


class TaskflowError(Exception):
    """Base class for all taskflow errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskflowError):
    """A required field is missing or a field value is not acceptable."""


class NotFoundError(TaskflowError):
    """The referenced id does not exist in its collection.

    Attributes:
        entity: Entity kind ("Project" or "Task")
        entity_id: The id that was looked up
    """

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(TaskflowError):
    """Durable storage could not be read or written."""
