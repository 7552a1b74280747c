"""JSON-file storage adapter."""

from .collection_store import JsonCollectionStore
from .project_repository import PROJECTS_COLLECTION, JsonProjectRepository
from .task_repository import TASKS_COLLECTION, JsonTaskRepository

__all__ = [
    "JsonCollectionStore",
    "JsonProjectRepository",
    "JsonTaskRepository",
    "PROJECTS_COLLECTION",
    "TASKS_COLLECTION",
]
