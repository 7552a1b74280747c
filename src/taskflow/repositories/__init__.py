"""Repository interfaces."""

from .repository import ProjectRepository, TaskRepository

__all__ = ["ProjectRepository", "TaskRepository"]
