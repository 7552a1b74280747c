"""Repository abstraction layer for taskflow.

This module defines the abstract base classes (interfaces) for the project and
task repositories. The entity service depends only on these interfaces, so the
storage backend can change without touching business rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from taskflow.models import (
    Project,
    ProjectCreate,
    Task,
    TaskCreate,
    TaskUpdate,
)


class ProjectRepository(ABC):
    """Abstract base class for project persistence operations."""

    @abstractmethod
    async def list_all(self) -> list[Project]:
        """List all projects in insertion order.

        Returns:
            List of Project objects, without task counts
        """
        raise NotImplementedError(
            "ProjectRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, project_id: str) -> Project:
        """Get a specific project by ID.

        Args:
            project_id: Unique identifier for the project

        Returns:
            Project object

        Raises:
            NotFoundError: If project does not exist
        """
        raise NotImplementedError(
            "ProjectRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, project_data: ProjectCreate | Mapping[str, Any]) -> Project:
        """Create a new project.

        Args:
            project_data: ProjectCreate object or mapping of its fields

        Returns:
            Created Project object with generated ID and timestamp

        Raises:
            ValidationError: If the name is missing or blank
        """
        raise NotImplementedError(
            "ProjectRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, project_id: str) -> bool:
        """Delete a project.

        Does not touch tasks; cascading is the entity service's job.

        Args:
            project_id: Unique identifier for the project

        Returns:
            True if deletion was successful

        Raises:
            NotFoundError: If project does not exist
        """
        raise NotImplementedError(
            "ProjectRepository.delete() must be implemented by adapter"
        )


class TaskRepository(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def list_all(self, project_id: str | None = None) -> list[Task]:
        """List tasks, optionally only those of one project.

        Args:
            project_id: Only return tasks with this project ID

        Returns:
            List of Task objects in insertion order
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def create(self, task_data: TaskCreate | Mapping[str, Any]) -> Task:
        """Create a new task.

        Args:
            task_data: TaskCreate object or mapping of its fields

        Returns:
            Created Task object with generated ID and timestamp

        Raises:
            ValidationError: If project ID or title is missing, or a field is invalid
        """
        raise NotImplementedError(
            "TaskRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update(
        self, task_id: str, updates: TaskUpdate | Mapping[str, Any]
    ) -> Task:
        """Apply a sparse patch to a task.

        Args:
            task_id: Unique identifier for the task
            updates: TaskUpdate object or mapping holding only the fields to change

        Returns:
            Updated Task object

        Raises:
            NotFoundError: If task does not exist
            ValidationError: If update data is invalid
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task.

        Raises:
            NotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_by_project(self, project_id: str) -> int:
        """Delete every task of a project.

        Args:
            project_id: Project whose tasks are removed

        Returns:
            Number of tasks removed (zero is not an error)
        """
        raise NotImplementedError(
            "TaskRepository.delete_by_project() must be implemented by adapter"
        )
