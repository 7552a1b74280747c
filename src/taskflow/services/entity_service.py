"""Entity service - the single entry point for project and task operations.

Every transport (REST, MCP tools, CLI) goes through this class, so the rules
that span both collections live here: task counts on project listings and
the project -> tasks cascade on delete.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Mapping
from typing import Any

from taskflow.errors import NotFoundError
from taskflow.models import (
    Project,
    ProjectCreate,
    ProjectView,
    Task,
    TaskCreate,
    TaskUpdate,
    parse_model,
)
from taskflow.repositories import ProjectRepository, TaskRepository
from taskflow.utils.logger import get_logger


class EntityService:
    """Facade over the project and task repositories.

    Repositories serialize writes per collection. On top of that the service
    holds a cascade lock around ``delete_project_cascading`` and
    ``create_task`` so a task cannot be created for a project between the
    project's removal and the removal of its tasks.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        task_repository: TaskRepository,
    ):
        """Initialize the entity service.

        Args:
            project_repository: ProjectRepository implementation for data access
            task_repository: TaskRepository implementation for data access
        """
        self.projects = project_repository
        self.tasks = task_repository
        self._cascade_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    async def list_projects_with_counts(self) -> list[ProjectView]:
        """List all projects with the number of tasks in each.

        Tasks are loaded once for the whole listing.
        """
        projects = await self.projects.list_all()
        tasks = await self.tasks.list_all()
        counts = Counter(task.project_id for task in tasks)
        return [
            ProjectView(**project.model_dump(), task_count=counts[project.id])
            for project in projects
        ]

    async def get_project(self, project_id: str) -> Project:
        """Get a specific project by ID."""
        return await self.projects.get(project_id)

    async def create_project(
        self, project_data: ProjectCreate | Mapping[str, Any]
    ) -> Project:
        """Create a new project.

        Args:
            project_data: ProjectCreate or mapping with ``name`` and optional ``description``

        Returns:
            Created Project object
        """
        project = await self.projects.create(project_data)
        get_logger().info("project created: %s", project.id)
        return project

    async def delete_project_cascading(self, project_id: str) -> int:
        """Delete a project and every task that references it.

        The project is removed first; if it does not exist nothing else is
        touched.

        Args:
            project_id: Project ID to delete

        Returns:
            Number of tasks removed along with the project

        Raises:
            NotFoundError: If the project does not exist
        """
        async with self._cascade_lock:
            await self.projects.delete(project_id)
            removed = await self.tasks.delete_by_project(project_id)

        get_logger().info(
            "project deleted: %s (%d task(s) removed)", project_id, removed
        )
        return removed

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def list_tasks(self, project_id: str | None = None) -> list[Task]:
        """List tasks, optionally only those of one project."""
        return await self.tasks.list_all(project_id)

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        return await self.tasks.get(task_id)

    async def create_task(self, task_data: TaskCreate | Mapping[str, Any]) -> Task:
        """Create a new task.

        The project ID is not required to exist; an unknown one is logged
        and the task is created anyway.

        Args:
            task_data: TaskCreate or mapping of its fields

        Returns:
            Created Task object
        """
        data = parse_model(TaskCreate, task_data)
        async with self._cascade_lock:
            await self._warn_if_orphan(data.project_id)
            task = await self.tasks.create(data)

        get_logger().info("task created: %s (project %s)", task.id, task.project_id)
        return task

    async def update_task(
        self, task_id: str, updates: TaskUpdate | Mapping[str, Any]
    ) -> Task:
        """Apply a sparse patch to a task.

        Args:
            task_id: Task ID to update
            updates: TaskUpdate or mapping holding only the fields to change

        Returns:
            Updated Task object
        """
        patch = parse_model(TaskUpdate, updates)
        task = await self.tasks.update(task_id, patch)
        changed = ", ".join(sorted(patch.changes())) or "no changes"
        get_logger().info("task updated: %s (%s)", task_id, changed)
        return task

    async def delete_task(self, task_id: str) -> bool:
        """Delete a task."""
        result = await self.tasks.delete(task_id)
        get_logger().info("task deleted: %s", task_id)
        return result

    async def _warn_if_orphan(self, project_id: str) -> None:
        try:
            await self.projects.get(project_id)
        except NotFoundError:
            get_logger().warning(
                "creating task for unknown project %s", project_id
            )


def get_entity_service(config=None) -> EntityService:
    """Factory function to get an EntityService backed by the configured store.

    Args:
        config: Optional Config; defaults to the effective configuration
            of the default profile
    """
    from taskflow.adapters.jsonfile import (
        JsonCollectionStore,
        JsonProjectRepository,
        JsonTaskRepository,
    )
    from taskflow.config import get_config_manager

    if config is None:
        config = get_config_manager().effective_config()

    store = JsonCollectionStore(config.store.data_dir)
    store.ensure_location()
    return EntityService(JsonProjectRepository(store), JsonTaskRepository(store))
