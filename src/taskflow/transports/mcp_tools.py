"""MCP server exposing the entity service as tools.

Each tool maps to one entity service operation. Tools always answer with
text: JSON for listings, a confirmation sentence for writes, and
``Error: <message>`` when the operation fails.
"""

from __future__ import annotations

import json
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from taskflow.errors import TaskflowError
from taskflow.models import TaskPriority, TaskStatus
from taskflow.services.entity_service import EntityService, get_entity_service
from taskflow.utils.logger import get_logger

SERVER_NAME = "taskflow-mcp"

INSTRUCTIONS = """\
Taskflow stores projects and their tasks. Tasks belong to a project through \
project_id; deleting a project also deletes its tasks. Task status is one of \
pending, in-progress, completed and priority one of low, medium, high. \
update_task only changes the fields you pass.\
"""


def _dump(value: Any) -> str:
    if isinstance(value, list):
        value = [item.to_record() for item in value]
    elif hasattr(value, "to_record"):
        value = value.to_record()
    return json.dumps(value, indent=2)


class TaskflowTools:
    """Text-returning tool handlers bound to an entity service."""

    def __init__(self, service: EntityService):
        self.service = service

    async def _run(self, tool: str, call) -> str:
        try:
            return await call()
        except TaskflowError as e:
            return f"Error: {e.message}"
        except Exception as e:
            get_logger().exception("tool %s failed", tool)
            return f"Error: {e}"

    async def list_projects(self) -> str:
        async def call() -> str:
            return _dump(await self.service.list_projects_with_counts())

        return await self._run("list_projects", call)

    async def create_project(self, name: str, description: str | None = None) -> str:
        async def call() -> str:
            project = await self.service.create_project(
                {"name": name, "description": description}
            )
            return f"Project created successfully: {_dump(project)}"

        return await self._run("create_project", call)

    async def delete_project(self, project_id: str) -> str:
        async def call() -> str:
            removed = await self.service.delete_project_cascading(project_id)
            return (
                f"Project deleted successfully (ID: {project_id}, "
                f"{removed} task(s) removed)"
            )

        return await self._run("delete_project", call)

    async def list_tasks(self, project_id: str | None = None) -> str:
        async def call() -> str:
            return _dump(await self.service.list_tasks(project_id or None))

        return await self._run("list_tasks", call)

    async def create_task(
        self,
        project_id: str,
        title: str,
        description: str | None = None,
        status: str | None = None,
        priority: str | None = None,
        due_date: str | None = None,
    ) -> str:
        async def call() -> str:
            task = await self.service.create_task(
                {
                    "project_id": project_id,
                    "title": title,
                    "description": description,
                    "status": status,
                    "priority": priority,
                    "due_date": due_date,
                }
            )
            return f"Task created successfully: {_dump(task)}"

        return await self._run("create_task", call)

    async def update_task(
        self,
        task_id: str,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
        priority: str | None = None,
        due_date: str | None = None,
    ) -> str:
        # Arguments left out by the caller arrive as None and are not part of the patch
        supplied = {
            "title": title,
            "description": description,
            "status": status,
            "priority": priority,
            "due_date": due_date,
        }
        patch = {key: value for key, value in supplied.items() if value is not None}

        async def call() -> str:
            task = await self.service.update_task(task_id, patch)
            return f"Task updated successfully: {_dump(task)}"

        return await self._run("update_task", call)

    async def delete_task(self, task_id: str) -> str:
        async def call() -> str:
            await self.service.delete_task(task_id)
            return f"Task deleted successfully (ID: {task_id})"

        return await self._run("delete_task", call)


def create_mcp_server(service: EntityService | None = None) -> FastMCP:
    """Build the FastMCP server with one tool per entity service operation."""
    tools = TaskflowTools(service or get_entity_service())
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.tool(description="List all projects with their task counts")
    async def list_projects() -> str:
        return await tools.list_projects()

    @mcp.tool(description="Create a new project")
    async def create_project(
        name: Annotated[str, Field(description="Project name")],
        description: Annotated[
            str | None, Field(description="Project description")
        ] = None,
    ) -> str:
        return await tools.create_project(name, description)

    @mcp.tool(description="Delete a project and all of its tasks")
    async def delete_project(
        project_id: Annotated[str, Field(description="Project ID")],
    ) -> str:
        return await tools.delete_project(project_id)

    @mcp.tool(description="List tasks, optionally filtered by project")
    async def list_tasks(
        project_id: Annotated[
            str | None, Field(description="Filter by project ID (optional)")
        ] = None,
    ) -> str:
        return await tools.list_tasks(project_id)

    @mcp.tool(description="Create a new task")
    async def create_task(
        project_id: Annotated[str, Field(description="Project ID")],
        title: Annotated[str, Field(description="Task title")],
        description: Annotated[str | None, Field(description="Task description")] = None,
        status: Annotated[TaskStatus | None, Field(description="Task status")] = None,
        priority: Annotated[
            TaskPriority | None, Field(description="Task priority")
        ] = None,
        due_date: Annotated[
            str | None, Field(description="Due date (ISO format)")
        ] = None,
    ) -> str:
        return await tools.create_task(
            project_id, title, description, status, priority, due_date
        )

    @mcp.tool(description="Update an existing task; only the given fields change")
    async def update_task(
        task_id: Annotated[str, Field(description="Task ID")],
        title: Annotated[str | None, Field(description="Task title")] = None,
        description: Annotated[str | None, Field(description="Task description")] = None,
        status: Annotated[TaskStatus | None, Field(description="Task status")] = None,
        priority: Annotated[
            TaskPriority | None, Field(description="Task priority")
        ] = None,
        due_date: Annotated[
            str | None, Field(description="Due date (ISO format)")
        ] = None,
    ) -> str:
        return await tools.update_task(
            task_id, title, description, status, priority, due_date
        )

    @mcp.tool(description="Delete a task")
    async def delete_task(
        task_id: Annotated[str, Field(description="Task ID")],
    ) -> str:
        return await tools.delete_task(task_id)

    return mcp
