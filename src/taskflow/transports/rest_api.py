"""Resource-oriented HTTP interface over the entity service.

Routes mirror the resource API of the web client:

    GET    /api/projects[?id=]           list (with taskCount) or one project
    POST   /api/projects                 create
    DELETE /api/projects?id=             delete with cascade
    GET    /api/tasks[?id=|?projectId=]  list, filter or one task
    POST   /api/tasks                    create
    PUT    /api/tasks                    sparse update, body carries ``id``
    DELETE /api/tasks?id=                delete

Errors come back as ``{"error": message}`` with 404 for unknown ids, 400 for
invalid input and 500 for anything else.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from taskflow import __version__
from taskflow.errors import NotFoundError, ValidationError
from taskflow.services.entity_service import EntityService, get_entity_service
from taskflow.utils.logger import get_logger

router = APIRouter(prefix="/api", tags=["Entities"])


def get_service(request: Request) -> EntityService:
    """Dependency returning the entity service bound to the app."""
    service = getattr(request.app.state, "entity_service", None)
    if service is None:
        service = request.app.state.entity_service = get_entity_service()
    return service


def _to_json(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.to_record()
    if isinstance(value, list):
        return [_to_json(item) for item in value]
    return value


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _respond(
    failure: str, call: Awaitable[Any], status_code: int = status.HTTP_200_OK
) -> JSONResponse:
    """Await a service call and translate its outcome into a response."""
    try:
        result = await call
    except NotFoundError as e:
        return _error(status.HTTP_404_NOT_FOUND, e.message)
    except ValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message)
    except Exception:
        get_logger().exception("request failed: %s", failure)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, failure)
    return JSONResponse(_to_json(result), status_code=status_code)


async def _read_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as e:
        raise ValidationError("Request body must be valid JSON") from e


def _blank_to_none(value: str | None) -> str | None:
    return value if value else None


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@router.get("/projects")
async def get_projects(
    project_id: str | None = Query(None, alias="id", description="Project ID"),
    service: EntityService = Depends(get_service),
):
    """List projects with task counts, or fetch one project by ID."""
    project_id = _blank_to_none(project_id)
    if project_id:
        return await _respond("Failed to fetch project", service.get_project(project_id))
    return await _respond(
        "Failed to fetch projects", service.list_projects_with_counts()
    )


@router.post("/projects")
async def create_project(
    request: Request,
    service: EntityService = Depends(get_service),
):
    """Create a project from ``{name, description?}``."""

    async def create() -> Any:
        return await service.create_project(await _read_body(request))

    return await _respond(
        "Failed to create project", create(), status_code=status.HTTP_201_CREATED
    )


@router.delete("/projects")
async def delete_project(
    project_id: str | None = Query(None, alias="id", description="Project ID"),
    service: EntityService = Depends(get_service),
):
    """Delete a project and all of its tasks."""
    if not project_id:
        return _error(status.HTTP_400_BAD_REQUEST, "ID is required")

    async def delete() -> dict[str, Any]:
        await service.delete_project_cascading(project_id)
        return {"success": True}

    return await _respond("Failed to delete project", delete())


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


@router.get("/tasks")
async def get_tasks(
    task_id: str | None = Query(None, alias="id", description="Task ID"),
    project_id: str | None = Query(
        None, alias="projectId", description="Filter by project ID"
    ),
    service: EntityService = Depends(get_service),
):
    """List tasks (optionally for one project), or fetch one task by ID."""
    task_id = _blank_to_none(task_id)
    if task_id:
        return await _respond("Failed to fetch task", service.get_task(task_id))
    return await _respond(
        "Failed to fetch tasks", service.list_tasks(_blank_to_none(project_id))
    )


@router.post("/tasks")
async def create_task(
    request: Request,
    service: EntityService = Depends(get_service),
):
    """Create a task from ``{projectId, title, description?, status?, priority?, dueDate?}``."""

    async def create() -> Any:
        return await service.create_task(await _read_body(request))

    return await _respond(
        "Failed to create task", create(), status_code=status.HTTP_201_CREATED
    )


@router.put("/tasks")
async def update_task(
    request: Request,
    service: EntityService = Depends(get_service),
):
    """Apply the fields present in the body to the task named by ``id``."""

    async def update() -> Any:
        body = await _read_body(request)
        if not isinstance(body, dict) or not body.get("id"):
            raise ValidationError("ID is required")
        patch = {key: value for key, value in body.items() if key != "id"}
        return await service.update_task(body["id"], patch)

    return await _respond("Failed to update task", update())


@router.delete("/tasks")
async def delete_task(
    task_id: str | None = Query(None, alias="id", description="Task ID"),
    service: EntityService = Depends(get_service),
):
    """Delete a task."""
    if not task_id:
        return _error(status.HTTP_400_BAD_REQUEST, "ID is required")

    async def delete() -> dict[str, Any]:
        await service.delete_task(task_id)
        return {"success": True}

    return await _respond("Failed to delete task", delete())


def create_app(service: EntityService | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        service: Entity service to serve; built from configuration on first
            request when omitted
    """
    app = FastAPI(
        title="Taskflow API",
        description="Projects and tasks over a shared entity store",
        version=__version__,
    )
    app.state.entity_service = service
    app.include_router(router)
    return app
