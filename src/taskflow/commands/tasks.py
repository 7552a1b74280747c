"""Task management commands."""

from typing import Any

import typer

from taskflow.services.entity_service import get_entity_service
from taskflow.utils.exit_codes import ERROR_INVALID_ARGS, SUCCESS
from taskflow.utils.ui.formatters import format_error, format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Task management commands", no_args_is_help=True)


@app.command("list")
@command_wrapper
async def list_tasks(
    project_id: str | None = typer.Option(
        None, "--project", "-p", help="Only tasks of this project"
    ),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """List tasks."""
    service = get_entity_service()

    tasks = await service.list_tasks(project_id)
    format_output([t.to_record() for t in tasks], output)


@app.command("get")
@command_wrapper
async def get_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Get task details."""
    service = get_entity_service()

    task = await service.get_task(task_id)
    format_output(task.to_record(), output)


@app.command("create")
@command_wrapper
async def create_task(
    project_id: str = typer.Argument(..., help="Project ID"),
    title: str = typer.Argument(..., help="Task title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="Task description"
    ),
    status: str | None = typer.Option(
        None, "--status", "-s", help="pending, in-progress or completed"
    ),
    priority: str | None = typer.Option(
        None, "--priority", help="low, medium or high"
    ),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Create a new task."""
    service = get_entity_service()

    task = await service.create_task(
        {
            "project_id": project_id,
            "title": title,
            "description": description,
            "status": status,
            "priority": priority,
            "due_date": due,
        }
    )
    format_success(f"Task created: {task.id}")
    format_output(task.to_record(), output)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", help="New title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New description (may be empty)"
    ),
    status: str | None = typer.Option(
        None, "--status", "-s", help="pending, in-progress or completed"
    ),
    priority: str | None = typer.Option(
        None, "--priority", help="low, medium or high"
    ),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Update only the given fields of a task."""
    patch: dict[str, Any] = {
        key: value
        for key, value in {
            "title": title,
            "description": description,
            "status": status,
            "priority": priority,
            "due_date": due,
        }.items()
        if value is not None
    }
    if clear_due:
        patch["due_date"] = None

    if not patch:
        format_error("No updates specified")
        raise typer.Exit(ERROR_INVALID_ARGS)

    service = get_entity_service()

    task = await service.update_task(task_id, patch)
    format_success(f"Task updated: {task_id}")
    format_output(task.to_record(), output)


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    if not yes and not typer.confirm(f"Delete task {task_id}?"):
        raise typer.Exit(SUCCESS)

    service = get_entity_service()

    await service.delete_task(task_id)
    format_success(f"Task deleted: {task_id}")
