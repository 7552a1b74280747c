"""Project management commands."""

import typer

from taskflow.services.entity_service import get_entity_service
from taskflow.utils.exit_codes import SUCCESS
from taskflow.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Project management commands", no_args_is_help=True)


@app.command("list")
@command_wrapper
async def list_projects(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """List projects with their task counts."""
    service = get_entity_service()

    projects = await service.list_projects_with_counts()
    format_output([p.to_record() for p in projects], output)


@app.command("get")
@command_wrapper
async def get_project(
    project_id: str = typer.Argument(..., help="Project ID"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Get project details."""
    service = get_entity_service()

    project = await service.get_project(project_id)
    format_output(project.to_record(), output)


@app.command("create")
@command_wrapper
async def create_project(
    name: str = typer.Argument(..., help="Project name"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="Project description"
    ),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Create a new project."""
    service = get_entity_service()

    project = await service.create_project({"name": name, "description": description})
    format_success(f"Project created: {project.id}")
    format_output(project.to_record(), output)


@app.command("delete")
@command_wrapper
async def delete_project(
    project_id: str = typer.Argument(..., help="Project ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project and all of its tasks."""
    if not yes and not typer.confirm(
        f"Delete project {project_id} and all of its tasks?"
    ):
        raise typer.Exit(SUCCESS)

    service = get_entity_service()

    removed = await service.delete_project_cascading(project_id)
    format_success(f"Project deleted: {project_id} ({removed} task(s) removed)")
