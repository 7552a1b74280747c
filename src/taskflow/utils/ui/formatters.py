"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()

STATUS_ICONS = {
    "pending": "○",
    "in-progress": "◐",
    "completed": "●",
}

PRIORITY_STYLES = {
    "high": "bold red",
    "medium": "yellow",
    "low": "dim",
}


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    elif output_format == "quiet":
        format_quiet(data)
    else:
        # Default to pretty
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    # Union of keys in first-seen order; dueDate is absent on some tasks
    columns: list[str] = []
    for item in items:
        for key in item:
            if key not in columns:
                columns.append(key)

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col)

    for item in items:
        table.add_row(*[_cell(item.get(col)) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key, _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_pretty(data: Any) -> None:
    """Format data in pretty format with colors and icons."""
    if not data:
        console.print("[yellow]No items found[/yellow]")
        return

    if isinstance(data, list):
        first_item = data[0]
        if isinstance(first_item, dict) and "title" in first_item:
            format_tasks_pretty(data)
        elif isinstance(first_item, dict) and "name" in first_item:
            format_projects_pretty(data)
        else:
            format_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_projects_pretty(projects: list[dict]) -> None:
    """Format projects in pretty format."""
    header = Text()
    header.append("📁 Projects ", style="bold cyan")
    header.append(f"({len(projects)})", style="dim")
    console.print(header)
    console.print()

    for project in projects:
        line = Text()
        line.append(f"  {project.get('name', 'Untitled')}", style="bold")
        if "taskCount" in project:
            line.append(f"  [{project['taskCount']} tasks]", style="dim")
        line.append(f"  #{project.get('id', '')}", style="dim cyan")
        console.print(line)
        if project.get("description"):
            console.print(f"    {project['description']}", style="dim")


def format_tasks_pretty(tasks: list[dict]) -> None:
    """Format tasks in pretty format."""
    completed = [t for t in tasks if t.get("status") == "completed"]

    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(tasks) - len(completed)} open, {len(completed)} completed)", style="dim")
    console.print(header)
    console.print()

    for task in tasks:
        status = task.get("status", "pending")
        priority = task.get("priority", "medium")
        line = Text()
        line.append(f"  {STATUS_ICONS.get(status, '?')} ")
        title_style = "dim strike" if status == "completed" else "bold"
        line.append(task.get("title", ""), style=title_style)
        line.append(f"  {priority}", style=PRIORITY_STYLES.get(priority, ""))
        if task.get("dueDate"):
            line.append(f"  due {task['dueDate']}", style="magenta")
        line.append(f"  #{task.get('id', '')}", style="dim cyan")
        console.print(line)


def format_quiet(data: Any) -> None:
    """Format output in quiet mode (IDs only)."""
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict) and "id" in item:
                print(item["id"])
    elif isinstance(data, dict) and "id" in data:
        print(data["id"])
