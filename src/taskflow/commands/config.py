"""Configuration management commands.

These act on the profile selected with the root ``--profile`` option and
show stored values, without environment overrides.
"""

import typer
from rich.console import Console

from taskflow.config import get_config_manager
from taskflow.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands", no_args_is_help=True)
console = Console()


@app.command("view")
@command_wrapper
def view_config(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """View the stored configuration of the current profile."""
    config_manager = get_config_manager()
    format_output(config_manager.config.model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., server.port)"),
) -> None:
    """Get a configuration value."""
    value = get_config_manager().get(key)
    console.print("-" if value is None else value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., server.port)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value and save it to the profile."""
    config_manager = get_config_manager()
    config_manager.set(key, value)
    format_success(f"Configuration '{key}' set to '{config_manager.get(key)}'")
