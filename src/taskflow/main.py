"""Main entry point for the taskflow CLI."""

import typer
from rich.console import Console

from taskflow import __version__
from taskflow.commands import config as config_commands
from taskflow.commands import projects, tasks
from taskflow.config import get_config_manager
from taskflow.utils.logger import configure_logging, get_logger

app = typer.Typer(
    name="taskflow",
    help="Projects and tasks, served over REST and MCP",
    no_args_is_help=True,
)

console = Console()

app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config_commands.app, name="config", help="Configuration management commands")


@app.callback()
def main_callback(
    profile: str = typer.Option("default", "--profile", help="Configuration profile"),
) -> None:
    """Load configuration and apply the configured log level."""
    configure_logging(get_config_manager(profile).effective_config().logging)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]taskflow[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Bind port"),
) -> None:
    """Serve the REST API."""
    import uvicorn

    from taskflow.services.entity_service import get_entity_service
    from taskflow.transports.rest_api import create_app

    config = get_config_manager().effective_config()
    host = host or config.server.host
    port = port or config.server.port

    get_logger().info("REST API starting on %s:%d", host, port)
    uvicorn.run(create_app(get_entity_service(config)), host=host, port=port)


@app.command()
def mcp() -> None:
    """Serve the MCP tools over stdio."""
    from taskflow.services.entity_service import get_entity_service
    from taskflow.transports.mcp_tools import create_mcp_server

    config = get_config_manager().effective_config()
    get_logger().info("MCP server starting on stdio (data: %s)", config.store.data_dir)
    create_mcp_server(get_entity_service(config)).run()


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
