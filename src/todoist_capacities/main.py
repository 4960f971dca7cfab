"""Main entry point for the relay CLI."""

import typer

from todoist_capacities import __version__
from todoist_capacities.commands import webhooks
from todoist_capacities.config import RelayConfig, load_env_file
from todoist_capacities.utils.exit_codes import ERROR_INVALID_ARGS
from todoist_capacities.utils.ui.console import get_console
from todoist_capacities.utils.ui.formatters import format_error, format_info

app = typer.Typer(
    name="todoist-capacities",
    help="Relay Todoist task events into your Capacities daily note",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(webhooks.app, name="webhooks", help="Todoist webhook registration")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]todoist-capacities[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on", min=1),
    env_file: str = typer.Option(
        ".env.local", "--env-file", help="dotenv file to load before reading the environment"
    ),
) -> None:
    """Run the webhook relay as a local HTTP server."""
    import uvicorn

    from todoist_capacities.adapters.asgi import create_app

    load_env_file(env_file)
    config = RelayConfig.from_env()
    missing = config.missing_settings()
    if missing:
        format_error(f"Missing required environment variables: {', '.join(missing)}")
        raise typer.Exit(ERROR_INVALID_ARGS)

    format_info(f"Listening on http://{host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port, log_level=config.log_level.lower())


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
