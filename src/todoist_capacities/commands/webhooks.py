"""Webhook registration commands (one-time setup, not the request path)."""

from __future__ import annotations

import typer

from todoist_capacities.config import RegistrationConfig, load_env_file
from todoist_capacities.services.todoist import DEFAULT_EVENTS, TodoistWebhookClient
from todoist_capacities.utils.exit_codes import ERROR_INVALID_ARGS
from todoist_capacities.utils.ui.formatters import format_info, format_json, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Register and inspect Todoist webhooks", no_args_is_help=True)


def _load_registration(env_file: str) -> RegistrationConfig:
    load_env_file(env_file)
    return RegistrationConfig.from_env()


def _require_credentials(config: RegistrationConfig) -> tuple[str, str]:
    if not config.todoist_client_id:
        raise AppError("TODOIST_CLIENT_ID is not set", ERROR_INVALID_ARGS)
    if not config.todoist_client_secret:
        raise AppError("TODOIST_CLIENT_SECRET is not set", ERROR_INVALID_ARGS)
    return config.todoist_client_id, config.todoist_client_secret


@app.command("register")
@command_wrapper
async def register(
    url: str | None = typer.Option(
        None,
        "--url",
        help="Deployed relay URL, e.g. https://your-app.vercel.app/api/webhook",
        envvar="WEBHOOK_URL",
    ),
    env_file: str = typer.Option(
        ".env.local", "--env-file", help="dotenv file to load before reading the environment"
    ),
) -> None:
    """Subscribe the relay URL to Todoist item events.

    Requires TODOIST_CLIENT_ID and TODOIST_CLIENT_SECRET (from the
    environment or the dotenv file) and a webhook URL.

    Examples:
        todoist-capacities webhooks register --url https://your-app.vercel.app/api/webhook
        WEBHOOK_URL=https://your-app.vercel.app/api/webhook todoist-capacities webhooks register
    """
    config = _load_registration(env_file)
    client_id, client_secret = _require_credentials(config)
    webhook_url = url or config.webhook_url
    if not webhook_url:
        raise AppError(
            "WEBHOOK_URL is not set. Set it to your deployed URL + /api/webhook",
            ERROR_INVALID_ARGS,
        )

    format_info(f"Registering webhook for {webhook_url}")
    format_info(f"Events: {', '.join(DEFAULT_EVENTS)}")

    client = TodoistWebhookClient(client_id, client_secret)
    subscription = await client.register(webhook_url)

    format_success(f"Webhook registered (id: {subscription.id or 'unknown'})")
    if subscription.events:
        format_info(f"Subscribed events: {', '.join(subscription.events)}")


@app.command("list")
@command_wrapper
async def list_webhooks(
    env_file: str = typer.Option(
        ".env.local", "--env-file", help="dotenv file to load before reading the environment"
    ),
) -> None:
    """Show the webhooks already registered for this Todoist app."""
    config = _load_registration(env_file)
    client_id, client_secret = _require_credentials(config)

    client = TodoistWebhookClient(client_id, client_secret)
    format_json(await client.list_webhooks())
