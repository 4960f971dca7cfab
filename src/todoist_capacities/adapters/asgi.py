"""FastAPI adapter for the webhook relay.

Every path and method is routed to the relay, which answers 405 for
anything but POST. The body is read as bytes before any JSON decoding so
the signature is checked against exactly what Todoist sent.

Run locally with::

    uvicorn todoist_capacities.adapters.asgi:get_app --factory --port 8000
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from todoist_capacities import __version__
from todoist_capacities.adapters import build_relay
from todoist_capacities.config import RelayConfig
from todoist_capacities.services.capacities import CapacitiesClientProtocol

_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def create_app(
    config: RelayConfig | None = None,
    client: CapacitiesClientProtocol | None = None,
) -> FastAPI:
    """Build the FastAPI app around a single relay instance."""
    relay = build_relay(config, client=client)
    app = FastAPI(
        title="Todoist to Capacities relay",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.api_route("/{path:path}", methods=_METHODS)
    async def webhook(request: Request, path: str) -> JSONResponse:
        """Receive a Todoist webhook on any path."""
        raw_body = await request.body()
        result = await relay.handle(request.method, raw_body, request.headers)
        return JSONResponse(result.body, status_code=result.status_code)

    return app


def get_app() -> FastAPI:
    """App factory for uvicorn's ``--factory`` flag."""
    return create_app()
