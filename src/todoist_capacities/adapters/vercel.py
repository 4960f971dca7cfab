"""Adapter for Vercel's Python runtime (and plain ``http.server``).

Vercel serves the ``handler`` class exported by a module under ``api/``::

    # api/webhook.py
    from todoist_capacities.adapters.vercel import handler
"""

from __future__ import annotations

import asyncio
import json
from http.server import BaseHTTPRequestHandler

from todoist_capacities.adapters import build_relay
from todoist_capacities.relay import RelayResponse, WebhookRelay
from todoist_capacities.utils.logger import get_logger

logger = get_logger(__name__.rsplit(".", 1)[-1])

_INVALID_LENGTH = RelayResponse(400, {"error": "Invalid payload"})
_INTERNAL_ERROR = RelayResponse(500, {"error": "Internal server error"})


class handler(BaseHTTPRequestHandler):  # noqa: N801 - name required by Vercel
    """Read the raw body, run the relay, write its JSON response."""

    relay: WebhookRelay | None = None

    @classmethod
    def get_relay(cls) -> WebhookRelay:
        if cls.relay is None:
            cls.relay = build_relay()
        return cls.relay

    def _content_length(self) -> int | None:
        """Declared body length, or None when the header is malformed."""
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            return None
        return length if length >= 0 else None

    def _dispatch(self) -> None:
        length = self._content_length()
        if length is None:
            logger.warning("Rejected request with invalid Content-Length")
            self._send(_INVALID_LENGTH)
            return

        raw_body = self.rfile.read(length) if length else b""
        try:
            # http.client.HTTPMessage lookups are case-insensitive
            result = asyncio.run(
                self.get_relay().handle(self.command, raw_body, self.headers)
            )
        except Exception:
            logger.exception("Unhandled error while relaying webhook")
            result = _INTERNAL_ERROR
        self._send(result)

    def _send(self, result: RelayResponse) -> None:
        payload = json.dumps(result.body).encode("utf-8")
        self.send_response(result.status_code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_POST = _dispatch
    do_GET = _dispatch
    do_PUT = _dispatch
    do_PATCH = _dispatch
    do_DELETE = _dispatch
