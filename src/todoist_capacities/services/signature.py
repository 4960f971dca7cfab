"""Todoist webhook signature verification.

Todoist signs every webhook with HMAC-SHA256 over the raw request body,
keyed by the app's client secret, and sends the base64 digest in the
``X-Todoist-Hmac-SHA256`` header.

Security contract:
- The digest is always computed over the untouched request bytes; never
  re-serialize a parsed body before verifying.
- Comparison uses hmac.compare_digest() (constant time).
- Verification never raises: anything malformed is simply "not valid".
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from collections.abc import Mapping
from typing import Any

SIGNATURE_HEADER = "X-Todoist-Hmac-SHA256"

# Header casings seen in practice, checked in this order
_HEADER_CANDIDATES = (
    "x-todoist-hmac-sha256",
    "X-Todoist-Hmac-SHA256",
    "X-TODOIST-HMAC-SHA256",
)


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Return the base64 HMAC-SHA256 of *raw_body* keyed by *secret*."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def _decode(value: str) -> bytes | None:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None


def verify_signature(raw_body: bytes, signature: str | None, secret: str) -> bool:
    """Check a Todoist webhook signature.

    Args:
        raw_body: Request body exactly as received.
        signature: Value of the signature header, or None if it was absent.
        secret: Todoist app client secret.

    Returns:
        True only if *signature* is the valid digest of *raw_body*.
    """
    if not signature:
        return False

    provided = _decode(signature.strip())
    if provided is None:
        return False
    expected = base64.b64decode(compute_signature(raw_body, secret))

    if len(provided) != len(expected):
        return False
    return hmac.compare_digest(provided, expected)


def get_signature_from_headers(headers: Mapping[str, Any]) -> str | None:
    """Extract the signature header value, tolerating common casings.

    Multi-valued headers (lists or tuples) yield their first value.
    """
    value = None
    for name in _HEADER_CANDIDATES:
        value = headers.get(name)
        if value:
            break

    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value or None
