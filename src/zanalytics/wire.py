"""Encoding helpers for the Zoho Analytics v2 wire format.

Every structured parameter travels in a single ``CONFIG`` query parameter holding
URL-encoded JSON. Responses are wrapped in an envelope whose ``data`` member holds
either the payload or the error detail.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, unquote

CONFIG_PARAM = "CONFIG"
EXPIRED_TOKEN_CODE = "8535"

_SENSITIVE_HEADERS = {"authorization", "cookie"}


def encode_config(config: Mapping[str, Any] | None) -> str | None:
    """Return the URL-encoded JSON form of ``config`` or ``None`` when empty."""

    if not config:
        return None
    return quote(json.dumps(dict(config), separators=(",", ":")), safe="")


def decode_config(encoded: str) -> dict[str, Any]:
    """Inverse of :func:`encode_config`."""

    decoded = json.loads(unquote(encoded))
    if not isinstance(decoded, dict):
        raise ValueError("CONFIG parameter does not contain a JSON object")
    return decoded


def build_url(base_url: str, path: str, config: Mapping[str, Any] | None = None) -> str:
    if path.startswith(("http://", "https://")):
        url = path
    else:
        url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    encoded = encode_config(config)
    if encoded is None:
        return url
    return f"{url}?{CONFIG_PARAM}={encoded}"


def unwrap_envelope(payload: Any) -> Any:
    if isinstance(payload, Mapping):
        return payload.get("data")
    return None


def error_from_envelope(payload: Any) -> tuple[str | None, str]:
    """Extract ``(errorCode, errorMessage)`` from a failure envelope."""

    if not isinstance(payload, Mapping):
        return None, "Unexpected error response"
    detail = payload.get("data")
    code: str | None = None
    message: str | None = None
    if isinstance(detail, Mapping):
        raw_code = detail.get("errorCode")
        if raw_code is not None:
            code = str(raw_code)
        raw_message = detail.get("errorMessage")
        if raw_message:
            message = str(raw_message)
    if message is None:
        summary = payload.get("summary")
        message = str(summary) if summary else "Request failed"
    return code, message


def is_expired_token_code(code: str | None) -> bool:
    return code is not None and code.strip() == EXPIRED_TOKEN_CODE


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    sanitized: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in _SENSITIVE_HEADERS:
            sanitized[key] = "<redacted>"
        else:
            sanitized[key] = value
    return sanitized
