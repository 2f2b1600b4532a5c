"""Request building and response parsing shared by the HTTP clients."""

from __future__ import annotations

import json

from lineflux.errors import NoDatabaseError
from lineflux.transport.models import DEFAULT_USER_AGENT, ClientConfig, WriteOptions

VERSION_HEADER = "X-Influxdb-Version"


def build_url(base: str, path: str) -> str:
    """Join a base URL and an absolute path without doubling the slash."""
    return base.rstrip("/") + path


def write_params(config: ClientConfig, options: WriteOptions | None) -> dict[str, str]:
    """Build the query parameters for a write.

    Values in ``options`` take precedence over the client configuration.
    Precision is always nanoseconds.

    Raises:
        NoDatabaseError: If neither options nor config name a database.
    """
    options = options or WriteOptions()
    database = options.database or config.database
    if not database:
        raise NoDatabaseError()

    params = {"db": database}
    retention_policy = options.retention_policy or config.retention_policy
    if retention_policy:
        params["rp"] = retention_policy
    params["precision"] = "ns"
    return params


def ping_headers(config: ClientConfig) -> dict[str, str]:
    return {"User-Agent": config.user_agent or DEFAULT_USER_AGENT}


def write_headers(config: ClientConfig) -> dict[str, str]:
    return {
        "Accept": "application/json",
        "Content-Type": config.protocol.content_type,
        **ping_headers(config),
    }


def request_timeout(config: ClientConfig, options: WriteOptions | None) -> float:
    if options is not None and options.timeout is not None:
        return options.timeout
    return config.timeout


def error_message(body: str) -> str:
    """Extract the error text from a failed write response.

    InfluxDB answers with ``{"error": "..."}``; anything else is returned as
    stripped text.
    """
    try:
        decoded = json.loads(body)
    except ValueError:
        return body.strip()
    if isinstance(decoded, dict) and isinstance(decoded.get("error"), str):
        return decoded["error"]
    return body.strip()
