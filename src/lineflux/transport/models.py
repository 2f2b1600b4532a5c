"""Configuration models for the transports.

Configuration is always passed explicitly: there is no module-level default
client or URL that can be changed at runtime.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Self

from lineflux.protocol.base import PointProtocol
from lineflux.protocol.line import DEFAULT_PROTOCOL

DEFAULT_URL = "http://localhost:8086"
DEFAULT_USER_AGENT = "lineflux"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Configuration for the HTTP clients.

    Attributes:
        url: Base URL of the InfluxDB HTTP service (default: http://localhost:8086).
        database: Default database for writes. If unset, every write must name one.
        retention_policy: Default retention policy. If unset, the server decides.
        user_agent: User-Agent header sent with every request (default: "lineflux").
        timeout: Request timeout in seconds (default: 30.0).
        protocol: Wire format used to encode points (default: line protocol v1).
    """

    url: str = DEFAULT_URL
    database: str | None = None
    retention_policy: str | None = None
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0
    protocol: PointProtocol = DEFAULT_PROTOCOL

    @classmethod
    def from_env(cls) -> Self:
        """Build a configuration from LINEFLUX_* environment variables.

        Unset variables fall back to the same defaults as the constructor.
        """
        return cls(
            url=os.getenv("LINEFLUX_URL", DEFAULT_URL),
            database=os.getenv("LINEFLUX_DATABASE") or None,
            retention_policy=os.getenv("LINEFLUX_RETENTION_POLICY") or None,
            user_agent=os.getenv("LINEFLUX_USER_AGENT", DEFAULT_USER_AGENT),
            timeout=float(os.getenv("LINEFLUX_TIMEOUT", "30.0")),
        )


@dataclass(frozen=True, slots=True)
class WriteOptions:
    """Per-write settings that override the client configuration.

    Attributes:
        database: Database to write to.
        retention_policy: Retention policy to write to.
        timeout: Deadline in seconds for the request made by this write.
    """

    database: str | None = None
    retention_policy: str | None = None
    timeout: float | None = None

    def with_database(self, database: str) -> WriteOptions:
        return dataclasses.replace(self, database=database)

    def with_retention_policy(self, retention_policy: str) -> WriteOptions:
        return dataclasses.replace(self, retention_policy=retention_policy)


@dataclass(frozen=True, slots=True)
class ServerInfo:
    """Server information obtained from a ping.

    Attributes:
        version: Version reported by InfluxDB, a semantic version or "unknown".
    """

    version: str
