"""Transports that deliver encoded points to InfluxDB."""

from lineflux.transport.async_http import AsyncClient
from lineflux.transport.models import ClientConfig, ServerInfo, WriteOptions
from lineflux.transport.sync_http import Client
from lineflux.transport.udp import UDPClient

__all__ = [
    "AsyncClient",
    "Client",
    "ClientConfig",
    "ServerInfo",
    "UDPClient",
    "WriteOptions",
]
