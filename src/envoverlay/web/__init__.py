"""Peer server for envoverlay.

Serves named remote calls (such as the host environment snapshot) over HTTP
for ``HttpExecutor`` clients, plus /ping and /health endpoints.
"""

from envoverlay.web.app import create_peer_app, default_calls
from envoverlay.web.health import (
    create_health_response,
    create_health_routes,
    create_ping_response,
)

__all__ = [
    "create_peer_app",
    "default_calls",
    "create_health_routes",
    "create_ping_response",
    "create_health_response",
]
