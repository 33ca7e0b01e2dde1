"""Health check endpoints for the peer server."""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from envoverlay.logger import get_logger

logger = get_logger("envoverlay")


def create_ping_response(service: str, status: str = "ok") -> Dict[str, Any]:
    """Create a standard ping response.

    Example:
        >>> create_ping_response("envoverlay")
        {"status": "ok", "timestamp": "2026-01-01T12:00:00", "service": "envoverlay"}
    """
    return {
        "status": status,
        "timestamp": datetime.now().isoformat(),
        "service": service,
    }


def create_health_response(
    service: str,
    healthy: bool = True,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Create a standard health check response."""
    response = {
        "status": "healthy" if healthy else "unhealthy",
        "service": service,
    }
    if extra:
        response.update(extra)
    return response


def create_health_routes(
    service: str,
    health_check: Optional[Callable[[], bool]] = None,
    extra: Optional[Callable[[], Dict[str, Any]]] = None,
) -> List[Any]:
    """Create /ping and /health routes.

    Args:
        service: Service name for responses
        health_check: Optional callable that returns True if healthy
        extra: Optional callable adding fields to the /health body
    """
    from starlette.responses import JSONResponse
    from starlette.routing import Route

    async def ping(request: Any) -> JSONResponse:
        return JSONResponse(create_ping_response(service))

    async def health(request: Any) -> JSONResponse:
        healthy = True
        if health_check is not None:
            try:
                healthy = health_check()
            except Exception as e:
                # A failing probe is reported as unhealthy, not as a 500
                logger.warning("Health check failed", service=service, error=str(e))
                healthy = False

        response = create_health_response(
            service=service,
            healthy=healthy,
            extra=extra() if extra else None,
        )
        return JSONResponse(response, status_code=200 if healthy else 503)

    return [
        Route("/ping", endpoint=ping, methods=["GET"]),
        Route("/health", endpoint=health, methods=["GET"]),
    ]
