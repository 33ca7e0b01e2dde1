"""Starlette application serving remote calls to HttpExecutor clients."""

from typing import Any, Callable, Dict, Mapping, Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from envoverlay.exceptions import UnknownCallError
from envoverlay.logger import get_logger
from envoverlay.remote import GetEnvironment
from envoverlay.web.health import create_health_routes

logger = get_logger("envoverlay")


def default_calls() -> Dict[str, Callable[[], Any]]:
    """The calls every peer server answers."""
    fn = GetEnvironment()
    return {fn.name: fn}


def create_peer_app(
    calls: Optional[Mapping[str, Callable[[], Any]]] = None,
    service: str = "envoverlay",
    health_check: Optional[Callable[[], bool]] = None,
    debug: bool = False,
) -> Starlette:
    """Create the peer server application.

    Args:
        calls: Registry of zero-argument callables by name (default: host-environment)
        service: Service name reported by /ping and /health
        health_check: Optional probe; /health answers 503 when it returns False or raises
        debug: Enable debug mode

    Example:
        import uvicorn
        from envoverlay.web import create_peer_app

        uvicorn.run(create_peer_app(), host="0.0.0.0", port=8765)
    """
    registry = dict(calls) if calls is not None else default_calls()

    async def run_call(request: Request) -> JSONResponse:
        name = request.path_params["name"]
        fn = registry.get(name)
        if fn is None:
            error = UnknownCallError(name, known=list(registry))
            logger.warning("Unknown remote call", call=name)
            return JSONResponse(error.to_dict(), status_code=404)

        result = fn()
        logger.info("Served remote call", call=name, client=_client_host(request))
        return JSONResponse({"call": name, "result": result})

    routes = [
        Route("/calls/{name}", endpoint=run_call, methods=["POST"]),
    ] + create_health_routes(
        service,
        health_check=health_check,
        extra=lambda: {"calls": sorted(registry)},
    )

    return Starlette(debug=debug, routes=routes)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"
