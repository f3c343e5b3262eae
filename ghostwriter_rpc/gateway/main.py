"""
Gateway application factory.

Builds the FastAPI app that fronts the Remote Content API: one RPC facade per
app, the RPC and health routers, and a single exception handler that renders
every classified failure as an APIError body.
"""

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, get_settings
from ..errors import RPCError, get_status_code
from ..identity import TokenProvider
from ..rpc import GhostwriterRPC
from .lifespan import lifespan
from .routers import health_router, rpc_router

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    token_provider: TokenProvider | None = None,
) -> FastAPI:
    """
    Create the gateway application.

    Args:
        settings: Gateway settings (defaults to the cached environment settings).
        transport: Optional httpx transport for the Remote Content API client.
        token_provider: Fallback token provider used when a request carries no bearer token.

    Returns:
        FastAPI: Configured application.

    Raises:
        ConfigurationError: If settings are loaded from an invalid environment.
    """
    settings = settings or get_settings()

    app = FastAPI(title="Ghostwriter Gateway", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.rpc = GhostwriterRPC(
        settings.client_config(),
        token_provider=token_provider,
        transport=transport,
    )

    @app.exception_handler(RPCError)
    async def rpc_error_handler(request: Request, exc: RPCError) -> JSONResponse:
        error = exc.to_api_error(
            request_id=request.headers.get(REQUEST_ID_HEADER),
            service=settings.service_name,
        )
        status_code = get_status_code(error.error_code)
        if status_code >= 500:
            logger.warning(
                "%s %s -> %d %s",
                request.method,
                request.url.path,
                status_code,
                error.error_code,
                extra={"request_id": error.request_id, "status_code": status_code},
            )
        return JSONResponse(status_code=status_code, content=error.model_dump())

    app.include_router(health_router)
    app.include_router(rpc_router)

    return app
