"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from memelaunch.api.routes import coins, health
from memelaunch.config.logging import configure_logging
from memelaunch.config.settings import get_settings
from memelaunch.core.exceptions import (
    ContractAlreadyExist,
    LiquidityVenueError,
    MemeLaunchError,
    NotFound,
    Unauthorized,
)
from memelaunch.core.launchpad import get_launchpad

log = structlog.get_logger()

# Domain errors not listed here are client errors
ERROR_STATUS: dict[type[MemeLaunchError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    ContractAlreadyExist: status.HTTP_409_CONFLICT,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    LiquidityVenueError: status.HTTP_502_BAD_GATEWAY,
}


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    configure_logging()
    log.info("application_starting")

    get_launchpad()

    log.info("application_started")

    yield

    log.info("application_stopped")


async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error as {"error": kind, "detail": message}."""
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            status_code = code
            break

    log.info(
        "request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=status_code,
    )

    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Meme coin factory with presale and liquidity bootstrap",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_exception_handler(MemeLaunchError, handle_domain_error)

    # Routes
    app.include_router(health.router, prefix="/api")
    app.include_router(coins.router, prefix="/api")

    return app
