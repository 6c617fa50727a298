"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adherence_engine.api.routes import router
from adherence_engine.app_logging import configure_logging
from adherence_engine.config import parse_allowed_origins
from adherence_engine.containers import AppContainer
from adherence_engine.domain.errors import (
    EngineError,
    InvalidConfiguration,
    InvalidQuantity,
    StorageUnavailable,
    UnknownItem,
    UserNotFound,
)

_STATUS_BY_ERROR: dict[type[EngineError], int] = {
    InvalidConfiguration: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidQuantity: status.HTTP_422_UNPROCESSABLE_ENTITY,
    UnknownItem: status.HTTP_422_UNPROCESSABLE_ENTITY,
    UserNotFound: status.HTTP_404_NOT_FOUND,
    StorageUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allow_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.exception_handler(EngineError)
    async def engine_error_handler(request: Request, exc: EngineError) -> JSONResponse:
        status_code = _status_for(exc)
        if isinstance(exc, StorageUnavailable):
            logger.error(
                "Storage unavailable on %s %s: %s",
                request.method,
                request.url.path,
                exc,
            )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.kind, "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: EngineError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
