import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from key_registry.config import Settings, configure_logging, get_settings
from key_registry.db import build_engine, build_session_factory
from key_registry.errors import InvalidRequestError, ServiceError
from key_registry.store import ApiKeyStore
from key_registry.api.routes.records import router as records_router
from key_registry.api.routes.system import router as system_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    configure_logging(settings)

    logger.info("Starting key-registry API")

    engine = None
    if getattr(app.state, "store", None) is None:
        engine = build_engine(settings)
        app.state.session_factory = build_session_factory(engine)
        app.state.store = ApiKeyStore(app.state.session_factory)

    try:
        yield
    finally:
        if engine is not None:
            await engine.dispose()
        logger.info("Shutting down key-registry API")


def _format_validation_errors(exc: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )


def create_app(
    settings: Settings | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Key Registry",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()

    # An injected session factory replaces the engine the lifespan would build
    if session_factory is not None:
        app.state.session_factory = session_factory
        app.state.store = ApiKeyStore(session_factory)

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error("%s %s: %s", request.method, request.url.path, exc.details)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = InvalidRequestError("Invalid request body", _format_validation_errors(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    app.include_router(system_router)
    app.include_router(records_router)

    return app


app = create_app()


def main():
    """Entry point for key-registry-api script."""
    settings = get_settings()
    uvicorn.run(
        "key_registry.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )
