import logging
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from solrbridge.application.api.v1.errors import map_error
from solrbridge.application.api.v1.routes import health, search
from solrbridge.application.di import create_container
from solrbridge.config import Config, configure_logging
from solrbridge.domain.shared.error import SolrBridgeError
from solrbridge.infrastructure.persistence.migrate import run_migrations
from solrbridge.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    yield
    await container.close()


def create_app(
    config: Config | None = None,
    container: AsyncContainer | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Run with ``uvicorn --factory solrbridge.application.api.rest.app:create_app``.
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting %s v%s", config.server.name, config.server.version)

    if config.database.auto_migrate:
        run_migrations(config.database.url)

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Trace incoming requests and the outgoing Solr calls
    logfire.instrument_httpx()
    logfire.instrument_fastapi(app_instance)

    container = container or create_container(config)
    setup_dishka(container, app_instance)

    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(search.router, prefix="/api/v1")

    # Maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(SolrBridgeError)
    async def solrbridge_error_handler(request: Request, exc: SolrBridgeError):
        http_exc = map_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
        )

    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app_instance
