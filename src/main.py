"""
Main entry point for the cite-references service.

Creates the FastAPI application instance for uvicorn.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.error_handlers import register_error_handlers
from src.api.routes.health import router as health_router
from src.api.routes.health import set_service_start_time
from src.api.routes.references import router as references_router
from src.api.routes.references import set_lookup_endpoint, set_page_directory
from src.clients.factory import create_page_directory, create_reference_store
from src.config.feature_flags import get_feature_flags
from src.core.config import get_settings
from src.core.logging import configure_logging, get_logger
from src.references.keys import ReferenceKeyFormatter
from src.references.lookup import ReferenceLookupEndpoint


# Configure structured logging on module load
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    On startup: Build the reference store, page directory and lookup endpoint
    On shutdown: Close the reference store
    """
    settings = get_settings()
    flags = get_feature_flags()
    logger.info(
        "Starting cite-references service",
        port=settings.port,
        backend=settings.reference_store_backend,
        reference_storage_enabled=flags.reference_storage_enabled,
    )

    set_service_start_time()

    store = create_reference_store(settings)
    formatter = ReferenceKeyFormatter(
        prefix=settings.reference_link_prefix,
        suffix=settings.reference_link_suffix,
        encoding=settings.id_encoding,
    )
    set_lookup_endpoint(ReferenceLookupEndpoint(config=flags, store=store, formatter=formatter))
    set_page_directory(create_page_directory(settings))
    app.state.reference_store = store

    yield

    logger.info("Shutting down cite-references service")
    await store.close()
    set_lookup_endpoint(None)
    set_page_directory(None)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers:
    - references_router: GET /v1/query/references
    - health_router: GET /health, /health/ready, /health/live
    """
    app = FastAPI(
        title="Cite References Service",
        description="Stored footnote and citation data for pages, paginated by page",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(references_router)
    app.include_router(health_router)

    return app


# Create application instance
app = create_app()
