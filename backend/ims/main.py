"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ims.config import get_settings
from ims.domain.entities import ComponentType
from ims.infrastructure.database import Base, engine
from ims.infrastructure.dependencies import get_catalog_service
from ims.infrastructure.logging.log_config import setup_logging
from ims.presentation.api.exception_handlers import register_exception_handlers
from ims.presentation.api.v1.router import router as v1_router

logger = logging.getLogger(__name__)


def _report_catalogs() -> None:
    """Log which catalogs load; a missing one only disables its options."""
    catalog = get_catalog_service()
    missing = [ct.value for ct in ComponentType if not catalog.is_available(ct)]
    if missing:
        logger.warning(
            "Catalogs unavailable for %s; manual entry only", ", ".join(missing)
        )
    else:
        logger.info("All component catalogs loaded")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging, create tables, check catalogs."""
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    _report_catalogs()

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount versioned API routes under /api
    app.include_router(v1_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ims.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
