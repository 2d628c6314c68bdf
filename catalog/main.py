"""
FastAPI Application

Main entry point for the Product Catalog API.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.config import Settings, get_settings
from catalog.config.logging import configure_logging
from catalog.database.connection import Database
from catalog.serving.api.middleware import RequestLoggingMiddleware
from catalog.serving.api.routes import health_router, products_router

logger = structlog.get_logger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"message": ...}``"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or ill-typed requests are a client error"""
    logger.warning("Invalid request", path=request.url.path, errors=exc.errors())
    return JSONResponse(status_code=400, content={"message": "Invalid request"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings; cached environment settings when omitted

    Returns:
        Configured FastAPI app instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        configure_logging(settings=settings)

        logger.info("Starting Product Catalog API", environment=settings.app_env)

        database = Database(settings.database.url, echo=settings.database.echo)
        try:
            await database.connect()
        except Exception as e:
            logger.error("Database init failed", error=str(e))
            raise
        app.state.database = database

        yield

        logger.info("Shutting down...")
        await database.disconnect()

    app = FastAPI(
        title="Product Catalog API",
        description="Product catalog with full-text search and synthetic data generation",
        version=settings.version,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health_router, tags=["Health"])
    app.include_router(products_router, prefix="/products", tags=["Products"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
