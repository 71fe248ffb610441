"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bookshelf import __version__
from bookshelf.api import api_router
from bookshelf.config import get_settings
from bookshelf.db import create_database
from bookshelf.exceptions import ConstraintError, NetworkError, NotFoundError, StorageError
from bookshelf.utils.http_client import close_all_clients
from bookshelf.utils.logging import get_logger, setup_logging

settings = get_settings()
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    database = create_database(settings)
    await database.create_all()
    app.state.database = database
    logger.info(f"Database initialized ({settings.database_url})")

    yield

    # Shutdown
    await close_all_clients()
    await database.dispose()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    lifespan=lifespan,
)

# Routers
app.include_router(api_router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path}: not found: {exc}")
    return JSONResponse(status_code=404, content={"detail": str(exc) or "Not found"})


@app.exception_handler(NetworkError)
async def network_error_handler(request: Request, exc: NetworkError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: lookup failed: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc) or "Lookup failed"})


@app.exception_handler(ConstraintError)
async def constraint_error_handler(request: Request, exc: ConstraintError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: constraint violation: {exc}")
    return JSONResponse(status_code=409, content={"detail": str(exc) or "Constraint violation"})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path}: storage failure: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc) or "Storage failure"})


# Store app start time for uptime tracking
_app_start_time = datetime.now(UTC)


@app.get("/health", include_in_schema=True, tags=["monitoring"])
async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint.

    Returns:
        JSONResponse with status, uptime, version and the database check.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime_seconds": (datetime.now(UTC) - _app_start_time).total_seconds(),
        "version": __version__,
        "checks": {},
    }

    database = getattr(request.app.state, "database", None)
    try:
        if database is None:
            raise StorageError("Database not initialized")
        await database.ping()
        health_status["checks"]["database"] = {"status": "healthy"}
    except StorageError:
        health_status["checks"]["database"] = {"status": "unhealthy"}
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(content=health_status, status_code=status_code)


def run() -> None:
    """Serve the API with uvicorn (the ``bookshelf`` console script)."""
    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        log_level=(settings.log_level or "info").lower(),
    )
