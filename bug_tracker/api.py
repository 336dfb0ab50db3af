"""
FastAPI application for Bug Tracker.
"""

from __future__ import annotations

import importlib.metadata
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .db.base import init_database
from .logging_config import configure_logging
from .routes import ValidationFailed, router

settings = get_settings()
configure_logging(settings)

logger = structlog.get_logger()

DISTRIBUTION_NAME = "bug-tracker"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Bug Tracker", environment=settings.environment)

    try:
        init_database()
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down Bug Tracker")


app = FastAPI(
    title=settings.app_name,
    description="Bug report tracking with validated create, update and delete",
    version=importlib.metadata.version(DISTRIBUTION_NAME),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its outcome."""
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "Request handled",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return response


# Error envelope handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "error": exc.detail}
    if isinstance(exc, ValidationFailed):
        body["details"] = exc.errors
    elif exc.status_code == 404 and exc.detail == "Not Found":
        body["error"] = "Route not found"
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        details.append(f"{location}: {err.get('msg')}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Validation Error", "details": details},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal Server Error"},
    )


# Health and Info Endpoints
@app.get("/api/health", tags=["system"])
async def health() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "OK", "message": "Bug Tracker API is running"}


@app.get("/version", tags=["system"])
def version() -> Dict[str, str]:
    """Return the version of the application."""
    return {"version": importlib.metadata.version(DISTRIBUTION_NAME)}


app.include_router(router)
