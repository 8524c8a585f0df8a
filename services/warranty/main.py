"""
Warranty Tracker Service - Main Application
===========================================

FastAPI application exposing the warranty registry.

Version: 0.1.0
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Annotated, Any, AsyncGenerator

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from services.warranty.dependencies import get_registry
from services.warranty.errors import ErrorKind, WarrantyError
from services.warranty.registry import WarrantyRegistry
from services.warranty.routes import owners_router, warranties_router
from shared import __version__
from shared.config import settings
from shared.logging import clear_context, get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse


setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="warranty-tracker",
)

logger = get_logger(__name__)

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_DATE_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FUTURE_DATED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORAGE_UNINITIALIZED: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_TRANSFER: status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info(
        "warranty_service_starting",
        environment=settings.environment.value,
        port=settings.ports.warranty,
        ledger_mode=settings.ledger.mode.value,
    )

    registry = get_registry()
    logger.info("warranty_registry_ready", warranties=registry.count())

    yield

    logger.info("warranty_service_shutting_down")


app = FastAPI(
    title="Warranty Tracker",
    description="Ledger-backed product warranty registry",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_tags=[
        {"name": "warranties", "description": "Warranty registration and lifecycle"},
        {"name": "owners", "description": "Owner-indexed warranty lookup"},
        {"name": "health", "description": "Service health checks"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list or ["*"],
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def reset_log_context(request: Request, call_next: Any) -> Any:
    """Keep per-request log context from leaking across requests."""
    clear_context()
    try:
        return await call_next(request)
    finally:
        clear_context()


app.include_router(warranties_router, prefix="/api/v1")
app.include_router(owners_router, prefix="/api/v1")


# ============================================================================
# Error Handlers
# ============================================================================


@app.exception_handler(WarrantyError)
async def warranty_error_handler(request: Request, exc: WarrantyError) -> JSONResponse:
    """Map registry failures to HTTP status codes."""
    status_code = ERROR_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST)
    body = ErrorResponse(
        error=exc.message,
        error_code=exc.kind.value,
        details={"warranty_id": exc.warranty_id} if exc.warranty_id is not None else None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    body = ErrorResponse(error=str(exc.detail), error_code=str(exc.status_code))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json"),
        headers=exc.headers,
    )


# ============================================================================
# Health
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check(
    registry: Annotated[WarrantyRegistry, Depends(get_registry)],
) -> HealthResponse:
    """Service health check endpoint."""
    return HealthResponse(
        service="warranty-tracker",
        version=__version__,
        components={
            "ledger": registry.storage.health_check(),
            "registry": {
                "status": "healthy",
                "warranties": registry.count(),
                "issued_ids": len(registry.all_ids()),
            },
        },
    )


@app.get("/", tags=["health"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "Warranty Tracker",
        "description": "Ledger-backed product warranty registry",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.warranty.main:app",
        host="0.0.0.0",
        port=settings.ports.warranty,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
