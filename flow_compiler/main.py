"""
Main FastAPI application.

Exposes the flow compiler over HTTP:
1. Stateless validate / compile endpoints (/api/v1/flows/...)
2. Structured logging with correlation tracking
3. Health, liveness and readiness checks
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uuid
import time

from flow_compiler.config import settings
from flow_compiler.core.logger import setup_logging
from flow_compiler.utils.logging import get_logger, log_context

# Import routers
from flow_compiler.api.v1 import health, flows, components

logger = get_logger(__name__)


# ============================================================================
# APPLICATION LIFESPAN
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan with structured logging"""

    setup_logging()

    with log_context(correlation_id=str(uuid.uuid4()), operation="startup"):
        logger.info(
            "app.startup.completed",
            extra={
                "service": settings.app_name,
                "version": settings.app_version,
                "default_json_version": settings.default_json_version,
                "strict_identifiers": settings.strict_identifiers
            }
        )

    yield

    with log_context(correlation_id=str(uuid.uuid4()), operation="shutdown"):
        logger.info("app.shutdown.completed")


# ============================================================================
# FASTAPI APP
# ============================================================================

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Compiles authored multi-screen flows into hosting-platform flow JSON",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# REQUEST/RESPONSE LOGGING MIDDLEWARE
# ============================================================================

@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log all HTTP requests with correlation tracking"""

    correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())

    start_time = time.time()

    with log_context(
        correlation_id=correlation_id,
        endpoint=request.url.path,
        method=request.method
    ):
        logger.info(
            "http.request.received",
            extra={
                "path": request.url.path,
                "method": request.method,
                "client_ip": request.client.host if request.client else None
            }
        )

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000

        logger.performance(
            "http.request.completed",
            duration_ms=duration_ms,
            extra={
                "status_code": response.status_code,
                "path": request.url.path,
                "method": request.method
            }
        )

        response.headers["X-Correlation-ID"] = correlation_id

        return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler with structured logging"""

    logger.error(
        "app.exception.unhandled",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__
        },
        exc_info=exc
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "correlation_id": request.headers.get("X-Correlation-ID", "unknown")
        }
    )


# ============================================================================
# ROUTERS
# ============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    flows.router,
    prefix="/api/v1",
    tags=["Flows"]
)

app.include_router(
    components.router,
    prefix="/api/v1",
    tags=["Components"]
)


# ============================================================================
# ROOT ENDPOINT
# ============================================================================

@app.get("/")
async def root():
    """Root endpoint with service info"""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs": "/docs",
        "health": {
            "liveness": "/health/live",
            "readiness": "/health/ready"
        },
        "api": {
            "validate": "POST /api/v1/flows/validate",
            "compile": "POST /api/v1/flows/compile",
            "components": "GET /api/v1/components"
        }
    }


# ============================================================================
# DEVELOPMENT SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "flow_compiler.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
