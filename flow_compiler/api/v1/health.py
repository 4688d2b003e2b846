"""
Health check endpoints for the flow compiler service.
"""
from fastapi import APIRouter, status, Response
from pydantic import BaseModel, ConfigDict
from datetime import datetime, timezone
import time

from flow_compiler.config import settings
from flow_compiler.services.flow_service import flow_service
from flow_compiler.utils.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)

# Track service start time
SERVICE_START_TIME = time.time()

# Minimal valid flow compiled by the readiness probe
CANARY_SCREENS = [
    {
        "id": "HEALTH_1",
        "layout": {
            "type": "SingleColumnLayout",
            "children": [
                {"type": "TextInput", "name": "probe_1"},
                {"type": "Footer", "on-click-action": {"name": "complete"}}
            ]
        }
    }
]


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class HealthResponse(BaseModel):
    """Simple health check response model"""
    status: str
    service: str
    version: str
    timestamp: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "service": "Flow Compiler Service",
                "version": "0.1.0",
                "timestamp": "2025-12-16T12:00:00Z"
            }
        }
    )


class LivenessResponse(BaseModel):
    """Liveness probe response"""
    status: str
    timestamp: str


class ReadinessResponse(BaseModel):
    """Readiness probe response"""
    status: str  # "ready", "not_ready"
    ready: bool
    uptime_seconds: float
    message: str
    timestamp: str


# ============================================================================
# BASIC HEALTH CHECK
# ============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Service health check",
    description="Returns the current health status of the flow compiler service"
)
async def health_check():
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        version=settings.app_version,
        timestamp=datetime.now(timezone.utc)
    )


# ============================================================================
# LIVENESS PROBE
# ============================================================================

@router.get(
    "/health/live",
    response_model=LivenessResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Liveness probe",
    description="Liveness probe. No dependency checks."
)
async def liveness_check() -> LivenessResponse:
    # No logging in liveness probe
    return LivenessResponse(
        status="alive",
        timestamp=datetime.now(timezone.utc).isoformat()
    )


# ============================================================================
# READINESS PROBE
# ============================================================================

@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    tags=["Health"],
    summary="Readiness probe",
    description="Compiles a canary flow to confirm the compiler is usable."
)
async def readiness_check(response: Response) -> ReadinessResponse:
    """
    Readiness probe - can the service compile flows?

    Returns 503 if the canary flow does not compile to the expected shape.
    """
    try:
        flow_json = flow_service.compile_flow(CANARY_SCREENS)
        screen = flow_json.screens[0]
        ready = screen.get("id") == "HEALTH_B" and screen.get("terminal") is True
        message = "Canary flow compiled" if ready else "Canary flow compiled to unexpected output"
    except Exception as e:
        logger.error("health.readiness.canary_failed", exc_info=e)
        ready = False
        message = f"Canary flow failed: {type(e).__name__}"

    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status="ready" if ready else "not_ready",
        ready=ready,
        uptime_seconds=round(time.time() - SERVICE_START_TIME, 3),
        message=message,
        timestamp=datetime.now(timezone.utc).isoformat()
    )
