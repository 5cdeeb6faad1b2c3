"""
Health check endpoints.
"""
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from datetime import datetime

from bedflow.config import settings

router = APIRouter(
    prefix="/health",
    tags=["health"],
    responses={
        200: {"description": "System healthy"},
        503: {"description": "System not ready"}
    }
)


@router.get(
    "",
    summary="General Health Check",
    description="Checks the general status of the application",
    response_model=None
)
async def health_check() -> JSONResponse:
    """
    Basic health check.
    Returns 200 while the application is running.
    """
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "version": settings.APP_VERSION,
            "environment": settings.APP_ENV
        }
    )


@router.get(
    "/liveness",
    summary="Liveness Probe",
    description="Checks that the application is alive",
    response_model=None
)
async def liveness_probe() -> JSONResponse:
    """Liveness probe for orchestrators."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "alive",
            "timestamp": datetime.now().isoformat()
        }
    )


@router.get(
    "/readiness",
    summary="Readiness Probe",
    description="Checks that the allocation state is ready to serve traffic",
    response_model=None
)
async def readiness_probe(request: Request) -> JSONResponse:
    """
    Readiness probe.

    Ready once the startup hook has built the allocation state and the
    WebSocket relay.
    """
    state = getattr(request.app.state, "bed_state", None)
    manager = getattr(request.app.state, "connection_manager", None)
    ready = state is not None and manager is not None

    content = {
        "status": "ready" if ready else "not_ready",
        "timestamp": datetime.now().isoformat(),
    }
    if ready:
        content["components"] = {
            "beds": state.beds.count(),
            "waiting_patients": state.queue.count(),
            "event_subscribers": state.broadcaster.subscriber_count,
            "websocket_connections": manager.connection_count,
        }

    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=content
    )
